"""S3-backed implementation of ImageStorageRepository."""

import io
import uuid

from aws_lambda_powertools import Logger
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    DeletionError,
    TransportError,
    UrlResolutionError,
)
from core.repositories.storage_repository import BytesSentCallback, ImageStorageRepository
from core.utils.constants import DOWNLOAD_TOKEN_METADATA_KEY
from core.utils.storage_urls import build_download_url

logger = Logger(UTC=True)


class S3ImageStorage(ImageStorageRepository):
    """Image storage implementation backed by Amazon S3.

    Each object is written with a random download token in its user
    metadata. Minting a download URL reads the token back, so a URL can
    only be produced for an object that actually exists.
    """

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def write_image(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        on_bytes_sent: BytesSentCallback | None = None,
    ) -> None:
        """Stream image bytes to S3 under the given key."""
        logger.debug(
            "Writing image",
            extra={"key": key, "size": len(file_data), "mime_type": mime_type},
        )

        try:
            self._s3.upload_fileobj(
                key=key,
                fileobj=io.BytesIO(file_data),
                content_type=mime_type,
                metadata={DOWNLOAD_TOKEN_METADATA_KEY: uuid.uuid4().hex},
                callback=on_bytes_sent,
            )
            logger.info("Image written successfully", extra={"key": key})

        except (ClientError, S3UploadFailedError) as exc:
            logger.error("S3 upload failed", extra={"key": key, "error": str(exc)})
            raise TransportError(details={"key": key}) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading image")
            raise TransportError(details={"key": key}) from exc

    def get_download_url(self, *, key: str) -> str:
        """Read the object's download token and build its public URL."""
        logger.debug("Resolving download URL", extra={"key": key})

        try:
            response = self._s3.head_object(key=key)
            token = (response.get("Metadata") or {}).get(DOWNLOAD_TOKEN_METADATA_KEY)

            if not token:
                logger.error("Stored image has no download token", extra={"key": key})
                raise UrlResolutionError(details={"key": key})

            url = build_download_url(key, token, bucket=self._s3.bucket)
            logger.debug("Download URL resolved", extra={"key": key})
            return url

        except UrlResolutionError:
            raise

        except ClientError as exc:
            logger.error("S3 head_object failed", extra={"key": key, "error": str(exc)})
            raise UrlResolutionError(details={"key": key}) from exc

        except Exception as exc:
            logger.exception("Unexpected error resolving download URL")
            raise UrlResolutionError(details={"key": key}) from exc

    def remove_image(self, *, key: str) -> None:
        """Delete an image object from S3."""
        logger.debug("Deleting image", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Image deleted successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise DeletionError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting image")
            raise DeletionError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc
