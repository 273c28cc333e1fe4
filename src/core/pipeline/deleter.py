"""Best-effort removal of stored images by download URL."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.storage_urls import parse_object_key

logger = Logger(UTC=True)


class ImageDeleter:
    """Deletes the object behind a previously issued download URL.

    Deletion accompanies catalog updates and must never block them:
    every storage failure is logged and dropped. Only a URL that carries
    no object key is reported to the caller.
    """

    def __init__(self, storage: ImageStorageRepository | None = None) -> None:
        self.storage = storage or S3ImageStorage()

    def delete(self, download_url: str) -> None:
        """Delete the object addressed by `download_url`.

        Raises:
            InvalidUrlError: If no object key can be parsed from the URL
        """
        key = parse_object_key(download_url)

        try:
            self.storage.remove_image(key=key)
        except Exception:
            logger.warning("Image deletion failed, ignoring", extra={"key": key}, exc_info=True)
