"""Image ingestion pipeline: validate, compress, upload, and later delete.

A single storage client is built once and shared by the uploader and the
deleter. Each call runs its stages in order on the caller's thread; calls
share nothing else and need no coordination.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.models.errors import InvalidUrlError
from core.models.image import ImageFile, UploadedImage
from core.pipeline.compressor import compress_image
from core.pipeline.deleter import ImageDeleter
from core.pipeline.uploader import ImageUploader, ProgressCallback
from core.pipeline.validator import ensure_valid_image
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import DEFAULT_MAX_WIDTH, DEFAULT_QUALITY
from core.utils.storage_urls import is_storage_url

logger = Logger(UTC=True)


class ImagePipeline:
    """Entry point used by the upload and delete handlers."""

    def __init__(
        self,
        storage: ImageStorageRepository | None = None,
        *,
        max_width: int = DEFAULT_MAX_WIDTH,
        quality: float = DEFAULT_QUALITY,
    ) -> None:
        self.storage = storage or S3ImageStorage()
        self.uploader = ImageUploader(self.storage)
        self.deleter = ImageDeleter(self.storage)
        self.max_width = max_width
        self.quality = quality

    def upload_image(
        self,
        image: ImageFile,
        upload_path: str,
        on_progress: ProgressCallback | None = None,
    ) -> UploadedImage:
        """Validate, compress and upload an image file.

        Raises:
            ValidationError: If the file type or size is rejected
            DecodeError: If the payload is not an image
            EncodeError: If re-encoding fails
            TransportError: If the write fails
            UrlResolutionError: If the download URL cannot be obtained
        """
        logger.debug(
            "Validating image",
            extra={"file_name": image.name, "mime_type": image.mime_type, "size": image.size},
        )
        ensure_valid_image(image.mime_type, image.size)

        compressed = compress_image(
            image.data,
            image.mime_type,
            max_width=self.max_width,
            quality=self.quality,
        )

        uploaded = self.uploader.upload(
            file_data=compressed.data,
            file_name=image.name,
            mime_type=compressed.mime_type,
            upload_path=upload_path,
            on_progress=on_progress,
        )

        return uploaded.model_copy(update={"width": compressed.width, "height": compressed.height})

    def delete_image(self, download_url: str) -> None:
        """Delete a stored image by URL; storage failures are swallowed.

        Raises:
            InvalidUrlError: If the URL carries no object key
        """
        self.deleter.delete(download_url)

    def release_replaced_image(self, previous_url: str | None, new_url: str | None) -> bool:
        """Delete the previous asset of a record whose image URL changed.

        Only URLs served by this backend are deleted. An empty `new_url`
        means the image was removed from the record.

        Returns:
            True if a deletion was attempted
        """
        if not previous_url or previous_url == new_url or not is_storage_url(previous_url):
            return False

        try:
            self.deleter.delete(previous_url)
        except InvalidUrlError:
            logger.warning("Replaced image URL is not deletable", extra={"url": previous_url})

        return True
