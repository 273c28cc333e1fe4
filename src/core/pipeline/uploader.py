"""Streamed upload of compressed images to object storage."""

from collections.abc import Callable

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.models.image import UploadedImage
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.storage_urls import build_object_key
from core.utils.time import unix_millis

ProgressCallback = Callable[[float], None]

logger = Logger(UTC=True)


class UploadProgress:
    """Turns per-chunk byte counts into a non-decreasing percentage."""

    def __init__(self, total_bytes: int, on_progress: ProgressCallback | None = None) -> None:
        self.total_bytes = total_bytes
        self.bytes_transferred = 0
        self.last_reported: float | None = None
        self._on_progress = on_progress

    def __call__(self, bytes_amount: int) -> None:
        self.bytes_transferred = min(self.bytes_transferred + bytes_amount, self.total_bytes)
        self._report(self.bytes_transferred / self.total_bytes * 100 if self.total_bytes else 100.0)

    def complete(self) -> None:
        if self.last_reported is None or self.last_reported < 100.0:
            self._report(100.0)

    def _report(self, percent: float) -> None:
        # Retried parts can re-send bytes; never go backwards
        if self.last_reported is not None and percent < self.last_reported:
            return

        self.last_reported = percent
        if self._on_progress is not None:
            self._on_progress(percent)


class ImageUploader:
    """Writes compressed image bytes and resolves their download URL."""

    def __init__(
        self,
        storage: ImageStorageRepository | None = None,
        clock: Callable[[], int] = unix_millis,
    ) -> None:
        self.storage = storage or S3ImageStorage()
        self._clock = clock

    def upload(
        self,
        *,
        file_data: bytes,
        file_name: str,
        mime_type: str,
        upload_path: str,
        on_progress: ProgressCallback | None = None,
    ) -> UploadedImage:
        """Upload image bytes under `<upload_path>/<timestamp>_<file name>`.

        The upload flow is:
        1. Build a fresh object key
        2. Stream the bytes, reporting progress in percent
        3. Mint the download URL

        If step 3 fails the object stays in storage; nothing removes it.

        Raises:
            TransportError: If the write fails
            UrlResolutionError: If the write succeeded but no URL was obtained
        """
        key = build_object_key(upload_path, file_name, self._clock())
        progress = UploadProgress(len(file_data), on_progress)

        logger.debug(
            "Starting image upload",
            extra={"key": key, "upload_path": upload_path, "size": len(file_data)},
        )

        self.storage.write_image(
            key=key,
            file_data=file_data,
            mime_type=mime_type,
            on_bytes_sent=progress,
        )
        progress.complete()

        download_url = self.storage.get_download_url(key=key)

        logger.info("Image uploaded", extra={"key": key, "upload_path": upload_path})
        return UploadedImage(object_key=key, download_url=download_url)
