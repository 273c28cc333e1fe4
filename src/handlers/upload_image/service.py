"""Business logic for image upload operations.

This module turns an API upload request into a pipeline run: it decodes
the payload, settles the MIME type, runs validation, compression and
upload, and finally releases the image being replaced, if any.
"""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field, StrictBool

from core.models.errors import MIMETypeError, ValidationError
from core.models.image import ImageFile, UploadedImage
from core.pipeline.image_pipeline import ImagePipeline
from core.pipeline.uploader import ProgressCallback
from core.utils.constants import MESSAGE_UNSUPPORTED_TYPE
from core.utils.mime import detect_mime_type

logger = Logger(UTC=True)


class UploadOutcome(BaseModel):
    """Result of an upload request."""

    uploaded: UploadedImage = Field(..., description="Stored image")
    replaced_image_released: StrictBool = Field(
        ..., description="Whether the replaced image was deleted"
    )


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - File decoding
    - MIME type resolution
    - The validate / compress / upload pipeline
    - Release of the image a record used before
    """

    def __init__(self, pipeline: ImagePipeline | None = None) -> None:
        """Initialize the upload service with its pipeline."""
        self.pipeline = pipeline or ImagePipeline()

    @staticmethod
    def decode_file(encoded: str) -> bytes:
        """Decode base64-encoded image data.

        Raises:
            ValidationError: If decoding fails
        """
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.exception("Failed to decode base64 image data")
            raise ValidationError(
                message="Invalid image data",
                details={"encoding": "base64"},
            ) from exc

    @staticmethod
    def resolve_mime_type(file_data: bytes, declared: str | None) -> str:
        """Return the declared MIME type, or sniff it from magic bytes.

        Raises:
            MIMETypeError: If no type is declared and none can be detected
        """
        if declared:
            return declared

        try:
            return detect_mime_type(file_data)
        except ValueError as exc:
            raise MIMETypeError(
                message=MESSAGE_UNSUPPORTED_TYPE,
                details={"mime_type": None},
            ) from exc

    @staticmethod
    def _progress_logger(file_name: str) -> ProgressCallback:
        def log_progress(percent: float) -> None:
            logger.debug(
                "Upload progress",
                extra={"file_name": file_name, "progress": round(percent, 1)},
            )

        return log_progress

    def upload_image(
        self,
        *,
        file_name: str,
        file_data: bytes,
        upload_path: str,
        mime_type: str | None = None,
        previous_image_url: str | None = None,
    ) -> UploadOutcome:
        """Upload an image and release the one it replaces.

        Raises:
            ValidationError: If the file type or size is rejected
            DecodeError: If the payload is not an image
            EncodeError: If re-encoding fails
            TransportError: If the storage write fails
            UrlResolutionError: If the download URL cannot be obtained
        """
        logger.debug(
            "Starting image upload",
            extra={"file_name": file_name, "upload_path": upload_path},
        )

        image = ImageFile(
            name=file_name,
            mime_type=self.resolve_mime_type(file_data, mime_type),
            data=file_data,
        )

        uploaded = self.pipeline.upload_image(
            image,
            upload_path,
            on_progress=self._progress_logger(file_name),
        )

        # The old asset goes only once the new one is safely stored
        released = self.pipeline.release_replaced_image(
            previous_image_url,
            uploaded.download_url,
        )

        logger.info(
            "Image uploaded successfully",
            extra={"object_key": uploaded.object_key, "replaced_image_released": released},
        )
        return UploadOutcome(uploaded=uploaded, replaced_image_released=released)
