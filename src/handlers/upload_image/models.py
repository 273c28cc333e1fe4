"""Pydantic models for image upload request/response."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import UPLOAD_PATH_PATTERN

logger = Logger(UTC=True)


class ImageUploadRequest(BaseModel):
    """Validation model for image upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: str = Field(..., description="Base64 encoded image file")
    file_name: str = Field(
        ..., min_length=1, max_length=255, description="Original file name"
    )
    mime_type: str | None = Field(
        None,
        max_length=100,
        description="Declared MIME type; sniffed from the bytes when omitted",
    )
    upload_path: str = Field(
        ...,
        min_length=1,
        max_length=200,
        pattern=UPLOAD_PATH_PATTERN,
        description="Destination prefix (e.g. 'categories' or 'items')",
    )
    previous_image_url: str | None = Field(
        None,
        max_length=2048,
        description="Image URL being replaced; its asset is released after upload",
    )

    @field_validator("mime_type")
    @classmethod
    def normalize_mime_type(cls, value: str | None) -> str | None:
        if not value:
            return None
        return value.lower()

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly
        - must have non-zero size

        Type and size policy is enforced by the pipeline validator.
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            logger.error("File validation error: Decoded file is empty")
            raise ValueError("Decoded file is empty")

        return value


class ImageUploadResponse(BaseModel):
    """Response model for successful image upload."""

    download_url: str = Field(..., description="Durable public download URL")
    object_key: str = Field(..., description="Storage object key")
    file_name: str = Field(..., description="Original file name")
    width: int | None = Field(None, description="Stored image width")
    height: int | None = Field(None, description="Stored image height")
    replaced_image_released: bool = Field(
        False, description="Whether the previous image was deleted"
    )
    message: str = Field(..., description="Success message")
