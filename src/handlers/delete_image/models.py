"""Pydantic models for delete image request/response."""

from pydantic import BaseModel, ConfigDict, Field


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request."""

    model_config = ConfigDict(str_strip_whitespace=True)
    image_url: str = Field(
        ...,
        min_length=1,
        max_length=2048,
        description="Download URL of the image to delete",
    )


class DeleteImageResponse(BaseModel):
    """Response model for an image deletion request."""

    image_url: str = Field(..., description="URL that was processed")
    file_name: str = Field(..., description="File name parsed from the URL")
    deleted: bool = Field(..., description="Whether a storage deletion was issued")
    processed_at: str = Field(..., description="Processing timestamp")
    message: str = Field(..., description="Result message")
