"""Shared image models passed between pipeline stages."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictBytes, StrictInt, StrictStr


class ImageFile(BaseModel):
    """Candidate file as received from the image picker."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., description="Original file name")
    mime_type: StrictStr = Field(..., description="Declared MIME type (e.g. image/jpeg)")
    data: StrictBytes = Field(..., repr=False, description="Raw file bytes")

    @property
    def size(self) -> int:
        return len(self.data)


class ValidationResult(BaseModel):
    """Outcome of checking a candidate file against the upload policy."""

    valid: StrictBool = Field(..., description="Whether the file may be uploaded")
    reason: StrictStr | None = Field(None, description="Human-readable rejection reason")


class CompressedImage(BaseModel):
    """Re-encoded image produced by the compressor."""

    data: StrictBytes = Field(..., repr=False, description="Encoded image bytes")
    mime_type: StrictStr = Field(..., description="MIME type of the encoded bytes")
    width: StrictInt = Field(..., description="Output raster width in pixels")
    height: StrictInt = Field(..., description="Output raster height in pixels")

    @property
    def size(self) -> int:
        return len(self.data)


class UploadedImage(BaseModel):
    """Asset handed over to the storage backend."""

    object_key: StrictStr = Field(..., description="Storage key of the object")
    download_url: StrictStr = Field(..., description="Durable public download URL")
    width: StrictInt | None = Field(None, description="Stored raster width")
    height: StrictInt | None = Field(None, description="Stored raster height")
