"""
Image compression.

Handles:
- Decoding the uploaded payload with Pillow
- Downsampling to a maximum width (aspect ratio preserved, never upscaled)
- Re-encoding in the original format at a fixed quality
"""

import io
from typing import Any

from aws_lambda_powertools import Logger
from PIL import Image, ImageOps, UnidentifiedImageError

from core.models.errors import DecodeError, EncodeError
from core.models.image import CompressedImage
from core.utils.constants import (
    DEFAULT_MAX_WIDTH,
    DEFAULT_QUALITY,
    ENCODED_MIME_TYPES,
    PILLOW_FORMATS,
    format_file_size,
)

logger = Logger(UTC=True)


def scaled_dimensions(width: int, height: int, max_width: int) -> tuple[int, int]:
    """Return output dimensions for a raster of `width` x `height`.

    Wider rasters are scaled to exactly `max_width`; the height is the
    proportional value rounded half up, computed in integers.
    """
    if width <= max_width:
        return width, height

    new_height = (2 * height * max_width + width) // (2 * width)
    return max_width, max(new_height, 1)


def _flatten_for_jpeg(img: Any) -> Any:
    """JPEG has no alpha channel: paste transparent images onto white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background

    if img.mode != "RGB":
        return img.convert("RGB")

    return img


def compress_image(
    file_data: bytes,
    mime_type: str,
    max_width: int = DEFAULT_MAX_WIDTH,
    quality: float = DEFAULT_QUALITY,
) -> CompressedImage:
    """
    Decode, downsample and re-encode an image.

    Re-encoding always happens, even when the image is already narrow
    enough, so every stored asset carries the target quality.

    Args:
        file_data: Raw image bytes
        mime_type: MIME type of the payload; selects the output encoder
        max_width: Maximum output width in pixels
        quality: Encoder quality factor in (0, 1]

    Returns:
        CompressedImage with the encoded bytes and output dimensions

    Raises:
        DecodeError: If the payload is not a readable image
        EncodeError: If encoding fails or produces no bytes
    """
    output_format = PILLOW_FORMATS.get(mime_type)
    if output_format is None:
        raise EncodeError(details={"mime_type": mime_type})

    try:
        img: Any = Image.open(io.BytesIO(file_data))
        img.load()
        # Size the image as displayed: apply and drop the EXIF orientation
        img = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.error("Failed to decode image", extra={"mime_type": mime_type, "error": str(exc)})
        raise DecodeError(details={"mime_type": mime_type}) from exc

    original_width, original_height = img.size
    width, height = scaled_dimensions(original_width, original_height, max_width)

    if (width, height) != (original_width, original_height):
        img = img.resize((width, height), Image.Resampling.LANCZOS)
        logger.debug(
            "Resized image",
            extra={
                "from": f"{original_width}x{original_height}",
                "to": f"{width}x{height}",
            },
        )

    output = io.BytesIO()
    quality_percent = round(quality * 100)

    try:
        if output_format == "JPEG":
            _flatten_for_jpeg(img).save(
                output,
                format="JPEG",
                quality=quality_percent,
                optimize=True,
            )
        elif output_format == "WEBP":
            img.save(output, format="WEBP", quality=quality_percent)
        else:
            img.save(output, format="PNG", optimize=True)
    except (OSError, ValueError) as exc:
        logger.error("Failed to encode image", extra={"format": output_format, "error": str(exc)})
        raise EncodeError(details={"mime_type": mime_type}) from exc

    data = output.getvalue()
    if not data:
        logger.error("Encoder produced no output", extra={"format": output_format})
        raise EncodeError(details={"mime_type": mime_type})

    logger.debug(
        "Image compressed",
        extra={
            "original_size": format_file_size(len(file_data)),
            "compressed_size": format_file_size(len(data)),
        },
    )

    return CompressedImage(
        data=data,
        mime_type=ENCODED_MIME_TYPES[output_format],
        width=width,
        height=height,
    )
