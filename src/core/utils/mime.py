"""Image type sniffing from leading magic bytes."""

from typing import Final

# (offset, signature, MIME type)
IMAGE_SIGNATURES: Final[tuple[tuple[int, bytes, str], ...]] = (
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (8, b"WEBP", "image/webp"),
)


def detect_mime_type(file_data: bytes) -> str:
    """Return the MIME type announced by the payload's magic bytes.

    WebP is a RIFF container, so both the container tag and the form type
    must match.

    Raises:
        ValueError: If no known image signature matches
    """
    for offset, signature, mime_type in IMAGE_SIGNATURES:
        if file_data[offset : offset + len(signature)] != signature:
            continue
        if mime_type == "image/webp" and not file_data.startswith(b"RIFF"):
            continue
        return mime_type

    raise ValueError("Unsupported or unknown file type")
