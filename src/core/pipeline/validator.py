"""Upload policy check for candidate image files."""

from core.models.errors import FileSizeError, MIMETypeError
from core.models.image import ValidationResult
from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    MAX_FILE_SIZE,
    MESSAGE_FILE_TOO_LARGE,
    MESSAGE_UNSUPPORTED_TYPE,
)


def validate_image_file(mime_type: str, size: int) -> ValidationResult:
    """Check a declared MIME type and byte size against the upload policy.

    The type is checked before the size, so a file failing both is
    reported as the wrong type.
    """
    if mime_type not in ALLOWED_MIME_TYPES:
        return ValidationResult(valid=False, reason=MESSAGE_UNSUPPORTED_TYPE)

    if size > MAX_FILE_SIZE:
        return ValidationResult(valid=False, reason=MESSAGE_FILE_TOO_LARGE)

    return ValidationResult(valid=True)


def ensure_valid_image(mime_type: str, size: int) -> None:
    """Raise the matching ValidationError when the file is rejected.

    Raises:
        MIMETypeError: If the MIME type is not allowed
        FileSizeError: If the file exceeds MAX_FILE_SIZE
    """
    result = validate_image_file(mime_type, size)
    if result.valid:
        return

    details = {"mime_type": mime_type, "size": size, "max_size": MAX_FILE_SIZE}
    if result.reason == MESSAGE_UNSUPPORTED_TYPE:
        raise MIMETypeError(message=MESSAGE_UNSUPPORTED_TYPE, details=details)

    raise FileSizeError(message=MESSAGE_FILE_TOO_LARGE, details=details)
