"""Custom exception classes for the image pipeline."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_DOWNLOAD_URL_FAILED,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_IMAGE_DECODE_FAILED,
    ERROR_CODE_IMAGE_DELETION_FAILED,
    ERROR_CODE_IMAGE_ENCODE_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_INVALID_IMAGE_URL,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    MESSAGE_DECODE_FAILED,
    MESSAGE_DOWNLOAD_URL_FAILED,
    MESSAGE_ENCODE_FAILED,
    MESSAGE_INVALID_IMAGE_URL,
    MESSAGE_UPLOAD_FAILED,
)


class ImagePipelineError(Exception):
    """
    Base exception for all image pipeline errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImagePipelineError):
    """Raised when a candidate file is rejected before any I/O."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MIMETypeError(ValidationError):
    """Raised when an unsupported MIME type is provided."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class FileSizeError(ValidationError):
    """Raised when file size exceeds the allowed limit."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_FILE_SIZE_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class DecodeError(ImagePipelineError):
    """Raised when the payload cannot be interpreted as an image."""

    def __init__(
        self,
        *,
        message: str = MESSAGE_DECODE_FAILED,
        error_code: str = ERROR_CODE_IMAGE_DECODE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class EncodeError(ImagePipelineError):
    """Raised when re-encoding produces no output."""

    def __init__(
        self,
        *,
        message: str = MESSAGE_ENCODE_FAILED,
        error_code: str = ERROR_CODE_IMAGE_ENCODE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class TransportError(ImagePipelineError):
    """Raised when the streamed write to storage fails."""

    def __init__(
        self,
        *,
        message: str = MESSAGE_UPLOAD_FAILED,
        error_code: str = ERROR_CODE_IMAGE_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UrlResolutionError(ImagePipelineError):
    """Raised when the object was written but no download URL could be minted."""

    def __init__(
        self,
        *,
        message: str = MESSAGE_DOWNLOAD_URL_FAILED,
        error_code: str = ERROR_CODE_DOWNLOAD_URL_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class DeletionError(ImagePipelineError):
    """Raised by storage when an object delete fails.

    The deleter catches and logs it; it never reaches pipeline callers.
    """

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_IMAGE_DELETION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InvalidUrlError(ImagePipelineError):
    """Raised when a download URL does not carry an object key."""

    def __init__(
        self,
        *,
        message: str = MESSAGE_INVALID_IMAGE_URL,
        error_code: str = ERROR_CODE_INVALID_IMAGE_URL,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
