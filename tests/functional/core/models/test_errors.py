"""
Unit tests for core.models.errors
"""

import pytest

from core.models.errors import (
    DecodeError,
    DeletionError,
    EncodeError,
    FileSizeError,
    ImagePipelineError,
    InvalidUrlError,
    MIMETypeError,
    TransportError,
    UrlResolutionError,
    ValidationError,
)


class TestImagePipelineError:
    def test_base_error(self) -> None:
        err = ImagePipelineError(
            message="Something went wrong",
            error_code="TEST_ERROR",
            details={"foo": "bar"},
        )

        assert err.message == "Something went wrong"
        assert err.error_code == "TEST_ERROR"
        assert err.details == {"foo": "bar"}
        assert str(err) == "Something went wrong"


class TestValidationErrors:
    def test_validation_error_defaults(self) -> None:
        err = ValidationError(message="Invalid input")

        assert err.error_code == "VALIDATION_FAILED"
        assert err.details == {}

    def test_mime_type_error(self) -> None:
        err = MIMETypeError(message="bad type", details={"mime_type": "image/gif"})

        assert isinstance(err, ValidationError)
        assert err.error_code == "UNSUPPORTED_MIME_TYPE"

    def test_file_size_error(self) -> None:
        err = FileSizeError(message="too big")

        assert isinstance(err, ValidationError)
        assert err.error_code == "FILE_SIZE_EXCEEDED"


@pytest.mark.parametrize(
    ("error_cls", "code", "message"),
    [
        (DecodeError, "IMAGE_DECODE_FAILED", "Impossible de charger l'image"),
        (EncodeError, "IMAGE_ENCODE_FAILED", "Échec de la compression de l'image"),
        (TransportError, "IMAGE_UPLOAD_FAILED", "Échec du téléchargement de l'image"),
        (UrlResolutionError, "DOWNLOAD_URL_FAILED", "Impossible d'obtenir l'URL de l'image"),
        (InvalidUrlError, "INVALID_IMAGE_URL", "URL d'image invalide"),
    ],
)
def test_pipeline_errors_have_defaults(error_cls, code: str, message: str) -> None:
    err = error_cls(details={"key": "items/1_a.jpg"})

    assert isinstance(err, ImagePipelineError)
    assert err.error_code == code
    assert err.message == message
    assert err.details == {"key": "items/1_a.jpg"}


def test_deletion_error_requires_message() -> None:
    err = DeletionError(message="Unable to delete image at this time")

    assert err.error_code == "IMAGE_DELETION_FAILED"
    assert not isinstance(err, ValidationError)
