"""Request validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

# Lower-cased fragment of a pydantic message -> message shown to the admin
_MESSAGE_REWRITES: tuple[tuple[str, str], ...] = (
    ("base64", "File must be a valid Base64-encoded string"),
    ("field required", "This field is required"),
    ("should match pattern", "Invalid format"),
    ("valid string", "Invalid value type"),
    ("valid integer", "Invalid value type"),
)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce Pydantic errors to `{field, message}` pairs.

    The `input`, `ctx` and `url` entries are dropped: `input` may hold the
    whole base64 payload.
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        msg = err.get("msg", "Invalid value").replace("Value error,", "").strip()

        msg_lower = msg.lower()
        msg = next(
            (rewrite for fragment, rewrite in _MESSAGE_REWRITES if fragment in msg_lower),
            msg,
        )

        sanitized.append({"field": field, "message": msg})

    return sanitized


def validate_request(model: type[ModelT], data: Any) -> ModelT:
    """Validate request data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Decoded JSON body or query string parameters

    Returns:
        The validated model instance

    Raises:
        pydantic.ValidationError: If the data does not match the model
    """
    return model.model_validate(data)
