"""
API Gateway responses for the image endpoints.

Pipeline errors map to HTTP statuses by type: anything the admin can fix
by choosing another file is a 422, an unusable URL is a 400 and storage
failures are 500s.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.models.errors import (
    DecodeError,
    EncodeError,
    ImagePipelineError,
    InvalidUrlError,
    ValidationError,
)
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]

# First match along the exception's MRO wins
ERROR_STATUSES: dict[type[ImagePipelineError], HTTPStatus] = {
    ValidationError: HTTPStatus.UNPROCESSABLE_ENTITY,
    DecodeError: HTTPStatus.UNPROCESSABLE_ENTITY,
    EncodeError: HTTPStatus.UNPROCESSABLE_ENTITY,
    InvalidUrlError: HTTPStatus.BAD_REQUEST,
}


def status_for(exc: ImagePipelineError) -> HTTPStatus:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUSES:
            return ERROR_STATUSES[cls]
    return HTTPStatus.INTERNAL_SERVER_ERROR


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    @staticmethod
    def _headers(cors_origin: str | None = None) -> dict[str, str]:
        return {
            "Content-Type": DEFAULT_CONTENT_TYPE,
            "Access-Control-Allow-Origin": cors_origin or CORS_ORIGIN,
            "Access-Control-Allow-Headers": CORS_HEADERS,
            "Access-Control-Allow-Methods": CORS_METHODS,
        }

    @staticmethod
    def _response(
        status: HTTPStatus,
        payload: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if request_id:
            payload = {**payload, "request_id": request_id}

        # Messages are French; keep accents readable in the body
        return {
            "statusCode": status.value,
            "headers": ResponseBuilder._headers(cors_origin),
            "body": json.dumps(payload, ensure_ascii=False),
        }

    @staticmethod
    def ok(
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            HTTPStatus.OK, body, request_id=request_id, cors_origin=cors_origin
        )

    @staticmethod
    def created(
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            HTTPStatus.CREATED, body, request_id=request_id, cors_origin=cors_origin
        )

    @staticmethod
    def no_content(*, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": ResponseBuilder._headers(cors_origin),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: Any = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Error body: `error` code, French `message`, timestamp, optional details."""
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }

        if details:
            payload["details"] = details

        return ResponseBuilder._response(
            status, payload, request_id=request_id, cors_origin=cors_origin
        )

    @staticmethod
    def from_error(
        exc: ImagePipelineError,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Translate a pipeline error; its details stay in the logs."""
        return ResponseBuilder.error(
            status=status_for(exc),
            message=exc.message,
            error=exc.error_code,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def bad_request(
        message: str,
        *,
        details: Any = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def validation_error(
        *,
        message: str,
        details: Any = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """422 for request payloads that fail schema validation."""
        return ResponseBuilder.error(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            error=ERROR_CODE_VALIDATION_FAILED,
            message=message,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )
