"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, NamedTuple

from aws_lambda_powertools import Logger

from core.models.errors import ImagePipelineError
from core.utils.response import JsonDict, ResponseBuilder, status_for

logger = Logger(service="api-gateway-handler", UTC=True)

MESSAGE_UNEXPECTED_ERROR = (
    "Une erreur est survenue lors du traitement de la requête. Veuillez réessayer."
)


class _ErrorRule(NamedTuple):
    exc_types: tuple[type[BaseException], ...]
    status: HTTPStatus
    message: str
    log_message: str
    level: str


# Checked in order; subclasses must come before their bases
_ERROR_RULES: tuple[_ErrorRule, ...] = (
    _ErrorRule(
        (UnicodeDecodeError, UnicodeEncodeError),
        HTTPStatus.BAD_REQUEST,
        "Le fichier contient un encodage invalide.",
        "Encoding error in handler",
        "warning",
    ),
    _ErrorRule(
        (ValueError,),
        HTTPStatus.BAD_REQUEST,
        "Les données fournies sont invalides. Vérifiez votre saisie.",
        "Validation error in handler",
        "warning",
    ),
    _ErrorRule(
        (KeyError, AttributeError),
        HTTPStatus.BAD_REQUEST,
        "Un champ obligatoire est manquant.",
        "Missing field in handler",
        "warning",
    ),
    _ErrorRule(
        (TypeError,),
        HTTPStatus.BAD_REQUEST,
        "Le format des données est incorrect.",
        "Type error in handler",
        "warning",
    ),
    _ErrorRule(
        (PermissionError,),
        HTTPStatus.FORBIDDEN,
        "Vous n'avez pas la permission d'effectuer cette action.",
        "Permission denied in handler",
        "warning",
    ),
    _ErrorRule(
        (MemoryError,),
        HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
        "Fichier trop volumineux pour être traité.",
        "Memory error - payload too large",
        "warning",
    ),
    _ErrorRule(
        (TimeoutError,),
        HTTPStatus.GATEWAY_TIMEOUT,
        "La requête a expiré. Veuillez réessayer.",
        "Request timeout",
        "exception",
    ),
    _ErrorRule(
        (ConnectionError, OSError),
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Service de stockage indisponible. Veuillez réessayer plus tard.",
        "Connection error",
        "exception",
    ),
)


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: BaseException,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Translation of pipeline errors the handler let through
    - A French message and matching status for any other exception

    Example:
        @api_gateway_handler
        def lambda_handler(event, context):
            return {"statusCode": 200, "body": "Success"}
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except ImagePipelineError as exc:
            _log_error(
                "Pipeline error escaped handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception" if status_for(exc) >= 500 else "warning",
            )
            return ResponseBuilder.from_error(
                exc, request_id=request_id, cors_origin=cors_origin
            )

        except Exception as exc:
            rule = next(
                (r for r in _ERROR_RULES if isinstance(exc, r.exc_types)),
                None,
            )
            if rule is None:
                _log_error(
                    "Unexpected error in handler",
                    handler_name=func.__name__,
                    request_id=request_id,
                    exc=exc,
                    level="exception",
                )
                return ResponseBuilder.error(
                    status=HTTPStatus.INTERNAL_SERVER_ERROR,
                    message=MESSAGE_UNEXPECTED_ERROR,
                    request_id=request_id,
                    cors_origin=cors_origin,
                )

            _log_error(
                rule.log_message,
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level=rule.level,
            )
            return ResponseBuilder.error(
                status=rule.status,
                message=rule.message,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
