"""
Lambda handler responsible for deleting a stored image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import InvalidUrlError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Reads the image URL from the query string
    - Validates the incoming request
    - Delegates deletion to the service layer
    - Translates an unparsable URL into a 400 response

    Storage failures are swallowed by the pipeline, so a valid URL always
    yields a 200 response.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received image delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    query_params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(
            DeleteImageRequest,
            {"image_url": query_params.get("image_url")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": sanitize_validation_errors(exc.errors())},
        )
        return ResponseBuilder.bad_request(
            message="Paramètres de requête invalides",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = DeleteService()

    try:
        result = service.delete_image(request.image_url)

    except InvalidUrlError as exc:
        logger.warning(
            "Image URL cannot be resolved to a storage object",
            extra={"image_url": request.image_url},
        )
        return ResponseBuilder.from_error(exc)

    if result["deleted"]:
        metrics.add_metric(name="ImageDeleted", unit=MetricUnit.Count, value=1)

    response = DeleteImageResponse(
        image_url=result["image_url"],
        file_name=result["file_name"],
        deleted=result["deleted"],
        processed_at=result["processed_at"],
        message="Image supprimée" if result["deleted"] else "Image externe ignorée",
    )

    return ResponseBuilder.ok(response.model_dump())
