"""
Lambda handler responsible for image upload.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ImagePipelineError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder, status_for
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ImageUploadRequest, ImageUploadResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests from the catalog admin.

    The handler decodes the base64 image, runs it through validation,
    compression and upload, and returns the download URL to store on the
    category or item record.

    Expected API Gateway event structure:
    {
        "body": "{...}",           # JSON string containing upload data
        "isBase64Encoded": false
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the download URL
    """
    logger.info(
        "Received image upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Corps de requête JSON invalide")

    try:
        request = validate_request(ImageUploadRequest, body)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": sanitize_validation_errors(exc.errors())},
        )
        return ResponseBuilder.validation_error(
            message="Paramètres de requête invalides",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        service = UploadService()
        outcome = service.upload_image(
            file_name=request.file_name,
            file_data=UploadService.decode_file(request.file),
            upload_path=request.upload_path,
            mime_type=request.mime_type,
            previous_image_url=request.previous_image_url,
        )

    except ImagePipelineError as exc:
        if status_for(exc) >= 500:
            logger.exception(
                "Storage error during image upload",
                extra={"file_name": request.file_name, "error_code": exc.error_code},
            )
        else:
            logger.warning(
                "Image rejected",
                extra={
                    "file_name": request.file_name,
                    "error_code": exc.error_code,
                    "details": exc.details,
                },
            )
        return ResponseBuilder.from_error(exc)

    metrics.add_metric(name="ImageUploaded", unit=MetricUnit.Count, value=1)

    response = ImageUploadResponse(
        download_url=outcome.uploaded.download_url,
        object_key=outcome.uploaded.object_key,
        file_name=request.file_name,
        width=outcome.uploaded.width,
        height=outcome.uploaded.height,
        replaced_image_released=outcome.replaced_image_released,
        message="Image téléchargée avec succès",
    )

    return ResponseBuilder.created(response.model_dump())
