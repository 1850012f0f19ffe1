"""
Lambda handler responsible for deleting a product image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import ImageServiceError
from core.utils.auth import get_requestor, require_vendor
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Resolves the requesting vendor from the authorizer context
    - Extracts the image identifier from API Gateway path parameters
    - Delegates deletion to the service layer
    - Translates domain errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received image delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    try:
        requestor = require_vendor(get_requestor(event))
    except ImageServiceError as exc:
        return ResponseBuilder.from_error(exc, request_id=request_id)

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteImageRequest,
            {"image_id": path_params.get("image_id")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.validation_error(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors([err for err in exc.errors()])},
            request_id=request_id,
        )

    try:
        DeleteService().delete_image(
            image_id=request.image_id,
            requestor_id=requestor.user_id,
        )
    except ImageServiceError as exc:
        logger.exception(
            "Deletion failed",
            extra={"image_id": request.image_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.from_error(exc, request_id=request_id)

    metrics.add_metric(name="ProductImageDeleted", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.ok(DeleteImageResponse().model_dump(), request_id=request_id)
