"""
Lambda handler responsible for listing the images of a product.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import ImageServiceError
from core.models.image import ListProductImagesResponse
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ListProductImagesRequest
from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `GET /products/{product_id}/images`.

    Listing is public; no caller identity is required.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received product image list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    try:
        request = validate_request(
            ListProductImagesRequest,
            event.get("pathParameters") or {},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.validation_error(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors([err for err in exc.errors()])},
            request_id=request_id,
        )

    try:
        images = ListService().list_images(product_id=request.product_id)
    except ImageServiceError as exc:
        logger.exception(
            "Error listing product images",
            extra={"product_id": request.product_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.from_error(exc, request_id=request_id)

    response = ListProductImagesResponse(
        product_id=request.product_id,
        images=images,
        count=len(images),
    )

    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
