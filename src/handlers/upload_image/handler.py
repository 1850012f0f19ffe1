"""
Lambda handler responsible for product image upload.
"""

import io
import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ImageServiceError
from core.utils.auth import get_requestor, require_vendor
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ImageUploadRequest
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle product image upload requests.

    Expected API Gateway event structure:
    {
        "pathParameters": {"product_id": "..."},
        "body": "{\"file\": \"<base64>\", \"image_name\": \"photo.png\", \"position\": 0}",
        "requestContext": {"authorizer": {"user_id": "...", "role": "vendor"}}
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        201 response with `{id, image_url, position}`
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received image upload request",
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

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body", request_id=request_id)

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body", request_id=request_id)

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            ImageUploadRequest,
            {**body, "product_id": path_params.get("product_id")},
        )
    except PydanticValidationError as exc:
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
        service = UploadService()

        image = service.upload_image(
            product_id=request.product_id,
            requestor_id=requestor.user_id,
            file_stream=io.BytesIO(request.file),
            filename=request.image_name,
            size=len(request.file),
            position=request.position,
        )

    except ImageServiceError as exc:
        logger.exception(
            "Image upload failed",
            extra={"product_id": request.product_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.from_error(exc, request_id=request_id)

    metrics.add_metric(name="ProductImageUploaded", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.created(image.model_dump(), request_id=request_id)
