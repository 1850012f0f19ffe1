import json
from http import HTTPStatus
from typing import Any, cast

import pytest

from core.models.errors import (
    FileSizeError,
    ForbiddenError,
    InvalidPositionError,
    InvalidReferenceError,
    MetadataOperationFailedError,
    NotFoundError,
    OperationTimeoutError,
    StorageError,
    UnauthorizedError,
    UnsupportedFileTypeError,
)
from core.utils.response import ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    body = resp.get("body")
    if not body:
        return {}

    return cast(dict[str, Any], json.loads(body))


def test_ok_response() -> None:
    resp = ResponseBuilder.ok({"foo": "bar"}, request_id="req-1", cors_origin="https://shop.test")
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.OK
    assert parsed["foo"] == "bar"
    assert parsed["request_id"] == "req-1"
    assert resp["headers"]["Access-Control-Allow-Origin"] == "https://shop.test"
    assert resp["headers"]["Content-Type"] == "application/json"


def test_created_response() -> None:
    resp = ResponseBuilder.created({"id": "img_1", "image_url": "u", "position": 0})

    assert resp["statusCode"] == HTTPStatus.CREATED
    assert parse_body(resp) == {"id": "img_1", "image_url": "u", "position": 0}


@pytest.mark.parametrize(
    "func,status,error_name",
    [
        (ResponseBuilder.bad_request, HTTPStatus.BAD_REQUEST, "BAD_REQUEST"),
        (ResponseBuilder.unauthorized, HTTPStatus.UNAUTHORIZED, "UNAUTHORIZED"),
        (ResponseBuilder.forbidden, HTTPStatus.FORBIDDEN, "FORBIDDEN"),
        (ResponseBuilder.not_found, HTTPStatus.NOT_FOUND, "NOT_FOUND"),
        (
            ResponseBuilder.internal_error,
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
        ),
    ],
)
def test_error_responses_use_explicit_message(func, status, error_name) -> None:
    resp = func("custom message", request_id="req-err")
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] == error_name
    assert parsed["message"] == "custom message"
    assert parsed["request_id"] == "req-err"
    assert "timestamp" in parsed


def test_validation_error_is_bad_request_with_details() -> None:
    resp = ResponseBuilder.validation_error(
        message="Invalid request payload",
        details={"errors": [{"field": "position", "message": "Value must be an integer"}]},
    )
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert parsed["error"] == "VALIDATION_FAILED"
    assert parsed["details"]["errors"][0]["field"] == "position"


@pytest.mark.parametrize(
    "exc,status,code",
    [
        (InvalidPositionError(), HTTPStatus.BAD_REQUEST, "INVALID_POSITION"),
        (FileSizeError(message="too big"), HTTPStatus.BAD_REQUEST, "FILE_SIZE_EXCEEDED"),
        (UnsupportedFileTypeError(message="nope"), HTTPStatus.BAD_REQUEST, "UNSUPPORTED_FILE_TYPE"),
        (InvalidReferenceError(), HTTPStatus.BAD_REQUEST, "INVALID_REFERENCE"),
        (UnauthorizedError(), HTTPStatus.UNAUTHORIZED, "UNAUTHORIZED"),
        (ForbiddenError(message="not yours"), HTTPStatus.FORBIDDEN, "FORBIDDEN"),
        (NotFoundError(message="gone"), HTTPStatus.NOT_FOUND, "NOT_FOUND"),
        (OperationTimeoutError(message="slow"), HTTPStatus.GATEWAY_TIMEOUT, "OPERATION_TIMEOUT"),
        (StorageError(message="disk"), HTTPStatus.INTERNAL_SERVER_ERROR, "STORAGE_ERROR"),
        (
            MetadataOperationFailedError(message="db"),
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "METADATA_OPERATION_FAILED",
        ),
    ],
)
def test_from_error_maps_domain_errors(exc, status, code) -> None:
    resp = ResponseBuilder.from_error(exc, request_id="req-map")
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] == code
    assert parsed["message"] == exc.message
    assert parsed["request_id"] == "req-map"


def test_from_error_does_not_leak_details() -> None:
    exc = StorageError(message="Unable to save image at this time", details={"key": "secret/path"})

    parsed = parse_body(ResponseBuilder.from_error(exc))

    assert "details" not in parsed
