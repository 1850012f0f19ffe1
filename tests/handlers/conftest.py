import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def backend(monkeypatch, tmp_path, images_table, put_product) -> dict[str, Any]:
    """Moto tables plus local file storage, seeded with two vendors' products."""
    upload_dir = tmp_path / "uploads"
    monkeypatch.setenv("IMAGE_UPLOAD_DIR", str(upload_dir))
    monkeypatch.setenv("IMAGE_BASE_URL", "https://img.shop.test/uploads")

    put_product("prod_a", owner_id="vendor-a", name="Lamp")
    put_product("prod_b", owner_id="vendor-b", name="Chair")

    return {"upload_dir": upload_dir, "images_table": images_table}


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway proxy event.

    Usage:
        make_event("POST", path_params={"product_id": "prod_a"}, body={...})
    """

    def _make(
        method: str,
        *,
        path_params: dict[str, str] | None = None,
        body: Any = None,
        user_id: str | None = "vendor-a",
        role: Any = "vendor",
    ) -> dict[str, Any]:
        authorizer: dict[str, Any] = {}
        if user_id is not None:
            authorizer["user_id"] = user_id
        if role is not None:
            authorizer["role"] = role

        return {
            "httpMethod": method,
            "path": "/test",
            "pathParameters": path_params,
            "body": body if body is None or isinstance(body, str) else json.dumps(body),
            "headers": {"Content-Type": "application/json"},
            "requestContext": {"authorizer": authorizer},
        }

    return _make


@pytest.fixture
def parse_body() -> Callable[[dict[str, Any]], dict[str, Any]]:
    def _parse(resp: dict[str, Any]) -> dict[str, Any]:
        return json.loads(resp["body"]) if resp.get("body") else {}

    return _parse
