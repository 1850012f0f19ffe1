"""Requestor identity from the API Gateway authorizer context.

Tokens are verified upstream by the JWT authorizer; handlers only read the
resulting identity and role.
"""

from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field

from core.models.errors import ForbiddenError, UnauthorizedError
from core.utils.constants import VENDOR_ROLE

logger = Logger(UTC=True)


class Requestor(BaseModel):
    """Authenticated caller of a request."""

    user_id: str = Field(..., min_length=1)
    role: str | None = None


def _authorizer_context(event: dict[str, Any]) -> dict[str, Any]:
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}

    # Cognito / JWT authorizers nest the token claims
    claims = authorizer.get("claims") or (authorizer.get("jwt") or {}).get("claims")
    if isinstance(claims, dict):
        return {**authorizer, **claims}

    return authorizer


def get_requestor(event: dict[str, Any]) -> Requestor:
    """Resolve the requestor from the event.

    Raises:
        UnauthorizedError: If no user identity is present
    """
    context = _authorizer_context(event)
    user_id = context.get("user_id") or context.get("sub")

    if not isinstance(user_id, str) or not user_id.strip():
        logger.warning("Request without authenticated identity")
        raise UnauthorizedError()

    role = context.get("role") or context.get("custom:role")
    if role is not None and not isinstance(role, str):
        logger.warning(
            "Ignoring non-string role claim",
            extra={"user_id": user_id, "role_type": type(role).__name__},
        )
        role = None

    return Requestor(user_id=user_id.strip(), role=role)


def require_vendor(requestor: Requestor) -> Requestor:
    """Ensure the requestor acts as a vendor.

    Raises:
        ForbiddenError: If the role is anything else
    """
    if requestor.role != VENDOR_ROLE:
        logger.warning(
            "Non-vendor attempted a vendor operation",
            extra={"user_id": requestor.user_id, "role": requestor.role},
        )
        raise ForbiddenError(message="Only vendors can manage product images")

    return requestor
