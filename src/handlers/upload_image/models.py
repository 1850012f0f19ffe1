"""Pydantic models for product image upload request."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from core.utils.constants import DEFAULT_POSITION

logger = Logger(UTC=True)


class ImageUploadRequest(BaseModel):
    """Validation model for image upload request.

    Size and file type are enforced by the storage layer, and the sign of
    `position` by the upload service, so each surfaces its own error code.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    product_id: str = Field(..., min_length=1, description="Product identifier")
    file: bytes = Field(..., description="Image file content, sent base64 encoded")
    image_name: str = Field(
        ..., min_length=1, max_length=255, description="Original image filename"
    )
    position: StrictInt = Field(DEFAULT_POSITION, description="Display order sort key")

    @field_validator("position", mode="before")
    @classmethod
    def default_missing_position(cls, value: object) -> object:
        """Treat an explicit null like an omitted position."""
        return DEFAULT_POSITION if value is None else value

    @field_validator("file", mode="before")
    @classmethod
    def decode_file(cls, value: object) -> bytes:
        """
        Decode the base64 file once:
        - must be a non-empty string
        - must decode correctly
        - must have non-zero size
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("file must be a non-empty base64 string")

        try:
            file_data = base64.b64decode(value.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            logger.error("File validation error: Decoded file is empty")
            raise ValueError("Decoded file is empty")

        return file_data
