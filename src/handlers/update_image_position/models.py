"""Pydantic models for image position update request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class UpdatePositionRequest(BaseModel):
    """Validation model for image position update.

    Negative values pass here and are rejected by the service with a
    dedicated error code.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: str = Field(..., min_length=1, description="Image ID to reorder")
    position: StrictInt = Field(..., description="New display position")


class UpdatePositionResponse(BaseModel):
    message: str = Field(
        "image position updated successfully",
        description="Success message",
    )
