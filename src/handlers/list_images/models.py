"""Pydantic models for product image listing."""

from pydantic import BaseModel, ConfigDict, Field


class ListProductImagesRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    product_id: str = Field(..., min_length=1, description="Product whose images are listed")
