"""Shared product image models."""

from pydantic import BaseModel, Field, StrictInt, StrictStr


class ProductImage(BaseModel):
    """Stored product image record."""

    image_id: StrictStr = Field(..., description="Unique image identifier")
    product_id: StrictStr = Field(..., description="Owning product identifier")
    image_url: StrictStr = Field(..., description="Storage reference (generated filename)")
    position: StrictInt = Field(0, ge=0, description="Display order sort key")
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")


class ProductImageResponse(BaseModel):
    """Image representation returned by the API."""

    id: StrictStr = Field(..., description="Unique image identifier")
    image_url: StrictStr = Field(..., description="Externally resolvable image URL")
    position: StrictInt = Field(..., description="Display order sort key")


class ListProductImagesResponse(BaseModel):
    """Ordered image listing for one product."""

    product_id: StrictStr = Field(..., description="Product identifier")
    images: list[ProductImageResponse] = Field(..., description="Images ordered by position")
    count: StrictInt = Field(..., description="Number of images returned")
