"""Product model as seen by the image subsystem."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class Product(BaseModel):
    """Subset of a catalog product needed for image ownership checks."""

    model_config = ConfigDict(extra="ignore")

    product_id: StrictStr = Field(..., description="Unique product identifier")
    owner_id: StrictStr = Field(..., description="Identifier of the owning vendor")
    name: StrictStr | None = Field(None, description="Product name")
    is_active: StrictBool = Field(True, description="Whether the product is listed")
