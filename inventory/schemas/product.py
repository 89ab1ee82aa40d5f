from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional

from inventory.models.product import ProductStatus


class CamelModel(BaseModel):
    """Base schema exposing camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductFields(CamelModel):
    """
    Client-editable product fields. Everything is optional here;
    required fields and ranges are checked by the store so that the
    same rules apply to a new draft and to a merged update.
    """
    name: Optional[str] = Field(None, description="Product name")
    price: Optional[float] = Field(None, description="Unit price, must be non-negative")
    stock_quantity: Optional[int] = Field(None, description="Units on hand, must be non-negative")
    category: Optional[str] = Field(None, description="Product category")
    status: Optional[ProductStatus] = Field(None, description="Catalog status")
    vendor: Optional[str] = Field(None, description="Supplying vendor")
    description: Optional[str] = Field(None, description="Free-form description")
    image_url: Optional[str] = Field(None, description="Image URL or data URI")

    @field_validator("price", "stock_quantity", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value


class ProductCreate(ProductFields):
    """Draft for a new product, before id and timestamps are assigned."""
    pass


class ProductUpdate(ProductFields):
    """Patch for an existing product. Unset or null fields are left unchanged."""
    pass


class ProductResponse(CamelModel):
    """Schema for product response including all fields."""
    id: str
    name: str
    price: float
    stock_quantity: int
    category: str
    status: ProductStatus
    vendor: str
    description: str = ""
    image_url: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class ProductListResponse(CamelModel):
    """Schema for a page of products."""
    items: list[ProductResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class CategorySummary(CamelModel):
    """Number of products in a category."""
    id: str
    name: str
    count: int


class StatusSummary(CamelModel):
    """Number of products with a status, with its badge colour."""
    id: str
    name: str
    count: int
    color: str
