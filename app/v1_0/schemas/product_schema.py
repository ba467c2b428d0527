from typing import Literal, Optional
from datetime import date
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

ProductStatus = Literal["ACTIVE", "INACTIVE"]

class ProductUpsert(BaseModel):
    """Schema used for both create and update of a product."""
    code: str = Field(..., min_length=1, max_length=64, description="Unique product code")
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    short_description: Optional[str] = Field(default=None, max_length=500)
    image: Optional[str] = Field(default=None, description="Image URL")
    unit_price: float = Field(..., ge=0.0, description="Unit price")
    status: ProductStatus = Field(default="ACTIVE")
    quantity: int = Field(default=0, ge=0, description="Stock quantity")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "code": "SP-001",
                "name": "Standard widget",
                "shortDescription": "Blue, 10 cm",
                "unitPrice": 19.99,
                "status": "ACTIVE",
                "quantity": 100,
            }
        },
    )

class ProductSearchQuery(BaseModel):
    """Filters and page coordinates for the product search."""
    code: Optional[str] = Field(default=None, description="Substring of the product code")
    name: Optional[str] = Field(default=None, description="Substring of the product name")
    date_from: Optional[date] = Field(default=None, description="Inclusive creation start date")
    date_to: Optional[date] = Field(default=None, description="Inclusive creation end date")
    page: int = Field(default=0, ge=0, description="Zero-based page index")
    size: int = Field(default=10, ge=1, description="Page size")

    @model_validator(mode="after")
    def _ordered_range(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("fromDate must not be after toDate")
        return self
