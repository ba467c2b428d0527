from typing import Optional
from datetime import datetime

from .base import CamelDTO
from .page import PageResponse

class ProductDTO(CamelDTO):
    """Full product listing row."""
    id: int
    code: str
    name: str
    short_description: Optional[str] = None
    image: Optional[str] = None
    unit_price: float
    status: str
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

ProductPageResponse = PageResponse[ProductDTO]
