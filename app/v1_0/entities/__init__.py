from .base import CamelDTO
from .page import Page, PageRequest, PageResponse
from .product_DTO import ProductDTO, ProductPageResponse


__all__ = [
    "CamelDTO",
    "Page", "PageRequest", "PageResponse",
    "ProductDTO", "ProductPageResponse",
]
