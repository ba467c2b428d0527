from .product_schema import ProductUpsert, ProductSearchQuery, ProductStatus

__all__ = ["ProductUpsert", "ProductSearchQuery", "ProductStatus"]
