from .base_repository import BaseRepository
from .paginated import paginate, count_rows
from .product_repository import ProductRepository

__all__ = ["BaseRepository", "paginate", "count_rows", "ProductRepository"]
