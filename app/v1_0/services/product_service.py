from typing import Awaitable, Callable, List, TypeVar
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import logger
from app.v1_0.repositories import ProductRepository
from app.v1_0.schemas import ProductUpsert, ProductSearchQuery
from app.v1_0.entities import PageRequest, PageResponse, ProductDTO

R = TypeVar("R")

class ProductService:
    def __init__(self, product_repository: ProductRepository) -> None:
        self.product_repository = product_repository

    async def _require(self, product_id: int, db: AsyncSession):
        """
        Ensure that a product exists or raise an HTTP 404 error.

        Args:
            product_id: Identifier of the product to fetch.
            db: Active async database session.

        Returns:
            The ORM product entity if found.

        Raises:
            HTTPException: If the product does not exist.
        """
        p = await self.product_repository.get_product_by_id(product_id, db)
        if not p:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
        return p

    async def _in_tx(self, db: AsyncSession, run: Callable[[], Awaitable[R]], action: str) -> R:
        """Run a write inside a transaction; commit on success, roll back otherwise."""
        if not db.in_transaction():
            await db.begin()

        try:
            result = await run()
            await db.commit()
        except HTTPException:
            await db.rollback()
            raise
        except IntegrityError as e:
            await db.rollback()
            logger.warning("[ProductService] %s conflict: %s", action, e.orig)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product code already in use",
            )
        except Exception as e:
            await db.rollback()
            logger.error("[ProductService] %s failed: %s", action, e, exc_info=True)
            raise HTTPException(
                status_code=500,
                detail=f"Failed to {action.lower()} product",
            )
        return result

    async def create(self, payload: ProductUpsert, db: AsyncSession) -> ProductDTO:
        """
        Create a new product.

        Raises:
            HTTPException:
                - 409 if the code is already used by another product.
                - 500 if creation fails unexpectedly.
        """
        logger.info("[ProductService] Creating product: %s", payload.model_dump())

        async def _run() -> ProductDTO:
            if await self.product_repository.get_by_code(payload.code, db):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Product code already in use",
                )
            p = await self.product_repository.create_product(payload, db)
            logger.info("[ProductService] Product created ID=%s", p.id)
            return ProductDTO.model_validate(p)

        return await self._in_tx(db, _run, "Create")

    async def get(self, product_id: int, db: AsyncSession) -> ProductDTO:
        """
        Retrieve a single product by its identifier.

        Raises:
            HTTPException:
                - 404 if not found.
                - 500 if an internal error occurs.
        """
        logger.debug(f"[ProductService] Get product ID={product_id}")
        try:
            async with db.begin():
                p = await self._require(product_id, db)
                return ProductDTO.model_validate(p)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"[ProductService] Get failed ID={product_id}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch product")

    async def list_all(self, db: AsyncSession) -> List[ProductDTO]:
        logger.debug("[ProductService] List all products")
        try:
            async with db.begin():
                rows = await self.product_repository.list_products(db)
                return [ProductDTO.model_validate(p) for p in rows]
        except Exception as e:
            logger.error(f"[ProductService] List failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to list products")

    async def search(self, params: ProductSearchQuery, db: AsyncSession) -> PageResponse[ProductDTO]:
        """
        Search products and return one page of results.

        The repository answers with a ``Page`` of ORM rows; rows are mapped to
        ProductDTO and the page is flattened into the response envelope.

        Args:
            params: Filters plus zero-based page index and page size.
            db: Active async database session.

        Returns:
            PageResponse with content, number, size, totalElements and totalPages.

        Raises:
            HTTPException: 500 if the query fails.
        """
        logger.debug(
            "[ProductService] Search code=%s name=%s from=%s to=%s page=%s size=%s",
            params.code, params.name, params.date_from, params.date_to, params.page, params.size,
        )
        request = PageRequest.of(params.page, params.size)
        try:
            async with db.begin():
                page = await self.product_repository.search(
                    db,
                    request,
                    code=params.code,
                    name=params.name,
                    date_from=params.date_from,
                    date_to=params.date_to,
                )
                dto_page = page.map(ProductDTO.model_validate)
        except Exception as e:
            logger.error(f"[ProductService] Search failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to search products")

        return PageResponse[ProductDTO].from_page(dto_page)

    async def update(self, product_id: int, payload: ProductUpsert, db: AsyncSession) -> ProductDTO:
        """
        Update an existing product.

        Raises:
            HTTPException:
                - 404 if product does not exist.
                - 409 if the code is already used by another product.
                - 500 if update fails unexpectedly.
        """
        logger.info("[ProductService] Update product ID=%s", product_id)

        async def _run() -> ProductDTO:
            existing = await self.product_repository.get_by_code(payload.code, db)
            if existing and existing.id != product_id:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Product code already in use",
                )
            p = await self.product_repository.update_product(product_id, payload, db)
            if not p:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
            return ProductDTO.model_validate(p)

        return await self._in_tx(db, _run, "Update")

    async def delete(self, product_id: int, db: AsyncSession) -> bool:
        logger.warning("[ProductService] Delete product ID=%s", product_id)

        async def _run() -> bool:
            return await self.product_repository.delete_product(product_id, db)

        return await self._in_tx(db, _run, "Delete")
