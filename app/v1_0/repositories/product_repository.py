from typing import Optional, List
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.models import Product
from app.v1_0.schemas import ProductUpsert
from app.v1_0.entities import Page, PageRequest
from .base_repository import BaseRepository

class ProductRepository(BaseRepository[Product]):
    def __init__(self) -> None:
        super().__init__(Product)

    async def create_product(
        self,
        payload: ProductUpsert,
        session: AsyncSession
    ) -> Product:
        entity = Product(**payload.model_dump())
        await self.add(entity, session)
        await session.refresh(entity)
        return entity

    async def get_product_by_id(
        self,
        product_id: int,
        session: AsyncSession
    ) -> Optional[Product]:
        return await super().get_by_id(product_id, session)

    async def get_by_code(
        self,
        code: str,
        session: AsyncSession
    ) -> Optional[Product]:
        stmt = select(Product).where(Product.code == code)
        return (await session.execute(stmt)).scalars().first()

    async def update_product(
        self,
        product_id: int,
        payload: ProductUpsert,
        session: AsyncSession
    ) -> Optional[Product]:
        entity = await self.get_product_by_id(product_id, session)
        if not entity:
            return None

        allowed = {"code", "name", "short_description", "image", "unit_price", "status", "quantity"}
        await self.update_fields(
            entity,
            payload.model_dump(exclude_unset=True),
            session,
            allow=allowed,
        )
        await session.refresh(entity)
        return entity

    async def delete_product(
        self,
        product_id: int,
        session: AsyncSession
    ) -> bool:
        entity = await self.get_product_by_id(product_id, session)
        if not entity:
            return False
        await self.delete(entity, session)
        return True

    async def list_products(self, session: AsyncSession) -> List[Product]:
        return await self.list_all(session, order_by=Product.id.asc())

    async def search(
        self,
        session: AsyncSession,
        request: PageRequest,
        *,
        code: Optional[str] = None,
        name: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Page[Product]:
        """
        Page through products matching the optional filters.

        code/name match case-insensitively anywhere in the value; the date
        range is inclusive on both ends. Newest first.
        """
        filters = []
        if code:
            filters.append(func.lower(Product.code).contains(code.strip().lower(), autoescape=True))
        if name:
            filters.append(func.lower(Product.name).contains(name.strip().lower(), autoescape=True))
        if date_from:
            filters.append(Product.created_at >= _start_of(date_from))
        if date_to:
            filters.append(Product.created_at < _start_of(date_to + timedelta(days=1)))

        return await self.list_paginated(
            session,
            request,
            order_by=(Product.created_at.desc(), Product.id.desc()),
            filters=filters,
        )


def _start_of(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)
