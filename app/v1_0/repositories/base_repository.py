from typing import Any, Optional, Sequence, Type, TypeVar, Generic, Protocol, runtime_checkable
from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.entities import Page, PageRequest
from .paginated import paginate

# --- los modelos deben exponer .id ---
@runtime_checkable
class HasId(Protocol):
    id: Any  # columna PK

ModelT = TypeVar("ModelT", bound=HasId)


class BaseRepository(Generic[ModelT]):
    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def add(self, entity: ModelT, session: AsyncSession) -> ModelT:
        session.add(entity)
        try:
            await session.flush()
        except IntegrityError:
            await session.rollback()
            raise
        return entity

    async def get_by_id(self, id_: Any, session: AsyncSession) -> Optional[ModelT]:
        stmt: Select = select(self.model).where(self.model.id == id_)
        res = await session.execute(stmt)
        return res.scalars().first()

    async def list_all(
        self,
        session: AsyncSession,
        *,
        order_by: Any | None = None,
    ) -> list[ModelT]:
        if order_by is None:
            order_by = self.model.id.desc()
        stmt: Select = select(self.model).order_by(order_by)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def list_paginated(
        self,
        session: AsyncSession,
        request: PageRequest,
        *,
        order_by: Sequence[Any] | None = None,
        filters: Sequence[Any] = (),
    ) -> Page[ModelT]:
        if not order_by:
            order_by = (self.model.id.desc(),)

        stmt: Select = select(self.model).where(*filters).order_by(*order_by)
        return await paginate(session=session, stmt=stmt, request=request)

    async def update_fields(
        self,
        entity: ModelT,
        data: dict[str, Any],
        session: AsyncSession,
        *,
        allow: set[str] | None = None,
    ) -> ModelT:
        for k, v in data.items():
            if allow and k not in allow:
                continue
            setattr(entity, k, v)
        await session.flush()
        return entity

    async def delete(self, entity: ModelT, session: AsyncSession) -> None:
        await session.delete(entity)
        await session.flush()
