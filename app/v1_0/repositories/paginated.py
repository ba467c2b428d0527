from typing import TypeVar
from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.v1_0.entities import Page, PageRequest

ModelT = TypeVar("ModelT")


async def count_rows(session: AsyncSession, stmt: Select) -> int:
    """Count the rows a statement would return, ignoring ORDER BY / LIMIT / OFFSET."""
    inner = stmt.order_by(None).limit(None).offset(None).subquery()
    total = await session.scalar(select(func.count()).select_from(inner))
    return int(total or 0)


async def paginate(
    *,
    session: AsyncSession,
    stmt: Select,
    request: PageRequest,
) -> Page[ModelT]:
    total_rows = await count_rows(session, stmt)

    if total_rows == 0 or request.offset >= total_rows:
        return Page.of([], request, total_rows)

    page_q = stmt.offset(request.offset).limit(request.size)
    rows = list((await session.execute(page_q)).scalars().all())
    return Page.of(rows, request, total_rows)
