from collections.abc import AsyncGenerator
from typing import Any
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from app.core.settings import settings

raw: str = settings.DATABASE_URL.get_secret_value()

u = make_url(raw)


def _engine_for(url: URL) -> AsyncEngine:
    if url.get_backend_name() != "postgresql":
        # sqlite+aiosqlite y demás drivers async: tal cual
        return create_async_engine(
            url.render_as_string(hide_password=False),
            echo=bool(getattr(settings, "DEBUG", False)),
            poolclass=NullPool,
        )

    # driver asyncpg sin query string (sslmode/channel_binding no van a asyncpg)
    clean_url: URL = URL.create(
        drivername="postgresql+asyncpg",
        username=url.username,
        password=url.password,
        host=url.host,
        port=url.port,
        database=url.database,
    )
    connect_args: dict[str, Any] = {"statement_cache_size": 0}
    if settings.APP_ENV in ("staging", "prod"):
        connect_args["ssl"] = True

    return create_async_engine(
        clean_url.render_as_string(hide_password=False),
        echo=bool(getattr(settings, "DEBUG", False)),
        poolclass=NullPool,
        pool_pre_ping=True,
        execution_options={"isolation_level": "READ COMMITTED"},
        connect_args=connect_args,
    )


engine = _engine_for(u)

async_session = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session()
    try:
        yield session
    finally:
        await session.close()

async def create_all() -> None:
    from app.v1_0.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def dispose_engine() -> None:
    await engine.dispose()
