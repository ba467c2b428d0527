"""Pytest configuration and shared fixtures for API tests."""

import os
import tempfile

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test DB before app imports so settings/engine use it
_tmp_dir = tempfile.mkdtemp(prefix="inventory-tests-")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{os.path.join(_tmp_dir, 'inventory.db')}",
)
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.main import app
from app.storage.database import async_session, engine
from app.v1_0.models import Base


@pytest_asyncio.fixture
async def clean_db():
    """Recreate every table so each test starts from an empty database."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest_asyncio.fixture
async def session(clean_db):
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(clean_db):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def seeded_products(client):
    """Create 12 products (SP-001..SP-012) through the API; returns their ids in creation order."""
    ids = []
    for i in range(1, 13):
        resp = await client.post(
            "/api/v1/products/create",
            json={
                "code": f"SP-{i:03d}",
                "name": f"Widget {i}" if i % 2 else f"Gadget {i}",
                "unitPrice": 10.0 + i,
                "quantity": i,
            },
        )
        assert resp.status_code == 201, resp.text
        ids.append(resp.json()["id"])
    return ids
