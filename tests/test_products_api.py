"""Tests for the products API: CRUD and the paginated search envelope."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

BASE = "/api/v1/products"


@pytest.mark.asyncio
async def test_ready(client: AsyncClient):
    resp = await client.get("/api/ready")
    assert resp.status_code == 200
    assert resp.json()["message"] == "ready"


@pytest.mark.asyncio
async def test_create_and_get_product(client: AsyncClient):
    resp = await client.post(
        f"{BASE}/create",
        json={"code": "SP-100", "name": "Hammer", "unitPrice": 12.5, "quantity": 3},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["code"] == "SP-100"
    assert data["unitPrice"] == 12.5
    assert data["status"] == "ACTIVE"

    got = await client.get(f"{BASE}/by-id/{data['id']}")
    assert got.status_code == 200
    assert got.json()["name"] == "Hammer"


@pytest.mark.asyncio
async def test_get_missing_product_is_404(client: AsyncClient):
    resp = await client.get(f"{BASE}/by-id/999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_code_is_409(client: AsyncClient):
    body = {"code": "DUP-1", "name": "First", "unitPrice": 1}
    assert (await client.post(f"{BASE}/create", json=body)).status_code == 201
    resp = await client.post(f"{BASE}/create", json={**body, "name": "Second"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_search_envelope_shape(client: AsyncClient, seeded_products):
    resp = await client.get(f"{BASE}/search", params={"page": 0, "size": 5})
    assert resp.status_code == 200
    data = resp.json()

    assert set(data) == {"content", "number", "size", "totalElements", "totalPages"}
    assert data["number"] == 0
    assert data["size"] == 5
    assert data["totalElements"] == 12
    assert data["totalPages"] == 3
    assert len(data["content"]) == 5
    assert [p["id"] for p in data["content"]] == list(reversed(seeded_products))[:5]


@pytest.mark.asyncio
async def test_search_last_page_is_short(client: AsyncClient, seeded_products):
    resp = await client.get(f"{BASE}/search", params={"page": 2, "size": 5})
    data = resp.json()
    assert data["number"] == 2
    assert len(data["content"]) == 2
    assert data["totalPages"] == 3


@pytest.mark.asyncio
async def test_search_filters(client: AsyncClient, seeded_products):
    resp = await client.get(f"{BASE}/search", params={"name": "gadget", "size": 4})
    data = resp.json()
    assert data["totalElements"] == 6
    assert data["totalPages"] == 2
    assert all(p["name"].startswith("Gadget") for p in data["content"])


@pytest.mark.asyncio
async def test_search_empty_result(client: AsyncClient):
    resp = await client.get(f"{BASE}/search", params={"code": "nothing-here"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["content"] == []
    assert data["totalElements"] == 0
    assert data["totalPages"] == 0
    assert data["size"] == 10


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"page": -1}, {"size": 0}, {"size": 1000}])
async def test_search_rejects_bad_page_coordinates(client: AsyncClient, params):
    resp = await client.get(f"{BASE}/search", params=params)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_update_product(client: AsyncClient, seeded_products):
    pid = seeded_products[0]
    resp = await client.patch(
        f"{BASE}/by-id/{pid}",
        json={"code": "SP-001", "name": "Renamed", "unitPrice": 99, "quantity": 7},
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert resp.json()["quantity"] == 7


@pytest.mark.asyncio
async def test_update_to_taken_code_is_409(client: AsyncClient, seeded_products):
    resp = await client.patch(
        f"{BASE}/by-id/{seeded_products[0]}",
        json={"code": "SP-002", "name": "Clash", "unitPrice": 1},
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_update_missing_product_is_404(client: AsyncClient):
    resp = await client.patch(
        f"{BASE}/by-id/4242",
        json={"code": "NOPE", "name": "Ghost", "unitPrice": 1},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_product(client: AsyncClient, seeded_products):
    pid = seeded_products[-1]
    resp = await client.delete(f"{BASE}/by-id/{pid}")
    assert resp.status_code == 200

    again = await client.delete(f"{BASE}/by-id/{pid}")
    assert again.status_code == 404

    listing = await client.get(f"{BASE}/search", params={"size": 100})
    assert listing.json()["totalElements"] == 11


@pytest.mark.asyncio
async def test_list_all_products(client: AsyncClient, seeded_products):
    resp = await client.get(BASE)
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == seeded_products


async def _created_dates(client: AsyncClient, ids) -> list[str]:
    dates = []
    for pid in ids:
        resp = await client.get(f"{BASE}/by-id/{pid}")
        dates.append(resp.json()["createdAt"][:10])
    return sorted(dates)


@pytest.mark.asyncio
async def test_search_date_range_is_inclusive(client: AsyncClient, seeded_products):
    dates = await _created_dates(client, seeded_products)

    resp = await client.get(
        f"{BASE}/search",
        params={"fromDate": dates[0], "toDate": dates[-1], "size": 100},
    )
    assert resp.status_code == 200
    assert resp.json()["totalElements"] == 12


@pytest.mark.asyncio
async def test_search_date_range_in_the_future_is_empty(client: AsyncClient, seeded_products):
    dates = await _created_dates(client, seeded_products)
    after = (date.fromisoformat(dates[-1]) + timedelta(days=1)).isoformat()

    resp = await client.get(f"{BASE}/search", params={"fromDate": after})
    assert resp.status_code == 200
    assert resp.json()["totalElements"] == 0
    assert resp.json()["totalPages"] == 0


@pytest.mark.asyncio
async def test_search_reversed_date_range_is_422(client: AsyncClient, seeded_products):
    today = date.today()
    resp = await client.get(
        f"{BASE}/search",
        params={
            "fromDate": (today + timedelta(days=3)).isoformat(),
            "toDate": today.isoformat(),
        },
    )
    assert resp.status_code == 422
    assert "fromDate must not be after toDate" in resp.text
