"""
tests/test_catalog.py
Tests for categories, services, locations and catalog caching.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from config.redis_client import RedisCache
from services.catalog.service import CatalogService
from shared.storage.base import Storage


@pytest.mark.asyncio
async def test_list_categories_returns_seeded(client: AsyncClient):
    response = await client.get("/api/categories")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 10
    assert data[0]["name"] == "Electrician"
    assert data[0]["nameNepali"] == "बिजुली मिस्त्री"
    assert all(c["isActive"] for c in data)


@pytest.mark.asyncio
async def test_inactive_category_is_hidden(client: AsyncClient, storage: Storage):
    await storage.create_category({
        "id": "99", "name": "Retired", "name_nepali": "बन्द", "is_active": False,
    })
    response = await client.get("/api/categories")
    ids = [c["id"] for c in response.json()]
    assert "99" not in ids
    assert len(ids) == 10


@pytest.mark.asyncio
async def test_list_services_all_and_by_category(client: AsyncClient):
    response = await client.get("/api/services")
    assert response.status_code == 200
    assert len(response.json()) == 15

    response = await client.get("/api/services", params={"categoryId": "1"})
    names = {s["name"] for s in response.json()}
    assert names == {"Electrical Wiring", "Switch & Socket Installation", "Fan Installation"}


@pytest.mark.asyncio
async def test_get_service(client: AsyncClient):
    response = await client.get("/api/services/1")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Electrical Wiring"
    assert data["basePrice"] == "800.00"
    assert data["unit"] == "hour"
    assert data["estimatedDuration"] == 120


@pytest.mark.asyncio
async def test_get_service_not_found(client: AsyncClient):
    response = await client.get("/api/services/does-not-exist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Service not found"


@pytest.mark.asyncio
async def test_locations_only_serviceable(client: AsyncClient, storage: Storage):
    await storage.create_location({
        "id": "50", "name": "Jumla", "name_nepali": "जुम्ला", "is_serviceable": False,
    })
    response = await client.get("/api/locations")
    assert response.status_code == 200
    names = [loc["name"] for loc in response.json()]
    assert "Jumla" not in names
    assert "Birgunj" in names
    assert len(names) == 8


@pytest.mark.asyncio
async def test_inactive_service_is_hidden(client: AsyncClient, storage: Storage):
    await storage.create_service({
        "id": "99", "category_id": "1", "name": "Retired Wiring Plan",
        "base_price": Decimal("100.00"), "is_active": False,
    })
    listed = (await client.get("/api/services")).json()
    assert "99" not in [s["id"] for s in listed]
    assert len(listed) == 15

    by_category = (await client.get("/api/services", params={"categoryId": "1"})).json()
    assert "99" not in [s["id"] for s in by_category]


# ── Caching ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_category_list_is_cached(memory_storage: Storage, fake_redis):
    catalog = CatalogService(memory_storage, fake_redis)
    first = await catalog.list_active_categories()
    assert len(first) == 10
    assert await fake_redis.exists("catalog:categories:active")

    # A later write is not visible until the cache entry expires
    await memory_storage.create_category({"id": "11", "name": "Tutoring", "name_nepali": "ट्युसन"})
    cached = await catalog.list_active_categories()
    assert [c.id for c in cached] == [c.id for c in first]


@pytest.mark.asyncio
async def test_catalog_without_redis_reads_storage(memory_storage: Storage):
    catalog = CatalogService(memory_storage, None)
    await memory_storage.create_category({"id": "11", "name": "Tutoring", "name_nepali": "ट्युसन"})
    categories = await catalog.list_active_categories()
    assert len(categories) == 11


@pytest.mark.asyncio
async def test_redis_rate_limit_window(fake_redis):
    cache = RedisCache(fake_redis)
    results = [await cache.check_rate_limit("rate:test", limit=3) for _ in range(4)]
    assert results == [True, True, True, False]
    assert 0 < await fake_redis.ttl("rate:test") <= 60


@pytest.mark.asyncio
async def test_empty_category_filter_has_its_own_cache_entry(memory_storage: Storage, fake_redis):
    catalog = CatalogService(memory_storage, fake_redis)
    assert len(await catalog.list_services(None)) == 15
    assert await catalog.list_services("") == []
    assert len(await catalog.list_services("2")) == 3
