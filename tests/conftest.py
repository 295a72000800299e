"""
tests/conftest.py
Shared fixtures. Every API test runs once per storage backend
(in-memory and SQLite via SQLAlchemy), each seeded with the demo catalog.
"""

import os

# Must be set before any app module reads settings
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["REDIS_URL"] = ""
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
import pytest_asyncio
from fakeredis import aioredis as fake_aioredis
from httpx import ASGITransport, AsyncClient

from config.redis_client import get_redis
from config.storage import get_storage
from main import app
from shared.schemas.schemas import UserAccount
from shared.storage.base import Storage
from shared.storage.memory import MemoryStorage
from shared.storage.seed import seed
from shared.storage.sql import SQLStorage
from shared.utils.security import hash_password
from tests.helpers import ADMIN_PASSWORD, CUSTOMER_PASSWORD


# ── Storage ───────────────────────────────────────────────────

@pytest_asyncio.fixture(params=["memory", "sql"])
async def storage(request) -> Storage:
    """Fresh, seeded store per test. The SQL backend gets a new in-memory database."""
    store = MemoryStorage() if request.param == "memory" else SQLStorage()
    await store.init()
    await seed(store)
    yield store
    await store.close()


@pytest_asyncio.fixture
async def memory_storage() -> Storage:
    store = MemoryStorage()
    await seed(store)
    return store


@pytest_asyncio.fixture
async def fake_redis():
    client = fake_aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


# ── HTTP client ───────────────────────────────────────────────

@pytest_asyncio.fixture
async def client(storage: Storage):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_redis] = lambda: None
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ── Users ─────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def admin_user(storage: Storage) -> UserAccount:
    return await storage.create_user({
        "username": "admin",
        "email": "admin@jaruri-chha.com",
        "password_hash": hash_password(ADMIN_PASSWORD),
        "full_name": "Admin User",
        "role": "admin",
        "is_verified": True,
    })


@pytest_asyncio.fixture
async def customer(storage: Storage) -> UserAccount:
    return await storage.create_user({
        "username": "sita",
        "email": "sita@example.com",
        "password_hash": hash_password(CUSTOMER_PASSWORD),
        "full_name": "Sita Karki",
        "phone": "9800000000",
        "role": "customer",
    })


# ── Settings toggles ──────────────────────────────────────────

@pytest.fixture
def enforce_transitions(monkeypatch):
    from config.settings import settings
    monkeypatch.setattr(settings, "ENFORCE_STATUS_TRANSITIONS", True)


@pytest.fixture
def dedupe_guests(monkeypatch):
    from config.settings import settings
    monkeypatch.setattr(settings, "GUEST_IDENTITY_DEDUPE", True)
