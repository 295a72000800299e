"""
tests/test_auth.py
Tests for session authentication: register, login, current user, logout.
"""

import pytest
from httpx import AsyncClient

from config.storage import get_storage
from main import app
from shared.schemas.schemas import UserAccount
from shared.storage.base import Storage
from shared.storage.memory import MemoryStorage
from tests.helpers import CUSTOMER_PASSWORD, booking_payload, login


def _register_payload(**overrides) -> dict:
    payload = {
        "username": "bikash",
        "email": "bikash@example.com",
        "password": "bikash-pass",
        "fullName": "Bikash Rai",
        "phone": "9812345678",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_unauthenticated_returns_401(client: AsyncClient):
    response = await client.get("/api/auth/user")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


@pytest.mark.asyncio
async def test_register_starts_session(client: AsyncClient):
    response = await client.post("/api/auth/register", json=_register_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "bikash@example.com"
    assert data["role"] == "customer"
    assert "passwordHash" not in data
    assert "password" not in data

    me = await client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["id"] == data["id"]


@pytest.mark.asyncio
async def test_register_professional_role(client: AsyncClient):
    response = await client.post("/api/auth/register", json=_register_payload(role="professional"))
    assert response.status_code == 201
    assert response.json()["role"] == "professional"


@pytest.mark.asyncio
async def test_register_cannot_self_assign_admin(client: AsyncClient):
    response = await client.post("/api/auth/register", json=_register_payload(role="admin"))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, customer: UserAccount):
    response = await client.post(
        "/api/auth/register", json=_register_payload(email="SITA@example.com")
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, customer: UserAccount):
    response = await client.post("/api/auth/register", json=_register_payload(username="sita"))
    assert response.status_code == 409
    assert response.json()["detail"] == "Username already taken"


@pytest.mark.asyncio
async def test_register_validation(client: AsyncClient):
    response = await client.post(
        "/api/auth/register", json=_register_payload(email="not-an-email", password="123")
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request data"


@pytest.mark.asyncio
async def test_login_and_current_user(client: AsyncClient, customer: UserAccount):
    await login(client, customer.email, CUSTOMER_PASSWORD)
    response = await client.get("/api/auth/user")
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "sita"
    assert data["fullName"] == "Sita Karki"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, customer: UserAccount):
    response = await client.post(
        "/api/auth/login", json={"email": customer.email, "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    response = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "whatever"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_seeded_professional_cannot_login(client: AsyncClient):
    response = await client.post(
        "/api/auth/login", json={"email": "ram@jaruri-chha.com", "password": "!"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_guest_account_cannot_login(client: AsyncClient, storage: Storage):
    booking = (await client.post("/api/bookings", json=booking_payload())).json()
    guest = await storage.get_user(booking["customerId"])
    response = await client.post(
        "/api/auth/login", json={"email": guest.email, "password": ""}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_session(client: AsyncClient, customer: UserAccount):
    await login(client, customer.email, CUSTOMER_PASSWORD)

    response = await client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully", "success": True, "id": None}

    me = await client.get("/api/auth/user")
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_stale_session_is_anonymous(client: AsyncClient):
    await client.post("/api/auth/register", json=_register_payload())

    # Swap in an empty store: the session now names a user that does not exist
    app.dependency_overrides[get_storage] = lambda: MemoryStorage()
    response = await client.get("/api/auth/user")
    assert response.status_code == 401


# ── Infrastructure ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["storage"] == "ok"
    assert "redis" not in data


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["health"] == "/health"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/api/categories", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Process-Time"].endswith("ms")
