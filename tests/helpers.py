"""
tests/helpers.py
Request builders and credentials shared by the API tests.
"""

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient

ADMIN_PASSWORD = "admin-pass-123"
CUSTOMER_PASSWORD = "customer-pass-123"


def booking_payload(**overrides) -> dict:
    """A valid guest booking for Electrical Wiring in Kathmandu."""
    payload = {
        "serviceId": "1",
        "customerName": "Sita Karki",
        "customerEmail": "sita@example.com",
        "customerPhone": "9800000000",
        "location": "Kathmandu",
        "address": "Baneshwor, Kathmandu",
        "scheduledDate": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat(),
        "paymentMethod": "cash",
    }
    payload.update(overrides)
    return payload


async def login(client: AsyncClient, email: str, password: str) -> None:
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
