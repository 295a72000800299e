"""
tests/test_bookings.py
Tests for the booking lifecycle:
create → guest resolution → auto-assign → status / payment updates
"""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from services.booking.state_machine import TRANSITIONS, can_transition
from shared.models.models import BookingStatus
from shared.schemas.schemas import UserAccount
from shared.storage.base import Storage
from tests.helpers import CUSTOMER_PASSWORD, booking_payload, login


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ── Booking Creation ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_booking_in_kathmandu_is_assigned(client: AsyncClient, storage: Storage):
    """Electrical Wiring in Kathmandu goes to the seeded electrician."""
    response = await client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == BookingStatus.ASSIGNED.value
    assert data["professionalId"] == "1"
    assert data["estimatedPrice"] == "800.00"
    assert data["serviceId"] == "1"

    stored = await storage.get_booking(data["id"])
    assert stored.professional_id == "1"
    assert stored.status == "assigned"


@pytest.mark.asyncio
async def test_booking_outside_service_areas_stays_pending(client: AsyncClient):
    response = await client.post("/api/bookings", json=booking_payload(location="Birgunj"))
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == BookingStatus.PENDING.value
    assert data["professionalId"] is None
    assert data["estimatedPrice"] == "800.00"


@pytest.mark.asyncio
async def test_unknown_service_creates_nothing(client: AsyncClient, storage: Storage):
    users_before = len(await storage.list_users())
    bookings_before = len(await storage.list_bookings())

    response = await client.post("/api/bookings", json=booking_payload(serviceId="999"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Service not found"

    assert len(await storage.list_bookings()) == bookings_before
    assert len(await storage.list_users()) == users_before


@pytest.mark.asyncio
async def test_client_supplied_price_is_ignored(client: AsyncClient):
    payload = booking_payload(serviceId="5", estimatedPrice="1.00", location="Pokhara")
    response = await client.post("/api/bookings", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert data["estimatedPrice"] == "1500.00"
    assert data["professionalId"] == "3"


@pytest.mark.asyncio
async def test_special_requests_alias_is_accepted(client: AsyncClient):
    payload = booking_payload(specialRequests="Bring a ladder")
    response = await client.post("/api/bookings", json=payload)
    assert response.status_code == 201
    assert response.json()["specialRequirements"] == "Bring a ladder"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"scheduledDate": "not-a-date"},
        {"location": "   "},
        {"address": ""},
        {"paymentMethod": "cheque"},
    ],
)
async def test_invalid_booking_payload_returns_400(client: AsyncClient, overrides):
    response = await client.post("/api/bookings", json=booking_payload(**overrides))
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid request data"
    assert body["errors"]


@pytest.mark.asyncio
async def test_missing_service_id_returns_400(client: AsyncClient):
    payload = booking_payload()
    del payload["serviceId"]
    response = await client.post("/api/bookings", json=payload)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_scheduled_date_is_stored_in_utc(client: AsyncClient):
    requested = "2026-10-21T12:00:00+05:45"
    created = await client.post("/api/bookings", json=booking_payload(scheduledDate=requested))
    assert created.status_code == 201

    fetched = (await client.get(f"/api/bookings/{created.json()['id']}")).json()
    assert fetched["scheduledDate"] == created.json()["scheduledDate"]

    stored = _parse(fetched["scheduledDate"])
    assert stored.utcoffset().total_seconds() == 0
    assert stored == _parse(requested)
    assert _parse(fetched["createdAt"]).utcoffset().total_seconds() == 0


@pytest.mark.asyncio
async def test_scheduled_date_without_offset_is_utc(client: AsyncClient):
    created = await client.post(
        "/api/bookings", json=booking_payload(scheduledDate="2026-10-21T12:00:00")
    )
    fetched = (await client.get(f"/api/bookings/{created.json()['id']}")).json()
    assert _parse(fetched["scheduledDate"]) == datetime(2026, 10, 21, 12, tzinfo=timezone.utc)


# ── Guest Identity ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_guest_user_is_created(client: AsyncClient, storage: Storage):
    response = await client.post("/api/bookings", json=booking_payload())
    customer = await storage.get_user(response.json()["customerId"])
    assert customer.is_guest is True
    assert customer.full_name == "Sita Karki"
    assert customer.phone == "9800000000"
    assert customer.contact_email == "sita@example.com"
    assert customer.username.startswith("guest_")
    assert customer.email != "sita@example.com"


@pytest.mark.asyncio
async def test_guest_name_falls_back_to_address(client: AsyncClient, storage: Storage):
    payload = booking_payload(customerName=None, address="Ram Shrestha, Thamel, Kathmandu")
    response = await client.post("/api/bookings", json=payload)
    customer = await storage.get_user(response.json()["customerId"])
    assert customer.full_name == "Ram Shrestha"


@pytest.mark.asyncio
async def test_duplicate_guest_payloads_create_two_guests(client: AsyncClient, storage: Storage):
    users_before = len(await storage.list_users())
    payload = booking_payload()

    first = await client.post("/api/bookings", json=payload)
    second = await client.post("/api/bookings", json=payload)

    assert first.status_code == second.status_code == 201
    assert first.json()["id"] != second.json()["id"]
    assert first.json()["customerId"] != second.json()["customerId"]
    assert len(await storage.list_users()) == users_before + 2


@pytest.mark.asyncio
async def test_guest_dedupe_reuses_guest(client: AsyncClient, storage: Storage, dedupe_guests):
    payload = booking_payload()
    first = await client.post("/api/bookings", json=payload)
    second = await client.post("/api/bookings", json=payload)
    assert first.json()["customerId"] == second.json()["customerId"]
    assert len(await storage.list_bookings()) == 2


@pytest.mark.asyncio
async def test_explicit_customer_id(client: AsyncClient, customer: UserAccount):
    response = await client.post("/api/bookings", json=booking_payload(customerId=customer.id))
    assert response.status_code == 201
    assert response.json()["customerId"] == customer.id


@pytest.mark.asyncio
async def test_unknown_customer_id_returns_404(client: AsyncClient, storage: Storage):
    response = await client.post("/api/bookings", json=booking_payload(customerId="nobody"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Customer not found"
    assert await storage.list_bookings() == []


@pytest.mark.asyncio
async def test_session_user_is_the_customer(client: AsyncClient, customer: UserAccount, storage: Storage):
    await login(client, customer.email, CUSTOMER_PASSWORD)
    users_before = len(await storage.list_users())

    response = await client.post("/api/bookings", json=booking_payload())
    assert response.status_code == 201
    assert response.json()["customerId"] == customer.id
    assert len(await storage.list_users()) == users_before


# ── Read Endpoints ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_get_booking_and_not_found(client: AsyncClient):
    created = (await client.post("/api/bookings", json=booking_payload())).json()

    response = await client.get(f"/api/bookings/{created['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    response = await client.get("/api/bookings/missing")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_bookings_filters(client: AsyncClient, customer: UserAccount):
    await client.post("/api/bookings", json=booking_payload(customerId=customer.id))
    await client.post("/api/bookings", json=booking_payload(location="Birgunj"))

    all_bookings = (await client.get("/api/bookings")).json()
    assert len(all_bookings) == 2

    mine = (await client.get("/api/bookings", params={"customerId": customer.id})).json()
    assert [b["customerId"] for b in mine] == [customer.id]

    prof = (await client.get("/api/bookings", params={"professionalId": "1"})).json()
    assert len(prof) == 1

    pending = (await client.get("/api/bookings", params={"status": "pending"})).json()
    assert [b["location"] for b in pending] == ["Birgunj"]

    bad = await client.get("/api/bookings", params={"status": "lost"})
    assert bad.status_code == 400


# ── Status Updates ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_pending_to_completed_allowed_by_default(client: AsyncClient):
    created = (await client.post("/api/bookings", json=booking_payload(location="Birgunj"))).json()
    assert created["status"] == "pending"

    response = await client.patch(
        f"/api/bookings/{created['id']}/status", json={"status": "completed"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "completed"


@pytest.mark.asyncio
async def test_unknown_status_rejected(client: AsyncClient):
    created = (await client.post("/api/bookings", json=booking_payload())).json()
    response = await client.patch(
        f"/api/bookings/{created['id']}/status", json={"status": "teleported"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_update_missing_booking(client: AsyncClient):
    response = await client.patch("/api/bookings/missing/status", json={"status": "confirmed"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_status_update_sets_notes_and_final_price(client: AsyncClient):
    created = (await client.post("/api/bookings", json=booking_payload())).json()
    response = await client.patch(
        f"/api/bookings/{created['id']}/status",
        json={"status": "confirmed", "professionalNotes": "Arriving at 10", "finalPrice": "950"},
    )
    data = response.json()
    assert data["status"] == "confirmed"
    assert data["professionalNotes"] == "Arriving at 10"
    assert data["finalPrice"] == "950.00"
    assert data["estimatedPrice"] == "800.00"


@pytest.mark.asyncio
async def test_completing_booking_increments_total_jobs(client: AsyncClient, storage: Storage):
    created = (await client.post("/api/bookings", json=booking_payload())).json()
    assert created["professionalId"] == "1"

    await client.patch(f"/api/bookings/{created['id']}/status", json={"status": "completed"})
    # Re-writing the same status does not count the job twice
    await client.patch(f"/api/bookings/{created['id']}/status", json={"status": "completed"})

    prof = await storage.get_professional("1")
    assert prof.total_jobs == 1


@pytest.mark.asyncio
async def test_enforced_transitions_reject_illegal_move(client: AsyncClient, enforce_transitions):
    created = (await client.post("/api/bookings", json=booking_payload(location="Birgunj"))).json()

    response = await client.patch(
        f"/api/bookings/{created['id']}/status", json={"status": "completed"}
    )
    assert response.status_code == 409

    for step in ("confirmed", "in_progress", "completed"):
        response = await client.patch(
            f"/api/bookings/{created['id']}/status", json={"status": step}
        )
        assert response.status_code == 200, step

    response = await client.patch(
        f"/api/bookings/{created['id']}/status", json={"status": "cancelled"}
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_payment_status_is_independent(client: AsyncClient):
    created = (await client.post("/api/bookings", json=booking_payload())).json()
    response = await client.patch(
        f"/api/bookings/{created['id']}/payment-status", json={"paymentStatus": "paid"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["paymentStatus"] == "paid"
    assert data["status"] == created["status"]

    response = await client.patch(
        "/api/bookings/missing/payment-status", json={"paymentStatus": "paid"}
    )
    assert response.status_code == 404


# ── Transition table ───────────────────────────────────────────────────────────

def test_terminal_states_have_no_exits():
    terminal = {s.value for s, targets in TRANSITIONS.items() if not targets}
    assert terminal == {"completed", "cancelled", "refunded"}
    for status in terminal:
        assert not can_transition(status, "pending")
        assert can_transition(status, status)


def test_happy_path_is_legal():
    path = ["pending", "assigned", "confirmed", "in_progress", "completed"]
    for current, target in zip(path, path[1:]):
        assert can_transition(current, target)


def test_cancel_from_any_non_terminal_state():
    for status in ("pending", "assigned", "confirmed", "in_progress"):
        assert can_transition(status, "cancelled")
        assert can_transition(status, "refunded")
    assert not can_transition("completed", "cancelled")
