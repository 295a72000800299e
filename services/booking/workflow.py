"""Booking workflow - creation, guest resolution, auto-assignment and status changes"""

import logging
from typing import List, Optional

from fastapi import HTTPException

from config.settings import settings
from services.booking.state_machine import can_transition
from services.notification.webhooks import dispatch_event
from services.professional.matching import select_professional
from shared.models.models import BookingStatus, UserRole
from shared.schemas.schemas import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatusUpdate,
    PaymentStatusUpdate,
    ServiceResponse,
    UserAccount,
)
from shared.storage.base import Storage
from shared.utils.security import (
    UNUSABLE_PASSWORD,
    guest_credentials,
    guest_handle,
    guest_identity_key,
)

logger = logging.getLogger(__name__)


def guest_display_name(customer_name: Optional[str], address: str) -> str:
    """customerName, else the first comma-separated part of the address, else a placeholder."""
    if customer_name and customer_name.strip():
        return customer_name.strip()
    first = address.split(",")[0].strip()
    return first or "Guest User"


class BookingWorkflow:
    """
    Service layer for the booking lifecycle.

    create(): service check → customer resolution → persist as pending →
    match → assign. Nothing is written before the service is known to exist.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    # ── Reads ─────────────────────────────────────────────────

    async def get(self, booking_id: str) -> BookingResponse:
        booking = await self.storage.get_booking(booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    async def list_bookings(
        self,
        customer_id: Optional[str] = None,
        professional_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[BookingResponse]:
        return await self.storage.list_bookings(
            customer_id=customer_id, professional_id=professional_id, status=status
        )

    # ── Creation ──────────────────────────────────────────────

    async def _get_service(self, service_id: str) -> ServiceResponse:
        service = await self.storage.get_service(service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    async def resolve_customer(
        self,
        data: BookingCreateRequest,
        session_user: Optional[UserAccount],
    ) -> UserAccount:
        """Explicit customerId, else the logged-in user, else a guest account."""
        if data.customer_id:
            customer = await self.storage.get_user(data.customer_id)
            if not customer:
                raise HTTPException(status_code=404, detail="Customer not found")
            return customer
        if session_user:
            return session_user
        return await self._create_guest(data)

    async def _create_guest(self, data: BookingCreateRequest) -> UserAccount:
        email = str(data.customer_email) if data.customer_email else None

        if settings.GUEST_IDENTITY_DEDUPE and (email or data.customer_phone):
            handle = guest_identity_key(email, data.customer_phone)
            credentials = guest_credentials(handle)
            existing = await self.storage.get_user_by_username(credentials["username"])
            if existing:
                return existing
        else:
            credentials = guest_credentials(guest_handle())

        guest = await self.storage.create_user({
            **credentials,
            "password_hash": UNUSABLE_PASSWORD,
            "full_name": guest_display_name(data.customer_name, data.address),
            "phone": data.customer_phone,
            "contact_email": email,
            "role": UserRole.CUSTOMER.value,
            "is_guest": True,
        })
        logger.info(f"Guest user created: {guest.id}")
        return guest

    async def create(
        self,
        data: BookingCreateRequest,
        session_user: Optional[UserAccount] = None,
    ) -> BookingResponse:
        service = await self._get_service(data.service_id)
        customer = await self.resolve_customer(data, session_user)

        booking = await self.storage.create_booking({
            "customer_id": customer.id,
            "service_id": service.id,
            "location": data.location,
            "address": data.address,
            "coordinates": data.coordinates.model_dump() if data.coordinates else None,
            "scheduled_date": data.scheduled_date,
            # Priced from the catalog; clients cannot set their own price
            "estimated_price": service.base_price,
            "status": BookingStatus.PENDING.value,
            "description": data.description,
            "special_requirements": data.special_requirements,
            "payment_method": data.payment_method,
            "customer_notes": data.customer_notes,
        })
        logger.info(f"Booking created: {booking.id} (service {service.id}, customer {customer.id})")
        dispatch_event("new_booking", booking)

        return await self.auto_assign(booking, service)

    async def auto_assign(self, booking: BookingResponse, service: ServiceResponse) -> BookingResponse:
        """Assign the first matching professional. No match leaves the booking pending."""
        professionals = await self.storage.list_professionals()
        registry = await self.storage.list_locations()
        chosen = select_professional(professionals, service, booking.location, registry)

        if chosen is None:
            logger.info(f"No professional matched booking {booking.id} ({booking.location})")
            return booking

        assigned = await self.storage.update_booking(booking.id, {
            "professional_id": chosen.id,
            "status": BookingStatus.ASSIGNED.value,
        })
        logger.info(f"Booking {booking.id} assigned to professional {chosen.id}")
        dispatch_event("professional_assignment", assigned)
        return assigned

    # ── Updates ───────────────────────────────────────────────

    async def update_status(self, booking_id: str, data: BookingStatusUpdate) -> BookingResponse:
        booking = await self.get(booking_id)
        target = BookingStatus(data.status)

        if settings.ENFORCE_STATUS_TRANSITIONS and not can_transition(booking.status, target):
            raise HTTPException(
                status_code=409,
                detail=f"Cannot move booking from '{booking.status}' to '{target.value}'",
            )

        changes = {"status": target.value}
        if data.professional_notes is not None:
            changes["professional_notes"] = data.professional_notes
        if data.final_price is not None:
            changes["final_price"] = data.final_price

        updated = await self.storage.update_booking(booking_id, changes)
        if updated is None:
            raise HTTPException(status_code=404, detail="Booking not found")

        if (
            target == BookingStatus.COMPLETED
            and booking.status != BookingStatus.COMPLETED.value
            and updated.professional_id
        ):
            await self._record_completed_job(updated.professional_id)

        logger.info(f"Booking {booking_id} status: {booking.status} → {target.value}")
        dispatch_event("booking_status_update", updated)
        return updated

    async def _record_completed_job(self, professional_id: str) -> None:
        prof = await self.storage.get_professional(professional_id)
        if prof:
            await self.storage.update_professional(
                professional_id, {"total_jobs": prof.total_jobs + 1}
            )

    async def update_payment_status(
        self, booking_id: str, data: PaymentStatusUpdate
    ) -> BookingResponse:
        updated = await self.storage.update_booking(
            booking_id, {"payment_status": data.payment_status}
        )
        if updated is None:
            raise HTTPException(status_code=404, detail="Booking not found")
        logger.info(f"Booking {booking_id} payment status: {updated.payment_status}")
        return updated
