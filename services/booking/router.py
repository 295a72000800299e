"""
services/booking/router.py
Booking lifecycle endpoints.
States: pending → assigned → confirmed → in_progress → completed,
        cancelled | refunded from any non-terminal state.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from config.storage import get_storage
from services.booking.workflow import BookingWorkflow
from shared.middleware.auth import get_optional_user
from shared.models.models import BookingStatus
from shared.schemas.schemas import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatusUpdate,
    PaymentStatusUpdate,
    UserAccount,
)
from shared.storage.base import Storage

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_workflow(storage: Storage = Depends(get_storage)) -> BookingWorkflow:
    return BookingWorkflow(storage)


# ── Booking Creation ──────────────────────────────────────────

@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreateRequest,
    current_user: Optional[UserAccount] = Depends(get_optional_user),
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """
    Create a booking. Steps:
    1. Validate the service exists (404 otherwise, nothing persisted)
    2. Resolve the customer: customerId, session user, or a new guest
    3. Persist as pending at the service's base price
    4. Auto-assign the first matching professional, if any
    """
    return await workflow.create(data, current_user)


# ── Read Endpoints ────────────────────────────────────────────

@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    customer_id: Optional[str] = Query(None, alias="customerId"),
    professional_id: Optional[str] = Query(None, alias="professionalId"),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    workflow: BookingWorkflow = Depends(get_workflow),
):
    return await workflow.list_bookings(
        customer_id=customer_id,
        professional_id=professional_id,
        status=status_filter.value if status_filter else None,
    )


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: str, workflow: BookingWorkflow = Depends(get_workflow)):
    return await workflow.get(booking_id)


# ── Status Updates ────────────────────────────────────────────

@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """Overwrite the booking status. Illegal moves are rejected only when transitions are enforced."""
    return await workflow.update_status(booking_id, data)


@router.patch("/{booking_id}/payment-status", response_model=BookingResponse)
async def update_payment_status(
    booking_id: str,
    data: PaymentStatusUpdate,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    return await workflow.update_payment_status(booking_id, data)
