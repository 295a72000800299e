"""
services/review/router.py
Rating and review management.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from config.storage import get_storage
from shared.middleware.auth import get_optional_user
from shared.schemas.schemas import ReviewCreateRequest, ReviewResponse, UserAccount
from shared.storage.base import Storage

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def average_rating(ratings: List[int]) -> Decimal:
    if not ratings:
        return Decimal("0.00")
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@router.get("", response_model=List[ReviewResponse])
async def list_reviews(
    professional_id: Optional[str] = Query(None, alias="professionalId"),
    storage: Storage = Depends(get_storage),
):
    return await storage.list_reviews(professional_id=professional_id)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    data: ReviewCreateRequest,
    current_user: Optional[UserAccount] = Depends(get_optional_user),
    storage: Storage = Depends(get_storage),
):
    """
    Submit a review for a booking.
    - The booking must exist and be assigned to the reviewed professional
    - The reviewer defaults to the session user, then the booking's customer
    """
    booking = await storage.get_booking(data.booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    if booking.professional_id != data.professional_id:
        raise HTTPException(status_code=404, detail="Booking not found for this professional")

    if data.customer_id and not await storage.get_user(data.customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    customer_id = data.customer_id or (current_user.id if current_user else booking.customer_id)

    review = await storage.create_review({
        "booking_id": booking.id,
        "customer_id": customer_id,
        "professional_id": data.professional_id,
        "rating": data.rating,
        "comment": data.comment,
    })

    # Recalculate and denormalize aggregate rating on the professional
    reviews = await storage.list_reviews(professional_id=data.professional_id)
    await storage.update_professional(
        data.professional_id, {"rating": average_rating([r.rating for r in reviews])}
    )

    return review
