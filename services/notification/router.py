"""
services/notification/router.py
Launch-notification e-mail signups.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from config.storage import get_storage
from shared.schemas.schemas import MessageResponse, NotificationSubscribeRequest
from shared.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("/subscribe", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(data: NotificationSubscribeRequest, storage: Storage = Depends(get_storage)):
    email = str(data.email).lower()
    if await storage.get_subscription_by_email(email):
        raise HTTPException(status_code=409, detail="Email already subscribed")

    subscription = await storage.create_subscription({"email": email})
    logger.info(f"New notification subscription: {subscription.id}")
    return MessageResponse(
        message="You will be notified when the app launches",
        id=subscription.id,
    )
