"""
services/contact/router.py
Contact-us form submissions.
"""

import logging

from fastapi import APIRouter, Depends, status

from config.storage import get_storage
from shared.schemas.schemas import ContactRequestCreate, MessageResponse
from shared.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["Contact"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(data: ContactRequestCreate, storage: Storage = Depends(get_storage)):
    contact = await storage.create_contact_request(data.model_dump())
    logger.info(f"Contact request received: {contact.id}")
    return MessageResponse(message="Thank you for contacting us. We will get back to you soon.", id=contact.id)
