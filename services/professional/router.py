"""
services/professional/router.py
Professional registry: listing with service/location filters, profile creation.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from config.storage import get_storage
from services.professional.matching import (
    covers_area_label,
    find_matches,
    is_bookable,
    offers_service,
)
from shared.schemas.schemas import ProfessionalCreateRequest, ProfessionalResponse
from shared.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/professionals", tags=["Professionals"])


@router.get("", response_model=List[ProfessionalResponse])
async def list_professionals(
    service_id: Optional[str] = Query(None, alias="serviceId"),
    location: Optional[str] = Query(None, max_length=255),
    storage: Storage = Depends(get_storage),
):
    """
    - serviceId + location: the same filter auto-assignment uses
    - serviceId only: verified, available professionals offering the service
    - location only: professionals whose area labels fall in the location
    - neither: everyone
    """
    professionals = await storage.list_professionals()
    location = location.strip() if location else None

    if service_id is None:
        if location:
            return [p for p in professionals if covers_area_label(p, location)]
        return professionals

    service = await storage.get_service(service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")

    if location:
        registry = await storage.list_locations()
        return find_matches(professionals, service, location, registry)
    return [p for p in professionals if is_bookable(p) and offers_service(p, service)]


@router.get("/{professional_id}", response_model=ProfessionalResponse)
async def get_professional(professional_id: str, storage: Storage = Depends(get_storage)):
    prof = await storage.get_professional(professional_id)
    if not prof:
        raise HTTPException(status_code=404, detail="Professional not found")
    return prof


@router.post("", response_model=ProfessionalResponse, status_code=status.HTTP_201_CREATED)
async def create_professional(
    data: ProfessionalCreateRequest,
    storage: Storage = Depends(get_storage),
):
    """Register a professional profile for an existing user."""
    if not await storage.get_user(data.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    if await storage.get_professional_by_user_id(data.user_id):
        raise HTTPException(status_code=409, detail="Professional profile already exists")

    prof = await storage.create_professional(data.model_dump())
    logger.info(f"Professional profile created: {prof.id} (user {prof.user_id})")
    return prof
