"""
services/catalog/router.py
Public catalog endpoints: service categories, services and locations.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from config.redis_client import get_redis
from config.storage import get_storage
from services.catalog.service import CatalogService
from shared.schemas.schemas import LocationResponse, ServiceCategoryResponse, ServiceResponse
from shared.storage.base import Storage

router = APIRouter(tags=["Catalog"])


def get_catalog(
    storage: Storage = Depends(get_storage),
    redis=Depends(get_redis),
) -> CatalogService:
    return CatalogService(storage, redis)


@router.get("/categories", response_model=List[ServiceCategoryResponse])
async def list_categories(catalog: CatalogService = Depends(get_catalog)):
    """Active service categories only."""
    return await catalog.list_active_categories()


@router.get("/services", response_model=List[ServiceResponse])
async def list_services(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    catalog: CatalogService = Depends(get_catalog),
):
    return await catalog.list_services(category_id)


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str, catalog: CatalogService = Depends(get_catalog)):
    return await catalog.get_service(service_id)


@router.get("/locations", response_model=List[LocationResponse])
async def list_locations(catalog: CatalogService = Depends(get_catalog)):
    """Serviceable locations."""
    return await catalog.list_serviceable_locations()
