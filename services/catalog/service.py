"""Catalog service - read-side lookups for categories, services and locations"""

import logging
from typing import List, Optional

import redis.asyncio as aioredis
from fastapi import HTTPException

from config.redis_client import RedisCache
from shared.schemas.schemas import LocationResponse, ServiceCategoryResponse, ServiceResponse
from shared.storage.base import Storage

logger = logging.getLogger(__name__)

CACHE_PREFIX = "catalog"


class CatalogService:
    """
    Catalog and location registry reads. Lists are cached in Redis when a
    client is available; a cache failure falls through to storage.
    """

    def __init__(self, storage: Storage, redis: Optional[aioredis.Redis] = None):
        self.storage = storage
        self.cache = RedisCache(redis) if redis is not None else None

    async def _cached(self, key: str, model, loader):
        key = f"{CACHE_PREFIX}:{key}"
        if self.cache:
            try:
                hit = await self.cache.get(key)
                if hit is not None:
                    return [model.model_validate(item) for item in hit]
            except Exception as e:
                logger.warning(f"Catalog cache read failed for {key}: {e}")

        records = await loader()

        if self.cache:
            try:
                await self.cache.set(key, [r.model_dump(mode="json") for r in records])
            except Exception as e:
                logger.warning(f"Catalog cache write failed for {key}: {e}")
        return records

    async def list_active_categories(self) -> List[ServiceCategoryResponse]:
        return await self._cached(
            "categories:active",
            ServiceCategoryResponse,
            lambda: self.storage.list_categories(active_only=True),
        )

    async def list_services(self, category_id: Optional[str] = None) -> List[ServiceResponse]:
        """Active services, optionally for one category."""
        key = "services:all" if category_id is None else f"services:category:{category_id}"
        return await self._cached(
            key,
            ServiceResponse,
            lambda: self.storage.list_services(category_id=category_id, active_only=True),
        )

    async def get_service(self, service_id: str) -> ServiceResponse:
        service = await self.storage.get_service(service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    async def list_serviceable_locations(self) -> List[LocationResponse]:
        return await self._cached(
            "locations:serviceable",
            LocationResponse,
            lambda: self.storage.list_locations(serviceable_only=True),
        )
