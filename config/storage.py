"""
config/storage.py
Process-wide storage adapter, selected by STORAGE_BACKEND at startup.
"""

import logging
from typing import Optional

from config.settings import settings
from shared.storage.base import Storage

logger = logging.getLogger(__name__)

# ── Global adapter (initialized on startup) ───────────────────
storage: Optional[Storage] = None


def build_storage(backend: str) -> Storage:
    if backend == "memory":
        from shared.storage.memory import MemoryStorage
        return MemoryStorage()
    from shared.storage.sql import SQLStorage
    return SQLStorage()


async def init_storage(seed_data: bool = settings.SEED_ON_STARTUP) -> Storage:
    """Create the adapter, prepare it, and seed it when empty."""
    global storage
    storage = build_storage(settings.STORAGE_BACKEND)
    await storage.init()

    if seed_data and await storage.is_empty():
        from shared.storage.seed import seed
        await seed(storage, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

    logger.info("Storage ready", extra={"backend": storage.name})
    return storage


async def close_storage() -> None:
    global storage
    if storage:
        await storage.close()
        storage = None


def get_storage() -> Storage:
    """FastAPI dependency. Tests override it with a per-test adapter."""
    if storage is None:
        raise RuntimeError("Storage not initialized. Call init_storage() first.")
    return storage
