"""
config/settings.py
Application settings loaded from environment variables.
Uses Pydantic BaseSettings for validation and type safety.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────
    APP_NAME: str = "Jaruri Chha"
    APP_ENV: str = "development"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    SECRET_KEY: str

    # ── Server ───────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    WORKERS: int = 4

    # ── Storage ──────────────────────────────────────────────
    STORAGE_BACKEND: str = "sql"        # "sql" | "memory"
    SEED_ON_STARTUP: bool = True
    ADMIN_EMAIL: Optional[str] = None   # Bootstrap admin, created with the seed
    ADMIN_PASSWORD: Optional[str] = None

    # ── Database ─────────────────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./jaruri_chha.db"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_POOL_TIMEOUT: int = 30

    # ── Redis ────────────────────────────────────────────────
    REDIS_URL: Optional[str] = None
    REDIS_CACHE_TTL: int = 300          # 5 minutes

    # ── CORS ─────────────────────────────────────────────────
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:5000"

    # ── Celery ───────────────────────────────────────────────
    CELERY_BROKER_URL: str = "redis://localhost:6379/1"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/2"
    CELERY_TASK_ALWAYS_EAGER: bool = False

    # ── Zapier webhooks ──────────────────────────────────────
    ZAPIER_NEW_BOOKING_WEBHOOK: str = ""
    ZAPIER_BOOKING_STATUS_WEBHOOK: str = ""
    ZAPIER_NEW_USER_WEBHOOK: str = ""
    ZAPIER_PROFESSIONAL_ASSIGNMENT_WEBHOOK: str = ""
    WEBHOOK_TIMEOUT_SECONDS: float = 10.0

    # ── Rate Limiting ────────────────────────────────────────
    RATE_LIMIT_UNAUTH_PER_MINUTE: int = 100

    # ── Business Config ──────────────────────────────────────
    ENFORCE_STATUS_TRANSITIONS: bool = False
    GUEST_IDENTITY_DEDUPE: bool = False

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("sql", "memory"):
            raise ValueError("STORAGE_BACKEND must be 'sql' or 'memory'")
        return v

    @property
    def allowed_origins_list(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def webhook_urls(self) -> dict:
        return {
            "new_booking": self.ZAPIER_NEW_BOOKING_WEBHOOK,
            "booking_status_update": self.ZAPIER_BOOKING_STATUS_WEBHOOK,
            "new_user_registration": self.ZAPIER_NEW_USER_WEBHOOK,
            "professional_assignment": self.ZAPIER_PROFESSIONAL_ASSIGNMENT_WEBHOOK,
        }


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance. Call this everywhere."""
    return Settings()


settings = get_settings()
