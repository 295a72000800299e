"""
shared/storage/memory.py
Dict-backed storage. Records live in insertion-ordered dicts keyed by id,
so list_professionals() iterates in registry order. Callers get copies;
writes replace the stored record (last write wins).
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from shared.models.models import new_id
from shared.schemas.schemas import (
    BookingResponse,
    ContactRequestResponse,
    LocationResponse,
    NotificationSubscriptionResponse,
    ProfessionalResponse,
    ReviewResponse,
    ServiceCategoryResponse,
    ServiceResponse,
    UserAccount,
)
from shared.storage.base import Storage

RecordT = TypeVar("RecordT", bound=BaseModel)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _quantize(value, places: str = "0.01") -> Optional[Decimal]:
    """Mirror Numeric(…, 2) columns so both backends return the same values."""
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal(places))


class MemoryStorage(Storage):
    name = "memory"

    def __init__(self):
        self.users: Dict[str, UserAccount] = {}
        self.categories: Dict[str, ServiceCategoryResponse] = {}
        self.services: Dict[str, ServiceResponse] = {}
        self.locations: Dict[str, LocationResponse] = {}
        self.professionals: Dict[str, ProfessionalResponse] = {}
        self.bookings: Dict[str, BookingResponse] = {}
        self.reviews: Dict[str, ReviewResponse] = {}
        self.contact_requests: Dict[str, ContactRequestResponse] = {}
        self.subscriptions: Dict[str, NotificationSubscriptionResponse] = {}

    # ── Helpers ───────────────────────────────────────────────

    @staticmethod
    def _insert(table: Dict[str, RecordT], model: Type[RecordT], data: dict) -> RecordT:
        row = dict(data)
        row["id"] = row.get("id") or new_id()
        record = model.model_validate(row)
        table[record.id] = record
        return record.model_copy(deep=True)

    @staticmethod
    def _get(table: Dict[str, RecordT], key: str) -> Optional[RecordT]:
        record = table.get(key)
        return record.model_copy(deep=True) if record else None

    @staticmethod
    def _values(table: Dict[str, RecordT]) -> List[RecordT]:
        return [r.model_copy(deep=True) for r in table.values()]

    @staticmethod
    def _update(table: Dict[str, RecordT], key: str, changes: dict) -> Optional[RecordT]:
        record = table.get(key)
        if record is None:
            return None
        # Round-trip through validation so enums/decimals are normalized
        merged = {**record.model_dump(), **changes}
        updated = type(record).model_validate(merged)
        table[key] = updated
        return updated.model_copy(deep=True)

    # ── Users ─────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> Optional[UserAccount]:
        return self._get(self.users, user_id)

    async def get_user_by_email(self, email: str) -> Optional[UserAccount]:
        email = email.lower()
        for user in self.users.values():
            if user.email.lower() == email:
                return user.model_copy(deep=True)
        return None

    async def get_user_by_username(self, username: str) -> Optional[UserAccount]:
        for user in self.users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    async def list_users(self) -> List[UserAccount]:
        return self._values(self.users)

    async def create_user(self, data: dict) -> UserAccount:
        now = _now()
        return self._insert(
            self.users, UserAccount, {"created_at": now, "updated_at": now, **data}
        )

    # ── Catalog ───────────────────────────────────────────────

    async def list_categories(self, active_only: bool = False) -> List[ServiceCategoryResponse]:
        return [c for c in self._values(self.categories) if c.is_active or not active_only]

    async def create_category(self, data: dict) -> ServiceCategoryResponse:
        return self._insert(self.categories, ServiceCategoryResponse, data)

    async def list_services(
        self, category_id: Optional[str] = None, active_only: bool = False
    ) -> List[ServiceResponse]:
        services = self._values(self.services)
        if category_id is not None:
            services = [s for s in services if s.category_id == category_id]
        if active_only:
            services = [s for s in services if s.is_active]
        return services

    async def get_service(self, service_id: str) -> Optional[ServiceResponse]:
        return self._get(self.services, service_id)

    async def create_service(self, data: dict) -> ServiceResponse:
        row = {**data, "base_price": _quantize(data["base_price"])}
        return self._insert(self.services, ServiceResponse, row)

    # ── Locations ─────────────────────────────────────────────

    async def list_locations(self, serviceable_only: bool = False) -> List[LocationResponse]:
        return [
            loc for loc in self._values(self.locations)
            if loc.is_serviceable or not serviceable_only
        ]

    async def create_location(self, data: dict) -> LocationResponse:
        return self._insert(self.locations, LocationResponse, data)

    # ── Professionals ─────────────────────────────────────────

    async def list_professionals(self) -> List[ProfessionalResponse]:
        return self._values(self.professionals)

    async def get_professional(self, professional_id: str) -> Optional[ProfessionalResponse]:
        return self._get(self.professionals, professional_id)

    async def get_professional_by_user_id(self, user_id: str) -> Optional[ProfessionalResponse]:
        for prof in self.professionals.values():
            if prof.user_id == user_id:
                return prof.model_copy(deep=True)
        return None

    async def create_professional(self, data: dict) -> ProfessionalResponse:
        row = {
            "created_at": _now(),
            **data,
            "hourly_rate": _quantize(data.get("hourly_rate")),
            "rating": _quantize(data.get("rating") or "0.00"),
        }
        return self._insert(self.professionals, ProfessionalResponse, row)

    async def update_professional(
        self, professional_id: str, changes: dict
    ) -> Optional[ProfessionalResponse]:
        if "rating" in changes:
            changes = {**changes, "rating": _quantize(changes["rating"])}
        return self._update(self.professionals, professional_id, changes)

    # ── Bookings ──────────────────────────────────────────────

    async def list_bookings(
        self,
        customer_id: Optional[str] = None,
        professional_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[BookingResponse]:
        bookings = self._values(self.bookings)
        if customer_id is not None:
            bookings = [b for b in bookings if b.customer_id == customer_id]
        if professional_id is not None:
            bookings = [b for b in bookings if b.professional_id == professional_id]
        if status is not None:
            bookings = [b for b in bookings if b.status == status]
        return bookings

    async def get_booking(self, booking_id: str) -> Optional[BookingResponse]:
        return self._get(self.bookings, booking_id)

    async def create_booking(self, data: dict) -> BookingResponse:
        now = _now()
        row = {
            "created_at": now,
            "updated_at": now,
            **data,
            "estimated_price": _quantize(data["estimated_price"]),
            "final_price": _quantize(data.get("final_price")),
        }
        return self._insert(self.bookings, BookingResponse, row)

    async def update_booking(self, booking_id: str, changes: dict) -> Optional[BookingResponse]:
        changes = {**changes, "updated_at": _now()}
        if changes.get("final_price") is not None:
            changes["final_price"] = _quantize(changes["final_price"])
        return self._update(self.bookings, booking_id, changes)

    # ── Reviews ───────────────────────────────────────────────

    async def list_reviews(self, professional_id: Optional[str] = None) -> List[ReviewResponse]:
        reviews = self._values(self.reviews)
        if professional_id is not None:
            reviews = [r for r in reviews if r.professional_id == professional_id]
        return reviews

    async def create_review(self, data: dict) -> ReviewResponse:
        return self._insert(self.reviews, ReviewResponse, {"created_at": _now(), **data})

    # ── Contact / Subscriptions ───────────────────────────────

    async def create_contact_request(self, data: dict) -> ContactRequestResponse:
        return self._insert(
            self.contact_requests, ContactRequestResponse, {"created_at": _now(), **data}
        )

    async def get_subscription_by_email(
        self, email: str
    ) -> Optional[NotificationSubscriptionResponse]:
        email = email.lower()
        for sub in self.subscriptions.values():
            if sub.email.lower() == email:
                return sub.model_copy(deep=True)
        return None

    async def create_subscription(self, data: dict) -> NotificationSubscriptionResponse:
        return self._insert(
            self.subscriptions, NotificationSubscriptionResponse, {"created_at": _now(), **data}
        )
