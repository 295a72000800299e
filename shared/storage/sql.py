"""
shared/storage/sql.py
SQLAlchemy-backed storage. One short session per call; each write commits
before returning so concurrent requests see each other's rows.
"""

from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import func, select

from config.database import close_db, get_db_context, init_db
from shared.models.models import (
    Booking,
    ContactRequest,
    Location,
    NotificationSubscription,
    Professional,
    Review,
    Service,
    ServiceCategory,
    User,
    utcnow,
)
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


class SQLStorage(Storage):
    name = "sql"

    def __init__(self, create_tables: bool = True):
        self.create_tables = create_tables

    async def init(self) -> None:
        if self.create_tables:
            await init_db()

    async def close(self) -> None:
        await close_db()

    # ── Helpers ───────────────────────────────────────────────

    @staticmethod
    async def _add(orm_cls, schema: Type[RecordT], data: dict) -> RecordT:
        async with get_db_context() as session:
            row = orm_cls(**data)
            session.add(row)
            await session.flush()
            # Reload so column types (Numeric scale, UTC timestamps) apply
            await session.refresh(row)
            return schema.model_validate(row)

    @staticmethod
    async def _one(stmt, schema: Type[RecordT]) -> Optional[RecordT]:
        async with get_db_context() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
            return schema.model_validate(row) if row else None

    @staticmethod
    async def _all(stmt, schema: Type[RecordT]) -> List[RecordT]:
        async with get_db_context() as session:
            result = await session.execute(stmt)
            return [schema.model_validate(r) for r in result.scalars().all()]

    @staticmethod
    async def _patch(orm_cls, schema: Type[RecordT], key: str, changes: dict) -> Optional[RecordT]:
        async with get_db_context() as session:
            row = await session.get(orm_cls, key)
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            await session.flush()
            await session.refresh(row)
            return schema.model_validate(row)

    # ── Users ─────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> Optional[UserAccount]:
        return await self._one(select(User).where(User.id == user_id), UserAccount)

    async def get_user_by_email(self, email: str) -> Optional[UserAccount]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return await self._one(stmt, UserAccount)

    async def get_user_by_username(self, username: str) -> Optional[UserAccount]:
        return await self._one(select(User).where(User.username == username), UserAccount)

    async def list_users(self) -> List[UserAccount]:
        return await self._all(select(User).order_by(User.created_at, User.id), UserAccount)

    async def create_user(self, data: dict) -> UserAccount:
        return await self._add(User, UserAccount, data)

    # ── Catalog ───────────────────────────────────────────────

    async def list_categories(self, active_only: bool = False) -> List[ServiceCategoryResponse]:
        stmt = select(ServiceCategory)
        if active_only:
            stmt = stmt.where(ServiceCategory.is_active.is_(True))
        return await self._all(stmt, ServiceCategoryResponse)

    async def create_category(self, data: dict) -> ServiceCategoryResponse:
        return await self._add(ServiceCategory, ServiceCategoryResponse, data)

    async def list_services(
        self, category_id: Optional[str] = None, active_only: bool = False
    ) -> List[ServiceResponse]:
        stmt = select(Service)
        if category_id is not None:
            stmt = stmt.where(Service.category_id == category_id)
        if active_only:
            stmt = stmt.where(Service.is_active.is_(True))
        return await self._all(stmt, ServiceResponse)

    async def get_service(self, service_id: str) -> Optional[ServiceResponse]:
        return await self._one(select(Service).where(Service.id == service_id), ServiceResponse)

    async def create_service(self, data: dict) -> ServiceResponse:
        return await self._add(Service, ServiceResponse, data)

    # ── Locations ─────────────────────────────────────────────

    async def list_locations(self, serviceable_only: bool = False) -> List[LocationResponse]:
        stmt = select(Location)
        if serviceable_only:
            stmt = stmt.where(Location.is_serviceable.is_(True))
        return await self._all(stmt, LocationResponse)

    async def create_location(self, data: dict) -> LocationResponse:
        return await self._add(Location, LocationResponse, data)

    # ── Professionals ─────────────────────────────────────────

    async def list_professionals(self) -> List[ProfessionalResponse]:
        stmt = select(Professional).order_by(Professional.created_at, Professional.id)
        return await self._all(stmt, ProfessionalResponse)

    async def get_professional(self, professional_id: str) -> Optional[ProfessionalResponse]:
        stmt = select(Professional).where(Professional.id == professional_id)
        return await self._one(stmt, ProfessionalResponse)

    async def get_professional_by_user_id(self, user_id: str) -> Optional[ProfessionalResponse]:
        stmt = select(Professional).where(Professional.user_id == user_id).limit(1)
        return await self._one(stmt, ProfessionalResponse)

    async def create_professional(self, data: dict) -> ProfessionalResponse:
        return await self._add(Professional, ProfessionalResponse, data)

    async def update_professional(
        self, professional_id: str, changes: dict
    ) -> Optional[ProfessionalResponse]:
        return await self._patch(Professional, ProfessionalResponse, professional_id, changes)

    # ── Bookings ──────────────────────────────────────────────

    async def list_bookings(
        self,
        customer_id: Optional[str] = None,
        professional_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[BookingResponse]:
        stmt = select(Booking)
        if customer_id is not None:
            stmt = stmt.where(Booking.customer_id == customer_id)
        if professional_id is not None:
            stmt = stmt.where(Booking.professional_id == professional_id)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        stmt = stmt.order_by(Booking.created_at, Booking.id)
        return await self._all(stmt, BookingResponse)

    async def get_booking(self, booking_id: str) -> Optional[BookingResponse]:
        return await self._one(select(Booking).where(Booking.id == booking_id), BookingResponse)

    async def create_booking(self, data: dict) -> BookingResponse:
        return await self._add(Booking, BookingResponse, data)

    async def update_booking(self, booking_id: str, changes: dict) -> Optional[BookingResponse]:
        changes = {**changes, "updated_at": utcnow()}
        return await self._patch(Booking, BookingResponse, booking_id, changes)

    # ── Reviews ───────────────────────────────────────────────

    async def list_reviews(self, professional_id: Optional[str] = None) -> List[ReviewResponse]:
        stmt = select(Review)
        if professional_id is not None:
            stmt = stmt.where(Review.professional_id == professional_id)
        stmt = stmt.order_by(Review.created_at, Review.id)
        return await self._all(stmt, ReviewResponse)

    async def create_review(self, data: dict) -> ReviewResponse:
        return await self._add(Review, ReviewResponse, data)

    # ── Contact / Subscriptions ───────────────────────────────

    async def create_contact_request(self, data: dict) -> ContactRequestResponse:
        return await self._add(ContactRequest, ContactRequestResponse, data)

    async def get_subscription_by_email(
        self, email: str
    ) -> Optional[NotificationSubscriptionResponse]:
        stmt = select(NotificationSubscription).where(
            func.lower(NotificationSubscription.email) == email.lower()
        )
        return await self._one(stmt, NotificationSubscriptionResponse)

    async def create_subscription(self, data: dict) -> NotificationSubscriptionResponse:
        return await self._add(NotificationSubscription, NotificationSubscriptionResponse, data)
