"""
shared/models/models.py
Enumerations and SQLAlchemy ORM models for the Jaruri Chha marketplace.
String primary keys throughout: generated rows get UUID4 text, seed rows
keep their short ids ("1", "2", ...).
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Text,
    TypeDecorator,
)
from sqlalchemy.orm import Mapped, mapped_column

from config.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes are converted to UTC; naive ones are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timestamp column that always stores and returns aware UTC datetimes.
    SQLite keeps no offset, so values are normalized before binding.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value)

    def process_result_value(self, value, dialect):
        return as_utc(value)


# ── Enumerations ──────────────────────────────────────────────

class UserRole(str, PyEnum):
    CUSTOMER = "customer"
    PROFESSIONAL = "professional"
    ADMIN = "admin"


class PricingUnit(str, PyEnum):
    HOUR = "hour"
    FIXED = "fixed"
    SQ_FT = "sq_ft"


class LocationType(str, PyEnum):
    CITY = "city"
    DISTRICT = "district"
    ZONE = "zone"


class AvailabilityStatus(str, PyEnum):
    AVAILABLE = "available"
    BUSY = "busy"
    OFFLINE = "offline"


class BookingStatus(str, PyEnum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentMethod(str, PyEnum):
    CASH = "cash"
    ONLINE = "online"
    CARD = "card"


class PaymentStatus(str, PyEnum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class ContactStatus(str, PyEnum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


def _enum(enum_cls):
    """Persist enum values ("in_progress"), not member names."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )


# ── Mixins ────────────────────────────────────────────────────

class TimestampMixin:
    """Adds created_at and updated_at to any model."""
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, onupdate=utcnow, nullable=False
    )


# ── Models ────────────────────────────────────────────────────

class User(TimestampMixin, Base):
    """Customer, professional or admin account. Guests are users too."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        _enum(UserRole), nullable=False, default=UserRole.CUSTOMER
    )
    profile_picture: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_guest: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    __table_args__ = (Index("ix_users_role", "role"),)

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"


class ServiceCategory(Base):
    """Top-level grouping shown on the home page (Electrician, Plumber, ...)."""
    __tablename__ = "service_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_nepali: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[str] = mapped_column(String(100), nullable=False, default="fas fa-tools")
    color: Mapped[str] = mapped_column(String(50), nullable=False, default="gray")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Service(Base):
    """A bookable service. base_price seeds Booking.estimated_price."""
    __tablename__ = "services"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("service_categories.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_nepali: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unit: Mapped[PricingUnit] = mapped_column(
        _enum(PricingUnit), nullable=False, default=PricingUnit.FIXED
    )
    estimated_duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (Index("ix_services_category_id", "category_id"),)


class Location(Base):
    """City / district / zone. parent_id builds the tree."""
    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_nepali: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[LocationType] = mapped_column(
        _enum(LocationType), nullable=False, default=LocationType.CITY
    )
    parent_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("locations.id"), nullable=True
    )
    is_serviceable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Professional(Base):
    """
    Service provider profile, one per professional user.
    skills / service_areas are free-text labels; service_ids / location_ids
    are normalized tags into the catalog and location registry.
    """
    __tablename__ = "professionals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    experience: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # years
    skills: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    service_areas: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    service_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    location_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    hourly_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 2), nullable=True)

    # Rating (denormalized from reviews)
    rating: Mapped[Decimal] = mapped_column(Numeric(3, 2), default=Decimal("0.00"), nullable=False)
    total_jobs: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    availability_status: Mapped[AvailabilityStatus] = mapped_column(
        _enum(AvailabilityStatus), nullable=False, default=AvailabilityStatus.AVAILABLE
    )
    documents: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    # e.g. [{"type": "citizenship", "url": "...", "verified": false}]
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False
    )

    __table_args__ = (Index("ix_professionals_user_id", "user_id"),)


class Booking(TimestampMixin, Base):
    """
    Core booking entity.
    Status transitions: pending → assigned → confirmed → in_progress →
    completed, with cancelled | refunded from any non-terminal state.
    """
    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    customer_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    professional_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("professionals.id"), nullable=True
    )
    service_id: Mapped[str] = mapped_column(String(36), ForeignKey("services.id"), nullable=False)

    # Where and when
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    coordinates: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    scheduled_date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    # Pricing
    estimated_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    final_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    status: Mapped[BookingStatus] = mapped_column(
        _enum(BookingStatus), nullable=False, default=BookingStatus.PENDING
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    special_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_method: Mapped[PaymentMethod] = mapped_column(
        _enum(PaymentMethod), nullable=False, default=PaymentMethod.CASH
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        _enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING
    )
    customer_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    professional_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_bookings_customer_id", "customer_id"),
        Index("ix_bookings_professional_id", "professional_id"),
        Index("ix_bookings_status", "status"),
    )


class Review(Base):
    """Customer review of a professional for a booking."""
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    booking_id: Mapped[str] = mapped_column(String(36), ForeignKey("bookings.id"), nullable=False)
    customer_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    professional_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("professionals.id"), nullable=False
    )
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # professional's reply
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
        Index("ix_reviews_professional_id", "professional_id"),
    )


class ContactRequest(Base):
    """Contact-us form submission."""
    __tablename__ = "contact_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContactStatus] = mapped_column(
        _enum(ContactStatus), nullable=False, default=ContactStatus.NEW
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False
    )


class NotificationSubscription(Base):
    """E-mail signup for app launch notifications."""
    __tablename__ = "notification_subscriptions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False
    )
