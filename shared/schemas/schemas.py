"""
shared/schemas/schemas.py
All Pydantic v2 request/response schemas for the platform.
Wire format is camelCase; Python attributes stay snake_case.
The *Response models double as the records the storage port hands back.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from shared.models.models import (
    AvailabilityStatus,
    BookingStatus,
    ContactStatus,
    LocationType,
    PaymentMethod,
    PaymentStatus,
    PricingUnit,
    UserRole,
    as_utc,
)


# ── Base ──────────────────────────────────────────────────────

class BaseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ── User ──────────────────────────────────────────────────────

class UserResponse(BaseSchema):
    id: str
    username: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER
    profile_picture: Optional[str] = None
    is_verified: bool = False
    is_guest: bool = False
    contact_email: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserAccount(UserResponse):
    """Stored user including the password hash. Never returned by the API."""
    password_hash: str

    def public(self) -> UserResponse:
        return UserResponse.model_validate(self.model_dump(exclude={"password_hash"}))


class RegisterRequest(BaseSchema):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=2, max_length=255)
    phone: Optional[str] = Field(None, pattern=r"^\+?\d{7,15}$")
    role: Literal["customer", "professional"] = "customer"


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str


# ── Catalog ───────────────────────────────────────────────────

class ServiceCategoryResponse(BaseSchema):
    id: str
    name: str
    name_nepali: str
    description: Optional[str] = None
    icon: str = "fas fa-tools"
    color: str = "gray"
    is_active: bool = True


class ServiceResponse(BaseSchema):
    id: str
    category_id: str
    name: str
    name_nepali: Optional[str] = None
    description: str = ""
    base_price: Decimal
    unit: PricingUnit = PricingUnit.FIXED
    estimated_duration: Optional[int] = None
    is_active: bool = True


class LocationResponse(BaseSchema):
    id: str
    name: str
    name_nepali: str
    type: LocationType = LocationType.CITY
    parent_id: Optional[str] = None
    is_serviceable: bool = True


# ── Professional ──────────────────────────────────────────────

class ProfessionalResponse(BaseSchema):
    id: str
    user_id: str
    bio: Optional[str] = None
    experience: Optional[int] = None
    skills: List[str] = Field(default_factory=list)
    service_areas: List[str] = Field(default_factory=list)
    service_ids: List[str] = Field(default_factory=list)
    location_ids: List[str] = Field(default_factory=list)
    hourly_rate: Optional[Decimal] = None
    rating: Decimal = Decimal("0.00")
    total_jobs: int = 0
    is_verified: bool = False
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    documents: Optional[List[Dict[str, Any]]] = None
    created_at: datetime


class ProfessionalCreateRequest(BaseSchema):
    user_id: str
    bio: Optional[str] = Field(None, max_length=2000)
    experience: Optional[int] = Field(None, ge=0, le=70)
    skills: List[str] = Field(..., min_length=1)
    service_areas: List[str] = Field(..., min_length=1)
    service_ids: List[str] = Field(default_factory=list)
    location_ids: List[str] = Field(default_factory=list)
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    is_verified: bool = False
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    documents: Optional[List[Dict[str, Any]]] = None


# ── Booking ───────────────────────────────────────────────────

class Coordinates(BaseSchema):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class BookingCreateRequest(BaseSchema):
    service_id: str = Field(..., min_length=1)
    customer_id: Optional[str] = None
    customer_name: Optional[str] = Field(None, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(None, max_length=20)
    location: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=1000)
    coordinates: Optional[Coordinates] = None
    scheduled_date: datetime
    payment_method: PaymentMethod = PaymentMethod.CASH
    description: Optional[str] = Field(None, max_length=2000)
    special_requirements: Optional[str] = Field(
        None,
        max_length=1000,
        validation_alias=AliasChoices(
            "specialRequirements", "specialRequests", "special_requirements"
        ),
    )
    customer_notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("location", "address")
    @classmethod
    def strip_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("scheduled_date")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Stored in UTC; a time without an offset is read as UTC."""
        return as_utc(v)


class BookingResponse(BaseSchema):
    id: str
    customer_id: str
    professional_id: Optional[str] = None
    service_id: str
    location: str
    address: str
    coordinates: Optional[Dict[str, float]] = None
    scheduled_date: datetime
    estimated_price: Decimal
    final_price: Optional[Decimal] = None
    status: BookingStatus = BookingStatus.PENDING
    description: Optional[str] = None
    special_requirements: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.PENDING
    customer_notes: Optional[str] = None
    professional_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BookingStatusUpdate(BaseSchema):
    status: BookingStatus
    professional_notes: Optional[str] = Field(None, max_length=2000)
    final_price: Optional[Decimal] = Field(None, ge=0)


class PaymentStatusUpdate(BaseSchema):
    payment_status: PaymentStatus


# ── Review ────────────────────────────────────────────────────

class ReviewCreateRequest(BaseSchema):
    booking_id: str
    customer_id: Optional[str] = None
    professional_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewResponse(BaseSchema):
    id: str
    booking_id: str
    customer_id: str
    professional_id: str
    rating: int
    comment: Optional[str] = None
    response: Optional[str] = None
    is_verified: bool = False
    created_at: datetime


# ── Contact / Subscriptions ───────────────────────────────────

class ContactRequestCreate(BaseSchema):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    subject: str = Field(..., min_length=2, max_length=255)
    message: str = Field(..., min_length=5, max_length=5000)


class ContactRequestResponse(BaseSchema):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: ContactStatus = ContactStatus.NEW
    created_at: datetime


class NotificationSubscribeRequest(BaseSchema):
    email: EmailStr


class NotificationSubscriptionResponse(BaseSchema):
    id: str
    email: str
    created_at: datetime


# ── Admin ─────────────────────────────────────────────────────

class StatsResponse(BaseSchema):
    professionals: str
    rating: str
    completed_bookings: str
    support: str = "24/7"


# ── Generic ───────────────────────────────────────────────────

class MessageResponse(BaseSchema):
    message: str
    success: bool = True
    id: Optional[str] = None
