"""
shared/storage/base.py
The storage port. Every backend (in-memory, SQL) implements this interface;
business logic lives in the services/ layer and never branches on backend.

Create methods take a dict of snake_case fields and return the stored record.
Update methods return None when the row does not exist.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

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


class Storage(ABC):
    """Async CRUD per entity."""

    name: str = "abstract"

    async def init(self) -> None:
        """Prepare the backend (create tables, etc.)."""

    async def close(self) -> None:
        """Release backend resources."""

    # ── Users ─────────────────────────────────────────────────
    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[UserAccount]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserAccount]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserAccount]: ...

    @abstractmethod
    async def list_users(self) -> List[UserAccount]: ...

    @abstractmethod
    async def create_user(self, data: dict) -> UserAccount: ...

    # ── Catalog ───────────────────────────────────────────────
    @abstractmethod
    async def list_categories(self, active_only: bool = False) -> List[ServiceCategoryResponse]: ...

    @abstractmethod
    async def create_category(self, data: dict) -> ServiceCategoryResponse: ...

    @abstractmethod
    async def list_services(
        self, category_id: Optional[str] = None, active_only: bool = False
    ) -> List[ServiceResponse]: ...

    @abstractmethod
    async def get_service(self, service_id: str) -> Optional[ServiceResponse]: ...

    @abstractmethod
    async def create_service(self, data: dict) -> ServiceResponse: ...

    # ── Locations ─────────────────────────────────────────────
    @abstractmethod
    async def list_locations(self, serviceable_only: bool = False) -> List[LocationResponse]: ...

    @abstractmethod
    async def create_location(self, data: dict) -> LocationResponse: ...

    # ── Professionals ─────────────────────────────────────────
    @abstractmethod
    async def list_professionals(self) -> List[ProfessionalResponse]:
        """All professionals in registry (insertion) order."""

    @abstractmethod
    async def get_professional(self, professional_id: str) -> Optional[ProfessionalResponse]: ...

    @abstractmethod
    async def get_professional_by_user_id(self, user_id: str) -> Optional[ProfessionalResponse]: ...

    @abstractmethod
    async def create_professional(self, data: dict) -> ProfessionalResponse: ...

    @abstractmethod
    async def update_professional(
        self, professional_id: str, changes: dict
    ) -> Optional[ProfessionalResponse]: ...

    # ── Bookings ──────────────────────────────────────────────
    @abstractmethod
    async def list_bookings(
        self,
        customer_id: Optional[str] = None,
        professional_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[BookingResponse]: ...

    @abstractmethod
    async def get_booking(self, booking_id: str) -> Optional[BookingResponse]: ...

    @abstractmethod
    async def create_booking(self, data: dict) -> BookingResponse: ...

    @abstractmethod
    async def update_booking(self, booking_id: str, changes: dict) -> Optional[BookingResponse]: ...

    # ── Reviews ───────────────────────────────────────────────
    @abstractmethod
    async def list_reviews(self, professional_id: Optional[str] = None) -> List[ReviewResponse]: ...

    @abstractmethod
    async def create_review(self, data: dict) -> ReviewResponse: ...

    # ── Contact / Subscriptions ───────────────────────────────
    @abstractmethod
    async def create_contact_request(self, data: dict) -> ContactRequestResponse: ...

    @abstractmethod
    async def get_subscription_by_email(
        self, email: str
    ) -> Optional[NotificationSubscriptionResponse]: ...

    @abstractmethod
    async def create_subscription(self, data: dict) -> NotificationSubscriptionResponse: ...

    # ── Housekeeping ──────────────────────────────────────────
    async def is_empty(self) -> bool:
        """True when no catalog has been loaded yet."""
        return not await self.list_categories()
