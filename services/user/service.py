"""User service - account creation shared by sign-up and the users API"""

import logging

from fastapi import HTTPException

from services.notification.webhooks import dispatch_event
from shared.schemas.schemas import RegisterRequest, UserAccount
from shared.storage.base import Storage
from shared.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def create_account(self, data: RegisterRequest) -> UserAccount:
        """Create a password account. 409 when the e-mail or username is taken."""
        if await self.storage.get_user_by_email(data.email):
            raise HTTPException(status_code=409, detail="Email already registered")
        if await self.storage.get_user_by_username(data.username):
            raise HTTPException(status_code=409, detail="Username already taken")

        user = await self.storage.create_user({
            "username": data.username,
            "email": str(data.email).lower(),
            "password_hash": hash_password(data.password),
            "full_name": data.full_name,
            "phone": data.phone,
            "role": data.role,
        })
        logger.info(f"New {user.role} account registered: {user.id}")
        dispatch_event("new_user_registration", user.public())
        return user

    async def authenticate(self, email: str, password: str) -> UserAccount:
        user = await self.storage.get_user_by_email(email)
        if not user or user.is_guest or not verify_password(password, user.password_hash):
            raise HTTPException(status_code=401, detail="Invalid email or password")
        return user

    async def get_user(self, user_id: str) -> UserAccount:
        user = await self.storage.get_user(user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user
