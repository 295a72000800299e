"""
shared/middleware/auth.py
FastAPI dependency functions for authentication and authorization.
The session cookie (Starlette SessionMiddleware) carries only the user id;
the account is reloaded from storage on every request.
"""

from typing import Optional
from fastapi import Depends, HTTPException, Request, status

from config.storage import get_storage
from shared.models.models import UserRole
from shared.schemas.schemas import UserAccount
from shared.storage.base import Storage

SESSION_USER_KEY = "user_id"


def login_session(request: Request, user: UserAccount) -> None:
    request.session[SESSION_USER_KEY] = user.id


def logout_session(request: Request) -> None:
    request.session.clear()


async def get_optional_user(
    request: Request,
    storage: Storage = Depends(get_storage),
) -> Optional[UserAccount]:
    """Returns current user if logged in, None otherwise. For public endpoints."""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        return None
    user = await storage.get_user(user_id)
    if user is None:
        # Account vanished (store reset); drop the stale session
        request.session.pop(SESSION_USER_KEY, None)
    return user


async def get_current_user(
    user: Optional[UserAccount] = Depends(get_optional_user),
) -> UserAccount:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


class RoleRequired:
    """Dependency factory for role-based access control."""

    def __init__(self, *roles: UserRole):
        self.roles = roles

    async def __call__(
        self,
        current_user: UserAccount = Depends(get_current_user),
    ) -> UserAccount:
        if current_user.role not in [r.value for r in self.roles]:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Required role: {[r.value for r in self.roles]}",
            )
        return current_user


# Convenience role dependencies
require_admin = RoleRequired(UserRole.ADMIN)
