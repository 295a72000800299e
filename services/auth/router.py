"""
services/auth/router.py
Session-cookie authentication endpoints.
Implements: Register → Login → Current user → Logout
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from config.storage import get_storage
from services.user.service import UserService
from shared.middleware.auth import get_current_user, login_session, logout_session
from shared.schemas.schemas import LoginRequest, MessageResponse, RegisterRequest, UserAccount, UserResponse
from shared.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account and start a session",
)
async def register(
    data: RegisterRequest,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    user = await UserService(storage).create_account(data)
    login_session(request, user)
    return user.public()


@router.post("/login", response_model=UserResponse, summary="Login with email and password")
async def login(
    data: LoginRequest,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    user = await UserService(storage).authenticate(data.email, data.password)
    login_session(request, user)
    logger.info(f"User logged in: {user.id}")
    return user.public()


@router.post("/logout", response_model=MessageResponse, summary="Logout user")
async def logout(request: Request):
    logout_session(request)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserResponse, summary="Get current user")
async def get_me(current_user: UserAccount = Depends(get_current_user)):
    return current_user.public()
