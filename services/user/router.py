"""
services/user/router.py
User account create/read. Does not start a session.
"""

from fastapi import APIRouter, Depends, status

from config.storage import get_storage
from services.user.service import UserService
from shared.schemas.schemas import RegisterRequest, UserResponse
from shared.storage.base import Storage

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(data: RegisterRequest, storage: Storage = Depends(get_storage)):
    user = await UserService(storage).create_account(data)
    return user.public()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, storage: Storage = Depends(get_storage)):
    user = await UserService(storage).get_user(user_id)
    return user.public()
