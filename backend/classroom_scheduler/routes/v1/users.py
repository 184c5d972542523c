# backend/classroom_scheduler/routes/v1/users.py
import asyncio
from typing import List

from fastapi import APIRouter, Body, Depends, status

from ...api.dependencies import get_user_service
from ...core.exceptions import DomainException
from ...schemas.user import UserCreate, UserResponse
from ...services.user_service import UserService
from ._common import handle_domain_exception

router = APIRouter(tags=["users-v1"])


@router.get("", response_model=List[UserResponse])
async def list_users(user_service: UserService = Depends(get_user_service)) -> List[UserResponse]:
    try:
        return await asyncio.to_thread(user_service.list_users)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate = Body(...),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        return await asyncio.to_thread(user_service.create_user, user_data)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(
    email: str, user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    try:
        return await asyncio.to_thread(user_service.get_user_by_email, email)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, user_service: UserService = Depends(get_user_service)) -> UserResponse:
    try:
        return await asyncio.to_thread(user_service.get_user, user_id)
    except DomainException as e:
        handle_domain_exception(e)
