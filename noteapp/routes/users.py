"""
Notes Backend — Users Route Handlers
=====================================

What:  Registration, listing, rename and self-deletion of users.

Rename is keyed by username (PUT /api/users/{username}); every other
single-user route is keyed by id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.config import Settings, get_settings
from noteapp.database import get_db_session
from noteapp.middleware.auth import current_user
from noteapp.models.user import User
from noteapp.schemas.common import ErrorResponse
from noteapp.schemas.user import UserCreate, UserRename, UserResponse, UserWithNotes
from noteapp.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    status_code=201,
    response_model=UserResponse,
    responses={400: {"description": "Invalid or duplicate username", "model": ErrorResponse}},
    summary="Register a user",
)
async def create_user(
    payload: UserCreate,
    config: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.create_user(
        db, payload, require_email=config.require_email_username
    )
    return UserResponse.model_validate(user)


@router.get(
    "/users",
    response_model=List[UserWithNotes],
    summary="List users with their notes",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserWithNotes]:
    users = await user_service.list_users(db)
    return [UserWithNotes.model_validate(user) for user in users]


@router.get(
    "/users/{user_id}",
    response_model=UserWithNotes,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> UserWithNotes:
    return UserWithNotes.model_validate(await user_service.get_user(db, user_id))


@router.put(
    "/users/{username}",
    response_model=UserResponse,
    responses={404: {"description": "No user with that username", "model": ErrorResponse}},
    summary="Rename a user",
)
async def rename_user(
    username: str,
    payload: UserRename,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.rename_user(db, username, payload.name)
    return UserResponse.model_validate(user)


@router.delete(
    "/users/{user_id}",
    status_code=204,
    responses={403: {"description": "Not the caller's account", "model": ErrorResponse}},
    summary="Delete the caller's own account",
    description="The user's notes and blogs are kept with their owner cleared.",
)
async def delete_user(
    user_id: int,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await user_service.delete_user(db, user_id, acting=user)
    return Response(status_code=204)
