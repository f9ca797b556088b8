"""
Notes Backend — Login Route Handler
====================================

What:  POST /api/login exchanges a username and password for a bearer token.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.database import get_db_session
from noteapp.middleware.auth import get_token_service
from noteapp.schemas.auth import LoginRequest, LoginResponse
from noteapp.schemas.common import ErrorResponse
from noteapp.services.token_service import TokenService
from noteapp.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid username or password", "model": ErrorResponse}},
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    user = await user_service.authenticate(db, tokens, payload.username, payload.password)
    logger.info("User %s logged in", user.username)
    return LoginResponse(token=tokens.issue(user), username=user.username, name=user.name)
