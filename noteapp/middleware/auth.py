"""
Notes Backend — Bearer Token Dependencies
==========================================

What:  Extracts and verifies the caller's bearer token, then resolves it to a
       stored user.
How:   FastAPI dependencies. A route that declares
       `user: User = Depends(current_user)` never runs unless both succeed.

Outcomes:
    No Authorization header, or not "Bearer <token>"  → 401 "token missing"
    Signature/format failure                          → 401 "token invalid"
    Expired token                                     → 401 "token expired"
    Token for a user that no longer exists            → 401 "token invalid"
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.database import get_db_session
from noteapp.exceptions import AuthenticationError
from noteapp.models.user import User
from noteapp.schemas.auth import TokenClaims
from noteapp.services.token_service import TokenService

logger = logging.getLogger(__name__)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def bearer_token(request: Request) -> str:
    authorization = request.headers.get("Authorization")
    if not authorization:
        raise AuthenticationError("token missing")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("token missing")
    return token


async def token_extractor(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Decode the bearer token and attach its claims to `request.state`."""
    claims = tokens.verify(bearer_token(request))
    request.state.claims = claims
    return claims


async def current_user(
    claims: TokenClaims = Depends(token_extractor),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    user = await db.get(User, claims.id)
    if user is None or user.username != claims.username:
        logger.info("Token for unknown user id=%d rejected", claims.id)
        raise AuthenticationError("token invalid")
    return user
