"""
Notes Backend — Authentication Schemas
=======================================

What:  Login request/response bodies and the decoded bearer-token claims.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Body of POST /api/login."""
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str = Field(description="Bearer token to send as 'Authorization: Bearer <token>'")
    username: str
    name: str


class TokenClaims(BaseModel):
    """Identity claims carried by a bearer token."""
    id: int
    username: str
