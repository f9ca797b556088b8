"""
Notes Backend — Token & Credential Service
===========================================

What:  Issues and verifies signed bearer tokens; checks login credentials.
How:   PyJWT (HS256 by default) for tokens, passlib's bcrypt context for
       per-user password hashes.
Who:   Login route issues tokens; the `token_extractor` dependency verifies
       them on every authenticated request.

Token payload:
    {"username": "...", "id": 1, "iat": <issued>, "exp": <expiry>}
    `exp` is omitted when the service is built without an expiry.

Password policy:
    A user registered with a password is checked against its bcrypt hash.
    A user registered without one logs in with the shared password from
    settings.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from noteapp.exceptions import AuthenticationError
from noteapp.models.user import User
from noteapp.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

CRYPT_CONTEXT = CryptContext(
    schemes=["bcrypt"],
    default="bcrypt",
    truncate_error=True,
)


def hash_password(password: str) -> str:
    return CRYPT_CONTEXT.hash(secret=password)


class TokenService:
    """
    Signs and verifies bearer tokens.

    Example:
        tokens = TokenService(secret="s3cret", expire_minutes=60)
        token = tokens.issue(user)
        claims = tokens.verify(token)   # TokenClaims(id=1, username="...")
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: Optional[int] = 60,
        shared_password: str = "secret",
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes or None
        self._shared_password = shared_password

    def issue(self, user: User) -> str:
        """Sign a token embedding the user's username and id."""
        now = datetime.now(timezone.utc)
        payload = {
            "username": user.username,
            "id": user.id,
            "iat": now,
        }
        if self._expire_minutes:
            payload["exp"] = now + timedelta(minutes=self._expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode a token and return its identity claims.

        Raises:
            AuthenticationError: bad signature, malformed token, expired
            token, or missing identity claims.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("token expired")
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: %s", e)
            raise AuthenticationError("token invalid")

        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError:
            raise AuthenticationError("token invalid")

    def check_password(self, user: User, password: str) -> bool:
        if user.password_hash:
            return CRYPT_CONTEXT.verify(secret=password, hash=user.password_hash)
        return password == self._shared_password
