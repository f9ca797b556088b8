"""
Notes Backend — User Service
=============================

What:  Business logic for registration, listing, rename, deletion and login.
How:   Stateless methods receiving the request's AsyncSession. Expected
       failures are raised as application exceptions; the error handlers
       translate them.
Who:   Called by the /api/users and /api/login route handlers.
"""

import logging
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from passlib.exc import PasswordTruncateError
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from noteapp.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from noteapp.models.blog import Blog
from noteapp.models.note import Note
from noteapp.models.user import User
from noteapp.schemas.user import UserCreate
from noteapp.services.token_service import TokenService, hash_password

logger = logging.getLogger(__name__)


class UserService:
    """
    Responsibilities:
        - create_user(): registration with write-time uniqueness check
        - list_users() / get_user(): users with their notes embedded
        - rename_user(): keyed by username
        - delete_user(): self-deletion, orphaning notes and blogs
        - authenticate(): credential check for login
    """

    @staticmethod
    def check_email_username(username: str) -> None:
        """Syntax check only; no DNS lookup."""
        try:
            validate_email(username, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("Validation isEmail on username failed", field="username")

    async def create_user(
        self,
        db: AsyncSession,
        data: UserCreate,
        require_email: bool = True,
    ) -> User:
        """
        Register a user.

        Raises:
            ValidationError: username not an email while `require_email` is
            on, password over bcrypt's 72-byte limit, or username taken
        """
        if require_email:
            self.check_email_username(data.username)

        password_hash = None
        if data.password:
            try:
                password_hash = hash_password(data.password)
            except PasswordTruncateError:
                raise ValidationError("password must be at most 72 bytes", field="password")

        user = User(username=data.username, name=data.name, password_hash=password_hash)
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            logger.info("Rejected duplicate username %r", data.username)
            raise ValidationError("username must be unique", field="username")

        logger.info("User %s registered (id=%s)", user.username, user.id)
        return user

    async def list_users(self, db: AsyncSession) -> List[User]:
        result = await db.execute(
            select(User).options(selectinload(User.notes)).order_by(User.id)
        )
        return list(result.scalars().all())

    async def get_user(self, db: AsyncSession, user_id: int) -> User:
        result = await db.execute(
            select(User).options(selectinload(User.notes)).where(User.id == user_id)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def find_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def rename_user(self, db: AsyncSession, username: str, name: str) -> User:
        """
        Change a user's display name.

        Keyed by username rather than id; the username itself never changes.
        """
        user = await self.find_by_username(db, username)
        if user is None:
            raise NotFoundError(resource="user", resource_id=username)

        user.name = name
        await db.flush()
        return user

    async def delete_user(self, db: AsyncSession, user_id: int, acting: User) -> None:
        """
        Delete a user. Their notes and blogs stay, with `user_id` cleared.

        Only the user themself may do this. Deleting an id that doesn't exist
        is a no-op.

        Raises:
            AuthorizationError: `acting` is not the user being deleted
        """
        if acting.id != user_id:
            raise AuthorizationError("users can only delete their own account")

        user = await db.get(User, user_id)
        if user is None:
            return

        # Explicit so the result doesn't depend on the store enforcing
        # ON DELETE SET NULL (SQLite doesn't by default)
        await db.execute(update(Note).where(Note.user_id == user_id).values(user_id=None))
        await db.execute(update(Blog).where(Blog.user_id == user_id).values(user_id=None))
        await db.delete(user)
        await db.flush()
        logger.info("User %d deleted", user_id)

    async def authenticate(
        self,
        db: AsyncSession,
        tokens: TokenService,
        username: str,
        password: str,
    ) -> User:
        """
        Return the user if the credentials are valid.

        Raises:
            AuthenticationError: unknown username or wrong password. The
            message doesn't say which.
        """
        user = await self.find_by_username(db, username)
        if user is None or not tokens.check_password(user, password):
            raise AuthenticationError("invalid username or password")
        return user


user_service = UserService()
