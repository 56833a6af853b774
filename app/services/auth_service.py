"""Authentication service for user signup and login."""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, hash_password, verify_password
from app.models.models import User
from app.utils.exceptions import ConflictException

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    @staticmethod
    async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_user(
        db: AsyncSession,
        username: str,
        password: str,
        email: Optional[str] = None,
        is_super_admin: bool = False,
    ) -> User:
        """
        Create a new user.

        No subscription row is written: users without an active subscription
        are held to the free plan by the limit gate.
        """
        if await AuthService.get_user_by_username(db, username) is not None:
            raise ConflictException("Username already exists")

        user = User(
            username=username,
            password_hash=hash_password(password),
            email=email.lower() if email else None,
            is_super_admin=is_super_admin,
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ConflictException("Username already exists")
        await db.refresh(user)

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    @staticmethod
    async def authenticate(db: AsyncSession, username: str, password: str) -> Optional[User]:
        """Return the user when the password matches, otherwise None."""
        user = await AuthService.get_user_by_username(db, username)
        if not user or not user.password_hash:
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user

    @staticmethod
    def generate_token(user_id: int, remember_me: bool = False) -> str:
        """Generate JWT token for user."""
        expires_delta = timedelta(days=30) if remember_me else None
        return create_access_token(
            data={"sub": str(user_id)},
            expires_delta=expires_delta,
        )
