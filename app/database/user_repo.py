"""Repository layer for user administration queries."""

from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import Appointment, Location, Service, User
from app.models.profile import BusinessProfile
from app.models.subscription import Subscription

# Rows removed together with their owner
_OWNED_MODELS = (Appointment, Location, Service, Subscription, BusinessProfile)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def list_users(db: AsyncSession) -> list[User]:
        """All users, newest first."""
        result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def get(db: AsyncSession, user_id: int) -> Optional[User]:
        return await db.get(User, user_id)

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    @staticmethod
    async def count_rows(db: AsyncSession, model) -> int:
        """Count every row of ``model`` across all users."""
        result = await db.execute(select(func.count()).select_from(model))
        return int(result.scalar_one())

    @staticmethod
    async def save(db: AsyncSession, user: User) -> User:
        await db.commit()
        await db.refresh(user)
        return user

    @staticmethod
    async def delete_with_owned_rows(db: AsyncSession, user: User) -> None:
        """
        Delete a user and everything they own in one transaction.

        Owned rows are removed explicitly since SQLite only honours
        ON DELETE CASCADE when foreign keys are switched on.
        """
        for model in _OWNED_MODELS:
            await db.execute(delete(model).where(model.user_id == user.id))
        await db.execute(delete(User).where(User.id == user.id))
        await db.commit()
