"""Repository layer for business profile (admin_settings) rows."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profile import BusinessProfile


class ProfileRepository:

    @staticmethod
    async def get_for_user(db: AsyncSession, user_id: int) -> Optional[BusinessProfile]:
        result = await db.execute(select(BusinessProfile).where(BusinessProfile.user_id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def add(db: AsyncSession, profile: BusinessProfile) -> BusinessProfile:
        db.add(profile)
        await db.commit()
        await db.refresh(profile)
        return profile

    @staticmethod
    async def save(db: AsyncSession, profile: BusinessProfile) -> BusinessProfile:
        await db.commit()
        await db.refresh(profile)
        return profile
