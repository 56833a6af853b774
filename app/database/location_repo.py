"""Repository layer for location (address_data) database operations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import Location


class LocationRepository:
    """Repository for location database operations."""

    @staticmethod
    async def list_for_user(db: AsyncSession, user_id: int) -> list[Location]:
        result = await db.execute(
            select(Location).where(Location.user_id == user_id).order_by(Location.location_name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: int, location_id: int) -> Optional[Location]:
        result = await db.execute(
            select(Location).where(Location.id == location_id, Location.user_id == user_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_name(db: AsyncSession, user_id: int, location_name: str) -> Optional[Location]:
        result = await db.execute(
            select(Location).where(
                Location.location_name == location_name,
                Location.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def add(db: AsyncSession, location: Location) -> Location:
        db.add(location)
        await db.commit()
        await db.refresh(location)
        return location

    @staticmethod
    async def save(db: AsyncSession, location: Location) -> Location:
        await db.commit()
        await db.refresh(location)
        return location

    @staticmethod
    async def delete(db: AsyncSession, location: Location) -> None:
        await db.delete(location)
        await db.commit()
