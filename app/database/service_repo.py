"""Repository layer for service catalog database operations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import Service


class ServiceRepository:
    """Repository for service catalog database operations."""

    @staticmethod
    async def list_for_user(db: AsyncSession, user_id: int) -> list[Service]:
        """A user's services ordered by type, then name."""
        result = await db.execute(
            select(Service)
            .where(Service.user_id == user_id)
            .order_by(Service.type, Service.service_name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: int, service_id: int) -> Optional[Service]:
        result = await db.execute(
            select(Service).where(Service.id == service_id, Service.user_id == user_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_name(db: AsyncSession, user_id: int, service_name: str) -> Optional[Service]:
        result = await db.execute(
            select(Service).where(
                Service.service_name == service_name,
                Service.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_names(db: AsyncSession, user_id: int, names: set[str]) -> dict[str, Service]:
        if not names:
            return {}
        result = await db.execute(
            select(Service).where(Service.user_id == user_id, Service.service_name.in_(names))
        )
        return {service.service_name: service for service in result.scalars().all()}

    @staticmethod
    async def add(db: AsyncSession, service: Service) -> Service:
        db.add(service)
        await db.commit()
        await db.refresh(service)
        return service

    @staticmethod
    async def save(db: AsyncSession, service: Service) -> Service:
        await db.commit()
        await db.refresh(service)
        return service

    @staticmethod
    async def delete(db: AsyncSession, service: Service) -> None:
        await db.delete(service)
        await db.commit()
