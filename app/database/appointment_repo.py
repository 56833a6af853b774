"""Repository layer for appointment database operations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import Appointment


class AppointmentRepository:
    """Repository for appointment database operations."""

    @staticmethod
    async def list_for_user(db: AsyncSession, user_id: int) -> list[Appointment]:
        """All of a user's appointments, most recent date first."""
        result = await db.execute(
            select(Appointment)
            .where(Appointment.user_id == user_id)
            .order_by(Appointment.date.desc(), Appointment.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_for_user(db: AsyncSession, user_id: int, appointment_id: int) -> Optional[Appointment]:
        result = await db.execute(
            select(Appointment).where(
                Appointment.id == appointment_id,
                Appointment.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def add_many(db: AsyncSession, appointments: list[Appointment]) -> list[Appointment]:
        """Insert appointments in one transaction and return them refreshed."""
        db.add_all(appointments)
        await db.commit()
        for appointment in appointments:
            await db.refresh(appointment)
        return appointments

    @staticmethod
    async def save(db: AsyncSession, appointment: Appointment) -> Appointment:
        await db.commit()
        await db.refresh(appointment)
        return appointment

    @staticmethod
    async def delete(db: AsyncSession, appointment: Appointment) -> None:
        await db.delete(appointment)
        await db.commit()
