"""Business logic for appointments.

Appointments copy the service's type and price at booking time, so later
price changes in the catalog do not rewrite history.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.appointment_repo import AppointmentRepository
from app.database.location_repo import LocationRepository
from app.database.service_repo import ServiceRepository
from app.models.models import Appointment
from app.schemas.appointments import (
    AppointmentCreateRequest,
    AppointmentUpdateRequest,
    BatchAppointmentRequest,
)
from app.utils.exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service for appointment operations, always scoped to one user."""

    @staticmethod
    async def list_appointments(db: AsyncSession, user_id: int) -> list[Appointment]:
        return await AppointmentRepository.list_for_user(db, user_id)

    @staticmethod
    async def get_appointment(db: AsyncSession, user_id: int, appointment_id: int) -> Appointment:
        appointment = await AppointmentRepository.get_for_user(db, user_id, appointment_id)
        if appointment is None:
            raise NotFoundException("Appointment not found")
        return appointment

    @staticmethod
    async def create_appointment(
        db: AsyncSession, user_id: int, payload: AppointmentCreateRequest
    ) -> Appointment:
        """
        Book a single appointment.

        ``type`` and ``price`` fall back to the named service in the user's
        catalog; when neither the payload nor the catalog provides them the
        request is rejected.
        """
        service_type, price = payload.type, payload.price
        if service_type is None or price is None:
            service = await ServiceRepository.get_by_name(db, user_id, payload.service)
            if service is None:
                raise ValidationException(f'Service "{payload.service}" not found')
            service_type = service_type or service.type
            price = service.price if price is None else price

        appointment = Appointment(
            user_id=user_id,
            client_name=payload.client_name,
            service=payload.service,
            type=service_type,
            date=payload.date,
            location=payload.location,
            price=price,
            paid=payload.paid,
            distance=payload.distance,
            payment_date=datetime.now(timezone.utc) if payload.paid else None,
        )
        [appointment] = await AppointmentRepository.add_many(db, [appointment])
        return appointment

    @staticmethod
    async def create_batch(
        db: AsyncSession, user_id: int, payload: BatchAppointmentRequest
    ) -> list[Appointment]:
        """
        Book several clients at one location on one day.

        Every service name must exist in the user's catalog, otherwise nothing
        is written. The location's travel distance is recorded on the first
        appointment only so mileage is counted once per visit.
        """
        services = await ServiceRepository.get_by_names(
            db, user_id, {item.service for item in payload.appointments}
        )
        for item in payload.appointments:
            if item.service not in services:
                raise ValidationException(f'Service "{item.service}" not found')

        location = await LocationRepository.get_by_name(db, user_id, payload.location)
        distance = location.distance if location is not None else None

        appointments = [
            Appointment(
                user_id=user_id,
                client_name=item.client_name,
                service=item.service,
                type=services[item.service].type,
                date=payload.date,
                location=payload.location,
                price=services[item.service].price,
                paid=False,
                distance=distance if index == 0 else None,
            )
            for index, item in enumerate(payload.appointments)
        ]
        created = await AppointmentRepository.add_many(db, appointments)
        logger.info("Created %d appointments for user %s", len(created), user_id)
        return created

    @staticmethod
    async def update_appointment(
        db: AsyncSession, user_id: int, appointment_id: int, payload: AppointmentUpdateRequest
    ) -> Appointment:
        appointment = await AppointmentService.get_appointment(db, user_id, appointment_id)
        for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(appointment, key, value)
        return await AppointmentRepository.save(db, appointment)

    @staticmethod
    async def set_paid(db: AsyncSession, user_id: int, appointment_id: int, paid: bool) -> Appointment:
        """Mark an appointment paid (stamping payment_date) or unpaid (clearing it)."""
        appointment = await AppointmentService.get_appointment(db, user_id, appointment_id)
        appointment.paid = paid
        appointment.payment_date = datetime.now(timezone.utc) if paid else None
        return await AppointmentRepository.save(db, appointment)

    @staticmethod
    async def delete_appointment(db: AsyncSession, user_id: int, appointment_id: int) -> None:
        appointment = await AppointmentService.get_appointment(db, user_id, appointment_id)
        await AppointmentRepository.delete(db, appointment)
