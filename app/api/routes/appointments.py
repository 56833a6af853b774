"""Appointment routes."""

from fastapi import APIRouter, Depends, status

from app.api.deps import DB, CurrentUser, get_current_user
from app.models.subscription_enums import ResourceKind
from app.schemas.appointments import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AppointmentUpdateRequest,
    BatchAppointmentRequest,
    BatchAppointmentResponse,
)
from app.services.appointment_service import AppointmentService
from app.services.limit_service import LimitService
from app.utils.envelopes import api_success, limit_denied_response

router = APIRouter(tags=["appointments"], dependencies=[Depends(get_current_user)])


def _serialize(appointment) -> dict:
    return AppointmentResponse.model_validate(appointment).model_dump(mode="json")


@router.get("/appointments", response_model=dict)
async def list_appointments(current_user: CurrentUser, db: DB):
    appointments = await AppointmentService.list_appointments(db, current_user.id)
    return api_success([_serialize(a) for a in appointments])


@router.get("/appointments/{appointment_id}", response_model=dict)
async def get_appointment(appointment_id: int, current_user: CurrentUser, db: DB):
    appointment = await AppointmentService.get_appointment(db, current_user.id, appointment_id)
    return api_success(_serialize(appointment))


@router.post("/appointments", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_appointment(payload: AppointmentCreateRequest, current_user: CurrentUser, db: DB):
    decision = await LimitService.check_limit(db, ResourceKind.APPOINTMENTS, current_user)
    if not decision.allowed:
        return limit_denied_response(decision)

    appointment = await AppointmentService.create_appointment(db, current_user.id, payload)
    return api_success(_serialize(appointment))


@router.post("/appointments/batch", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_appointments_batch(payload: BatchAppointmentRequest, current_user: CurrentUser, db: DB):
    """Book several clients at one location; the whole batch counts against the plan."""
    decision = await LimitService.check_limit(
        db,
        ResourceKind.APPOINTMENTS,
        current_user,
        increment=len(payload.appointments),
    )
    if not decision.allowed:
        return limit_denied_response(decision)

    created = await AppointmentService.create_batch(db, current_user.id, payload)
    response = BatchAppointmentResponse(
        message=f"Successfully created {len(created)} appointments",
        appointments=[AppointmentResponse.model_validate(a) for a in created],
    )
    return api_success(response.model_dump(mode="json"))


@router.put("/appointments/{appointment_id}", response_model=dict)
async def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdateRequest,
    current_user: CurrentUser,
    db: DB,
):
    appointment = await AppointmentService.update_appointment(db, current_user.id, appointment_id, payload)
    return api_success(_serialize(appointment))


@router.patch("/appointments/{appointment_id}/pay", response_model=dict)
async def mark_paid(appointment_id: int, current_user: CurrentUser, db: DB):
    appointment = await AppointmentService.set_paid(db, current_user.id, appointment_id, paid=True)
    return api_success(_serialize(appointment))


@router.patch("/appointments/{appointment_id}/unpay", response_model=dict)
async def mark_unpaid(appointment_id: int, current_user: CurrentUser, db: DB):
    appointment = await AppointmentService.set_paid(db, current_user.id, appointment_id, paid=False)
    return api_success(_serialize(appointment))


@router.delete("/appointments/{appointment_id}", response_model=dict)
async def delete_appointment(appointment_id: int, current_user: CurrentUser, db: DB):
    await AppointmentService.delete_appointment(db, current_user.id, appointment_id)
    return api_success({"message": "Appointment deleted successfully"})
