"""Appointment schemas."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class AppointmentCreateRequest(BaseModel):
    """A single appointment; type and price are taken from the service catalog when omitted."""

    client_name: str = Field(..., min_length=1, max_length=255)
    service: str = Field(..., min_length=1)
    date: dt.date
    location: str = Field(..., min_length=1)
    type: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    paid: bool = False
    distance: Optional[float] = Field(None, ge=0)


class BatchAppointmentItem(BaseModel):
    client_name: str = Field(..., min_length=1, max_length=255)
    service: str = Field(..., min_length=1)


class BatchAppointmentRequest(BaseModel):
    """Several clients seen at one location on one day."""

    location: str = Field(..., min_length=1)
    date: dt.date
    appointments: list[BatchAppointmentItem] = Field(..., min_length=1)


class AppointmentUpdateRequest(BaseModel):
    client_name: Optional[str] = Field(None, min_length=1, max_length=255)
    service: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    location: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    distance: Optional[float] = Field(None, ge=0)


class AppointmentResponse(BaseModel):
    id: int
    client_name: str
    service: str
    type: str
    date: dt.date
    location: str
    price: float
    paid: bool
    distance: Optional[float] = None
    payment_date: Optional[dt.datetime] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class BatchAppointmentResponse(BaseModel):
    message: str
    appointments: list[AppointmentResponse]
