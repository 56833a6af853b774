"""Service catalog schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ServiceCreateRequest(BaseModel):
    service_name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=100, description="Category, e.g. Hair or Nails")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class ServiceUpdateRequest(BaseModel):
    service_name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class ServiceResponse(BaseModel):
    id: int
    service_name: str
    type: str
    price: float

    class Config:
        from_attributes = True
