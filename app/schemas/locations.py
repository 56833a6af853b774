"""Location (client venue) schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class LocationBase(BaseModel):
    address: Optional[str] = None
    city_town: Optional[str] = None
    post_code: Optional[str] = None
    distance: Optional[float] = Field(None, ge=0, description="miles from home")
    contact_name: Optional[str] = None
    email_address: Optional[str] = None
    contact_details: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None


class LocationCreateRequest(LocationBase):
    location_name: str = Field(..., min_length=1, max_length=255)


class LocationUpdateRequest(LocationBase):
    location_name: Optional[str] = Field(None, min_length=1, max_length=255)


class LocationResponse(LocationBase):
    id: int
    location_name: str

    class Config:
        from_attributes = True
