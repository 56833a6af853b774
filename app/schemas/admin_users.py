"""Super admin user management schemas."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.schemas.auth import UserResponse


class SystemStats(BaseModel):
    """Row counts across every user."""

    total_users: int = Field(..., ge=0, alias="totalUsers")
    total_appointments: int = Field(..., ge=0, alias="totalAppointments")
    total_locations: int = Field(..., ge=0, alias="totalLocations")
    total_services: int = Field(..., ge=0, alias="totalServices")

    class Config:
        populate_by_name = True


class AdminUserResponse(UserResponse):
    """A user with the number of rows they own."""

    appointment_count: int = 0
    location_count: int = 0
    service_count: int = 0


class AdminUserCreateRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=8, max_length=128)
    email: Optional[EmailStr] = None
    is_super_admin: bool = False


class AdminUserUpdateRequest(BaseModel):
    """Only the fields sent are changed."""

    username: Optional[str] = Field(None, min_length=3, max_length=150)
    email: Optional[EmailStr] = None
    is_super_admin: Optional[bool] = None
