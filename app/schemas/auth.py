"""Authentication schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Login request with username and password."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=128)
    remember_me: bool = False


class RegisterRequest(BaseModel):
    """Registration request; new users start on the free plan."""

    username: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=8, max_length=128)
    email: Optional[EmailStr] = None


class UserResponse(BaseModel):
    """User response model."""

    id: int
    username: str
    email: Optional[str] = None
    is_super_admin: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Authentication response with user and token."""

    user: UserResponse
    token: str
