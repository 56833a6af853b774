"""Business profile schemas."""

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CURRENCY = "GBP"


class ProfileResponse(BaseModel):
    """Profile settings; a user who never saved any gets empty strings."""

    name: Optional[str] = ""
    phone: Optional[str] = ""
    email: Optional[str] = ""
    business_name: Optional[str] = ""
    bank_account_name: Optional[str] = ""
    sort_code: Optional[str] = ""
    account_number: Optional[str] = ""
    home_address: Optional[str] = ""
    home_postcode: Optional[str] = ""
    currency: str = DEFAULT_CURRENCY
    google_maps_api_key: Optional[str] = ""
    postcode_resync_needed: bool = False

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """Replaces the whole profile; fields left out are cleared."""

    name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=320)
    business_name: Optional[str] = Field(None, max_length=255)
    bank_account_name: Optional[str] = Field(None, max_length=255)
    sort_code: Optional[str] = Field(None, max_length=20)
    account_number: Optional[str] = Field(None, max_length=34)
    home_address: Optional[str] = None
    home_postcode: Optional[str] = Field(None, max_length=20)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    google_maps_api_key: Optional[str] = Field(None, max_length=255)
