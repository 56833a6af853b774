"""Business logic for the per-user business profile."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.profile_repo import ProfileRepository
from app.models.profile import BusinessProfile
from app.schemas.profile import DEFAULT_CURRENCY, ProfileResponse, ProfileUpdateRequest

logger = logging.getLogger(__name__)

_TEXT_FIELDS = (
    "name",
    "phone",
    "email",
    "business_name",
    "bank_account_name",
    "sort_code",
    "account_number",
    "home_address",
    "home_postcode",
    "google_maps_api_key",
)


def normalise_postcode(postcode: Optional[str]) -> str:
    """'ls1 4ap ' -> 'LS14AP'"""
    return "".join((postcode or "").split()).upper()


def postcode_changed(old: Optional[str], new: Optional[str]) -> bool:
    """True only when both postcodes are set and differ once normalised."""
    old_key, new_key = normalise_postcode(old), normalise_postcode(new)
    return bool(old_key) and bool(new_key) and old_key != new_key


class ProfileService:

    @staticmethod
    async def get_profile(db: AsyncSession, user_id: int) -> ProfileResponse:
        profile = await ProfileRepository.get_for_user(db, user_id)
        if profile is None:
            return ProfileResponse()
        return ProfileResponse.model_validate(profile)

    @staticmethod
    async def save_profile(db: AsyncSession, user_id: int, payload: ProfileUpdateRequest) -> ProfileResponse:
        """
        Create or replace the user's profile.

        Changing an existing home postcode raises ``postcode_resync_needed`` so
        the client knows stored location distances are stale. The flag stays
        raised until cleared explicitly.
        """
        values = {field: getattr(payload, field) or "" for field in _TEXT_FIELDS}
        values["currency"] = (payload.currency or DEFAULT_CURRENCY).upper()

        profile = await ProfileRepository.get_for_user(db, user_id)
        if profile is None:
            profile = await ProfileRepository.add(
                db, BusinessProfile(user_id=user_id, postcode_resync_needed=False, **values)
            )
            logger.info("Created business profile for user %s", user_id)
            return ProfileResponse.model_validate(profile)

        if postcode_changed(profile.home_postcode, values["home_postcode"]):
            logger.info("Home postcode changed for user %s; distances need a resync", user_id)
            profile.postcode_resync_needed = True

        for key, value in values.items():
            setattr(profile, key, value)

        profile = await ProfileRepository.save(db, profile)
        return ProfileResponse.model_validate(profile)

    @staticmethod
    async def clear_postcode_resync(db: AsyncSession, user_id: int) -> None:
        profile = await ProfileRepository.get_for_user(db, user_id)
        if profile is None or not profile.postcode_resync_needed:
            return
        profile.postcode_resync_needed = False
        await ProfileRepository.save(db, profile)
