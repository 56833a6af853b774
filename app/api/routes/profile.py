"""Business profile routes for the signed-in user."""

from fastapi import APIRouter

from app.api.deps import DB, CurrentUser
from app.schemas.profile import ProfileUpdateRequest
from app.services.profile_service import ProfileService
from app.utils.envelopes import api_success

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=dict)
async def get_profile(current_user: CurrentUser, db: DB):
    profile = await ProfileService.get_profile(db, current_user.id)
    return api_success(profile.model_dump())


@router.put("/profile", response_model=dict)
async def save_profile(payload: ProfileUpdateRequest, current_user: CurrentUser, db: DB):
    profile = await ProfileService.save_profile(db, current_user.id, payload)
    return api_success(profile.model_dump())


@router.post("/profile/clear-postcode-resync", response_model=dict)
async def clear_postcode_resync(current_user: CurrentUser, db: DB):
    await ProfileService.clear_postcode_resync(db, current_user.id)
    return api_success({"message": "Postcode resync flag cleared"})
