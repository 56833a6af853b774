from fastapi import APIRouter

from app.api.deps import CurrentUser
from app.schemas.auth import UserResponse
from app.utils.envelopes import api_success

router = APIRouter(tags=["users"])


@router.get("/users/me", response_model=dict)
async def get_current_user_endpoint(current_user: CurrentUser):
	return api_success(UserResponse.model_validate(current_user).model_dump())
