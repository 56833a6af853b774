from fastapi import APIRouter, status

from app.api.deps import DB
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from app.services.auth_service import AuthService
from app.utils.envelopes import api_success
from app.utils.exceptions import UnauthorizedException

router = APIRouter(tags=["auth"])


@router.post("/auth/register", response_model=dict, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: DB):
	user = await AuthService.create_user(
		db,
		username=payload.username,
		password=payload.password,
		email=payload.email,
	)
	token = AuthService.generate_token(user.id)
	return api_success(AuthResponse(user=UserResponse.model_validate(user), token=token).model_dump())


@router.post("/auth/login", response_model=dict)
async def login(payload: LoginRequest, db: DB):
	user = await AuthService.authenticate(db, payload.username, payload.password)
	if user is None:
		raise UnauthorizedException("Invalid username or password")
	token = AuthService.generate_token(user.id, remember_me=payload.remember_me)
	return api_success(AuthResponse(user=UserResponse.model_validate(user), token=token).model_dump())
