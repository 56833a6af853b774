"""Super admin user management routes."""

from fastapi import APIRouter, Depends, status

from app.api.deps import DB, SuperAdmin, require_super_admin
from app.schemas.admin_users import AdminUserCreateRequest, AdminUserUpdateRequest
from app.services.admin_user_service import AdminUserService
from app.utils.envelopes import api_success

router = APIRouter(tags=["admin-users"], dependencies=[Depends(require_super_admin)])


@router.get("/admin/users/stats", response_model=dict)
async def get_stats(db: DB):
    """Total users, appointments, locations and services across the system."""
    stats = await AdminUserService.get_stats(db)
    return api_success(stats.model_dump(by_alias=True))


@router.get("/admin/users", response_model=dict)
async def list_users(db: DB):
    users = await AdminUserService.list_users(db)
    return api_success([u.model_dump(mode="json") for u in users])


@router.get("/admin/users/{user_id}", response_model=dict)
async def get_user(user_id: int, db: DB):
    user = await AdminUserService.get_user(db, user_id)
    response = await AdminUserService.to_response(db, user)
    return api_success(response.model_dump(mode="json"))


@router.post("/admin/users", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_user(payload: AdminUserCreateRequest, db: DB):
    user = await AdminUserService.create_user(db, payload)
    response = await AdminUserService.to_response(db, user)
    return api_success(response.model_dump(mode="json"))


@router.put("/admin/users/{user_id}", response_model=dict)
async def update_user(user_id: int, payload: AdminUserUpdateRequest, admin: SuperAdmin, db: DB):
    user = await AdminUserService.update_user(db, admin, user_id, payload)
    response = await AdminUserService.to_response(db, user)
    return api_success(response.model_dump(mode="json"))


@router.delete("/admin/users/{user_id}", response_model=dict)
async def delete_user(user_id: int, admin: SuperAdmin, db: DB):
    await AdminUserService.delete_user(db, admin, user_id)
    return api_success({"message": "User deleted successfully"})
