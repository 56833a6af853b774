"""Service catalog routes."""

from fastapi import APIRouter, Depends, status

from app.api.deps import DB, CurrentUser, get_current_user
from app.models.subscription_enums import ResourceKind
from app.schemas.services import ServiceCreateRequest, ServiceResponse, ServiceUpdateRequest
from app.services.catalog_service import CatalogService
from app.services.limit_service import LimitService
from app.utils.envelopes import api_success, limit_denied_response

router = APIRouter(tags=["services"], dependencies=[Depends(get_current_user)])


@router.get("/services", response_model=dict)
async def list_services(current_user: CurrentUser, db: DB):
    services = await CatalogService.list_services(db, current_user.id)
    return api_success([ServiceResponse.model_validate(s).model_dump() for s in services])


@router.get("/services/{name}", response_model=dict)
async def get_service(name: str, current_user: CurrentUser, db: DB):
    service = await CatalogService.get_service_by_name(db, current_user.id, name)
    return api_success(ServiceResponse.model_validate(service).model_dump())


@router.post("/services", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_service(payload: ServiceCreateRequest, current_user: CurrentUser, db: DB):
    decision = await LimitService.check_limit(db, ResourceKind.SERVICES, current_user)
    if not decision.allowed:
        return limit_denied_response(decision)

    service = await CatalogService.create_service(db, current_user.id, payload)
    return api_success(ServiceResponse.model_validate(service).model_dump())


@router.put("/services/{service_id}", response_model=dict)
async def update_service(
    service_id: int,
    payload: ServiceUpdateRequest,
    current_user: CurrentUser,
    db: DB,
):
    service = await CatalogService.update_service(db, current_user.id, service_id, payload)
    return api_success(ServiceResponse.model_validate(service).model_dump())


@router.delete("/services/{service_id}", response_model=dict)
async def delete_service(service_id: int, current_user: CurrentUser, db: DB):
    await CatalogService.delete_service(db, current_user.id, service_id)
    return api_success({"message": "Service deleted successfully"})
