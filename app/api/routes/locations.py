"""Client location routes."""

from fastapi import APIRouter, Depends, status

from app.api.deps import DB, CurrentUser, get_current_user
from app.models.subscription_enums import ResourceKind
from app.schemas.locations import LocationCreateRequest, LocationResponse, LocationUpdateRequest
from app.services.limit_service import LimitService
from app.services.location_service import LocationService
from app.utils.envelopes import api_success, limit_denied_response

router = APIRouter(tags=["locations"], dependencies=[Depends(get_current_user)])


def _serialize(location) -> dict:
    return LocationResponse.model_validate(location).model_dump()


@router.get("/locations", response_model=dict)
async def list_locations(current_user: CurrentUser, db: DB):
    locations = await LocationService.list_locations(db, current_user.id)
    return api_success([_serialize(location) for location in locations])


@router.get("/locations/{name}", response_model=dict)
async def get_location(name: str, current_user: CurrentUser, db: DB):
    location = await LocationService.get_location_by_name(db, current_user.id, name)
    return api_success(_serialize(location))


@router.post("/locations", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_location(payload: LocationCreateRequest, current_user: CurrentUser, db: DB):
    decision = await LimitService.check_limit(db, ResourceKind.LOCATIONS, current_user)
    if not decision.allowed:
        return limit_denied_response(decision)

    location = await LocationService.create_location(db, current_user.id, payload)
    return api_success(_serialize(location))


@router.put("/locations/{location_id}", response_model=dict)
async def update_location(
    location_id: int,
    payload: LocationUpdateRequest,
    current_user: CurrentUser,
    db: DB,
):
    location = await LocationService.update_location(db, current_user.id, location_id, payload)
    return api_success(_serialize(location))


@router.delete("/locations/{location_id}", response_model=dict)
async def delete_location(location_id: int, current_user: CurrentUser, db: DB):
    await LocationService.delete_location(db, current_user.id, location_id)
    return api_success({"message": "Location deleted successfully"})
