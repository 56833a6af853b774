"""Business logic for client locations."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.location_repo import LocationRepository
from app.models.models import Location
from app.schemas.locations import LocationCreateRequest, LocationUpdateRequest
from app.utils.exceptions import ConflictException, NotFoundException

logger = logging.getLogger(__name__)


class LocationService:
    """Service for location operations, always scoped to one user."""

    @staticmethod
    async def list_locations(db: AsyncSession, user_id: int) -> list[Location]:
        return await LocationRepository.list_for_user(db, user_id)

    @staticmethod
    async def get_location_by_name(db: AsyncSession, user_id: int, name: str) -> Location:
        location = await LocationRepository.get_by_name(db, user_id, name)
        if location is None:
            raise NotFoundException("Location not found")
        return location

    @staticmethod
    async def create_location(db: AsyncSession, user_id: int, payload: LocationCreateRequest) -> Location:
        if await LocationRepository.get_by_name(db, user_id, payload.location_name) is not None:
            raise ConflictException("Location name already exists")

        location = Location(user_id=user_id, **payload.model_dump())
        try:
            location = await LocationRepository.add(db, location)
        except IntegrityError:
            await db.rollback()
            raise ConflictException("Location name already exists")

        logger.info("Created location %s for user %s", location.id, user_id)
        return location

    @staticmethod
    async def update_location(
        db: AsyncSession, user_id: int, location_id: int, payload: LocationUpdateRequest
    ) -> Location:
        location = await LocationRepository.get_by_id(db, user_id, location_id)
        if location is None:
            raise NotFoundException("Location not found")

        changes = payload.model_dump(exclude_unset=True)
        new_name = changes.get("location_name")
        if new_name and new_name != location.location_name:
            if await LocationRepository.get_by_name(db, user_id, new_name) is not None:
                raise ConflictException("Location name already exists")
        elif "location_name" in changes and not new_name:
            changes.pop("location_name")

        for key, value in changes.items():
            setattr(location, key, value)

        try:
            return await LocationRepository.save(db, location)
        except IntegrityError:
            await db.rollback()
            raise ConflictException("Location name already exists")

    @staticmethod
    async def delete_location(db: AsyncSession, user_id: int, location_id: int) -> None:
        location = await LocationRepository.get_by_id(db, user_id, location_id)
        if location is None:
            raise NotFoundException("Location not found")
        await LocationRepository.delete(db, location)
        logger.info("Deleted location %s for user %s", location_id, user_id)
