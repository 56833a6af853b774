"""Business logic for the per-user service catalog (haircut, colour, ...)."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.service_repo import ServiceRepository
from app.models.models import Service
from app.schemas.services import ServiceCreateRequest, ServiceUpdateRequest
from app.utils.exceptions import ConflictException, NotFoundException

logger = logging.getLogger(__name__)


class CatalogService:
    @staticmethod
    async def list_services(db: AsyncSession, user_id: int) -> list[Service]:
        return await ServiceRepository.list_for_user(db, user_id)

    @staticmethod
    async def get_service_by_name(db: AsyncSession, user_id: int, name: str) -> Service:
        service = await ServiceRepository.get_by_name(db, user_id, name)
        if service is None:
            raise NotFoundException("Service not found")
        return service

    @staticmethod
    async def create_service(db: AsyncSession, user_id: int, payload: ServiceCreateRequest) -> Service:
        if await ServiceRepository.get_by_name(db, user_id, payload.service_name) is not None:
            raise ConflictException("Service name already exists")

        service = Service(
            user_id=user_id,
            service_name=payload.service_name,
            type=payload.type,
            price=payload.price,
        )
        try:
            service = await ServiceRepository.add(db, service)
        except IntegrityError:
            await db.rollback()
            raise ConflictException("Service name already exists")

        logger.info("Created service %s for user %s", service.id, user_id)
        return service

    @staticmethod
    async def update_service(
        db: AsyncSession, user_id: int, service_id: int, payload: ServiceUpdateRequest
    ) -> Service:
        service = await ServiceRepository.get_by_id(db, user_id, service_id)
        if service is None:
            raise NotFoundException("Service not found")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        new_name = changes.get("service_name")
        if new_name and new_name != service.service_name:
            if await ServiceRepository.get_by_name(db, user_id, new_name) is not None:
                raise ConflictException("Service name already exists")

        for key, value in changes.items():
            setattr(service, key, value)

        try:
            return await ServiceRepository.save(db, service)
        except IntegrityError:
            await db.rollback()
            raise ConflictException("Service name already exists")

    @staticmethod
    async def delete_service(db: AsyncSession, user_id: int, service_id: int) -> None:
        service = await ServiceRepository.get_by_id(db, user_id, service_id)
        if service is None:
            raise NotFoundException("Service not found")
        await ServiceRepository.delete(db, service)
        logger.info("Deleted service %s for user %s", service_id, user_id)
