"""Super admin user management: system stats and user CRUD."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.subscription_repo import SubscriptionRepository
from app.database.user_repo import UserRepository
from app.models.models import Appointment, Location, Service, User
from app.models.subscription_enums import ResourceKind
from app.schemas.admin_users import (
    AdminUserCreateRequest,
    AdminUserResponse,
    AdminUserUpdateRequest,
    SystemStats,
)
from app.services.auth_service import AuthService
from app.utils.exceptions import ConflictException, NotFoundException, ValidationException

logger = logging.getLogger(__name__)


class AdminUserService:
    """User administration. Callers are already checked to be super admins."""

    @staticmethod
    async def get_stats(db: AsyncSession) -> SystemStats:
        return SystemStats(
            total_users=await UserRepository.count_rows(db, User),
            total_appointments=await UserRepository.count_rows(db, Appointment),
            total_locations=await UserRepository.count_rows(db, Location),
            total_services=await UserRepository.count_rows(db, Service),
        )

    @staticmethod
    async def to_response(db: AsyncSession, user: User) -> AdminUserResponse:
        counts = await SubscriptionRepository.count_all_user_resources(db, user.id)
        return AdminUserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            is_super_admin=user.is_super_admin,
            created_at=user.created_at,
            appointment_count=counts[ResourceKind.APPOINTMENTS],
            location_count=counts[ResourceKind.LOCATIONS],
            service_count=counts[ResourceKind.SERVICES],
        )

    @staticmethod
    async def list_users(db: AsyncSession) -> list[AdminUserResponse]:
        users = await UserRepository.list_users(db)
        return [await AdminUserService.to_response(db, user) for user in users]

    @staticmethod
    async def get_user(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get(db, user_id)
        if user is None:
            raise NotFoundException("User not found")
        return user

    @staticmethod
    async def create_user(db: AsyncSession, payload: AdminUserCreateRequest) -> User:
        # Admin-created accounts start on the free plan like self-registered ones
        return await AuthService.create_user(
            db,
            username=payload.username,
            password=payload.password,
            email=payload.email,
            is_super_admin=payload.is_super_admin,
        )

    @staticmethod
    async def update_user(
        db: AsyncSession, admin: User, user_id: int, payload: AdminUserUpdateRequest
    ) -> User:
        """
        Change a user's username, email or super admin flag.

        Raises:
            ValidationException: nothing to change, or an admin demoting themselves
            ConflictException: the new username belongs to someone else
        """
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationException("No fields to update")

        if user_id == admin.id and changes.get("is_super_admin") is False:
            raise ValidationException("Cannot remove super admin status from yourself")

        user = await AdminUserService.get_user(db, user_id)

        new_username = changes.get("username")
        if new_username is None:
            changes.pop("username", None)
        elif new_username != user.username:
            if await UserRepository.get_by_username(db, new_username) is not None:
                raise ConflictException("Username already exists")
        if changes.get("is_super_admin") is None:
            changes.pop("is_super_admin", None)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()

        for key, value in changes.items():
            setattr(user, key, value)

        try:
            user = await UserRepository.save(db, user)
        except IntegrityError:
            await db.rollback()
            raise ConflictException("Username already exists")

        logger.info("Super admin %s updated user %s (%s)", admin.id, user_id, ", ".join(sorted(changes)))
        return user

    @staticmethod
    async def delete_user(db: AsyncSession, admin: User, user_id: int) -> None:
        if user_id == admin.id:
            raise ValidationException("Cannot delete your own account")

        user = await AdminUserService.get_user(db, user_id)
        await UserRepository.delete_with_owned_rows(db, user)
        logger.info("Super admin %s deleted user %s", admin.id, user_id)
