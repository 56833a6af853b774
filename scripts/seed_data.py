"""Seed database with initial data (plans, super admin)."""

import asyncio
import json

from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.core.config import settings
from app.core.db import _ensure_async_url
from app.core.security import hash_password
from app.models import Base, Plan, User


PLANS = [
    {
        "name": "free",
        "display_name": "Free",
        "description": "Get started with basic features",
        "price_monthly": 0,
        "max_appointments": 50,
        "max_locations": 2,
        "max_services": 10,
        "features": ["Basic appointment tracking", "2 locations", "10 services", "Email support"],
        "sort_order": 1,
    },
    {
        "name": "starter",
        "display_name": "Starter",
        "description": "Perfect for small businesses",
        "price_monthly": 3.99,
        "max_appointments": 500,
        "max_locations": 5,
        "max_services": 25,
        "features": [
            "Up to 500 appointments/month",
            "5 locations",
            "25 services",
            "Invoice generation",
            "Priority email support",
        ],
        "sort_order": 2,
    },
    {
        "name": "professional",
        "display_name": "Professional",
        "description": "For growing businesses",
        "price_monthly": 9.99,
        "max_appointments": -1,  # Unlimited
        "max_locations": -1,
        "max_services": -1,
        "features": [
            "Unlimited appointments",
            "Unlimited locations",
            "Unlimited services",
            "Invoice generation",
            "Financial reports",
            "Priority support",
            "Data export",
        ],
        "sort_order": 3,
    },
]


async def seed_plans(session: AsyncSession) -> None:
    """Create or update subscription plans."""
    for plan_data in PLANS:
        values = {**plan_data, "features": json.dumps(plan_data["features"])}
        result = await session.execute(select(Plan).where(Plan.name == plan_data["name"]))
        existing_plan = result.scalar_one_or_none()

        if existing_plan:
            for key, value in values.items():
                setattr(existing_plan, key, value)
            print(f"✓ Updated plan: {plan_data['display_name']}")
        else:
            session.add(Plan(**values))
            print(f"✓ Created plan: {plan_data['display_name']}")

    await session.commit()


async def seed_super_admin(session: AsyncSession) -> None:
    """Create the super admin named by SUPER_ADMIN_USERNAME, or promote an existing user."""
    username = settings.SUPER_ADMIN_USERNAME
    if not username:
        print("• SUPER_ADMIN_USERNAME not set; skipping super admin")
        return

    result = await session.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()

    if user:
        if not user.is_super_admin:
            user.is_super_admin = True
            await session.commit()
            print(f"✓ Promoted {username} to super admin")
        else:
            print(f"✓ Super admin already exists: {username}")
        return

    if not settings.SUPER_ADMIN_PASSWORD:
        print("• SUPER_ADMIN_PASSWORD not set; cannot create super admin")
        return

    session.add(
        User(
            username=username,
            password_hash=hash_password(settings.SUPER_ADMIN_PASSWORD),
            is_super_admin=True,
        )
    )
    await session.commit()
    print(f"✓ Created super admin: {username}")


async def main() -> None:
    """Run all seed operations."""
    print("🌱 Seeding database...")

    engine = create_async_engine(_ensure_async_url(settings.DATABASE_URL), echo=False)
    async with engine.begin() as conn:
        # No-op for tables Alembic already created
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, expire_on_commit=False)
    async with async_session() as session:
        await seed_plans(session)
        await seed_super_admin(session)

    await engine.dispose()

    print("✅ Database seeding completed!")


if __name__ == "__main__":
    asyncio.run(main())
