"""
Pytest Configuration and Fixtures
=================================

Shared fixtures: an in-memory SQLite database per test, an HTTP client
wired to it, and helpers to create users, plans and subscriptions.
"""

import json
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["ENABLE_APP_INSIGHTS"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.db import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, Plan, Subscription, SubscriptionStatus, User
from app.services.auth_service import AuthService


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
async def engine():
    """In-memory database; StaticPool keeps one connection so every session sees the same data"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client talking to the app with get_db pointed at the test database"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# =============================================================================
# MODEL FIXTURES
# =============================================================================

PLAN_ROWS = [
    {"name": "free", "display_name": "Free", "price_monthly": 0,
     "max_appointments": 50, "max_locations": 2, "max_services": 10, "sort_order": 1},
    {"name": "starter", "display_name": "Starter", "price_monthly": 3.99,
     "max_appointments": 500, "max_locations": 5, "max_services": 25, "sort_order": 2},
    {"name": "professional", "display_name": "Professional", "price_monthly": 9.99,
     "max_appointments": -1, "max_locations": -1, "max_services": -1, "sort_order": 3},
]


@pytest.fixture
async def plans(db_session):
    """The three catalog plans, keyed by name"""
    created = {}
    for row in PLAN_ROWS:
        plan = Plan(**row, features=json.dumps([f"{row['display_name']} feature"]))
        db_session.add(plan)
        created[row["name"]] = plan
    await db_session.commit()
    for plan in created.values():
        await db_session.refresh(plan)
    return created


@pytest.fixture
def make_user(db_session):
    async def _make_user(username: str = "kate", is_super_admin: bool = False) -> User:
        user = User(
            username=username,
            password_hash=hash_password("password123"),
            is_super_admin=is_super_admin,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def subscribe(db_session):
    async def _subscribe(user: User, plan: Plan, status: SubscriptionStatus = SubscriptionStatus.ACTIVE) -> Subscription:
        subscription = Subscription(user_id=user.id, plan_id=plan.id, status=status)
        db_session.add(subscription)
        await db_session.commit()
        await db_session.refresh(subscription)
        return subscription

    return _subscribe


@pytest.fixture
async def user(make_user):
    return await make_user("kate")


@pytest.fixture
async def super_admin(make_user):
    return await make_user("admin", is_super_admin=True)


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {AuthService.generate_token(user.id)}"}

    return _auth_headers
