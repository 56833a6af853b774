"""Health check endpoints for monitoring."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import DB
from app.core.config import settings
from app.utils.envelopes import api_success

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


async def _database_status(db: DB) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return f"unhealthy: {e}"
    return "healthy"


@router.get("/health", response_model=dict)
async def health_check(db: DB):
    """Health check endpoint for load balancers and monitoring."""
    db_status = await _database_status(db)

    health_data = {
        "status": "ok" if db_status == "healthy" else "degraded",
        "service": settings.APP_NAME,
        "database": db_status,
    }

    return api_success(health_data)


@router.get("/health/ready", response_model=dict)
async def readiness_check(db: DB):
    """Readiness probe: the database answers."""
    return api_success({"ready": await _database_status(db) == "healthy"})


@router.get("/health/live", response_model=dict)
async def liveness_check():
    """Liveness probe."""
    return api_success({"alive": True})
