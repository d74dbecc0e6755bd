# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings
from app.dependencies import PageCacheDep, SupabaseDep
from lib.supabase_client import SupabaseClientError
from lib.utils import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    database: str
    cached_pages: int


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utc_now().isoformat(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check(db: SupabaseDep, cache: PageCacheDep):
    """
    Readiness check endpoint.

    Runs a one-row query against the posts table.
    """
    checks = ChecksResponse(database="unknown", cached_pages=len(cache))

    try:
        db.fetch_rows("posts", columns="id", limit=1)
        checks.database = "healthy"
    except SupabaseClientError as e:
        logger.warning(f"Readiness check failed: {e}")
        checks.database = f"unhealthy: {e.code}"

    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=utc_now().isoformat(),
    )
