"""Health check endpoints.

Provides health status for load balancer probes and monitoring.
"""

from fastapi import APIRouter

from printshop import __version__
from printshop.config import settings
from printshop.infra.database import verify_db_connection
from printshop.infra.logging import get_logger
from printshop.schemas.common import HealthResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check.

    Returns 200 if service is running.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready() -> HealthResponse:
    """Readiness check.

    Verifies the database is reachable.
    """
    checks: dict[str, bool] = {"database": await verify_db_connection()}
    all_healthy = all(checks.values())

    if not all_healthy:
        logger.warning("Readiness check degraded", checks=checks)

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@router.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )
