"""System-level API routes."""

from typing import Final

from fastapi import APIRouter

from realip.core.config import settings
from realip.core.dependencies import RealIP

HEALTH_STATUS_HEALTHY: Final[str] = "healthy"


router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Check system health."""
    return {"status": HEALTH_STATUS_HEALTHY}


@router.get("/ip")
async def read_ip(real_ip: RealIP) -> dict[str, str]:
    """Echo the client IP as seen through the proxy headers.

    Returns:
        The resolved address, empty when none could be determined
    """
    return {"ip": real_ip}


@router.get("/")
async def read_root() -> dict[str, str]:
    """Root endpoint with API info.

    Returns:
        Basic API information
    """
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
