"""Core dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, Request

from realip.core.errors import RealIPNotResolvedError
from realip.core.middleware.context import real_ip_from_request


async def get_real_ip(request: Request) -> str:
    """Get the client IP resolved by RealIPMiddleware.

    Args:
        request: FastAPI request

    Returns:
        Resolved client IP, possibly empty

    Raises:
        RealIPNotResolvedError: If RealIPMiddleware is not installed
    """
    real_ip = real_ip_from_request(request)
    if real_ip is None:
        raise RealIPNotResolvedError(
            "Client IP requested but RealIPMiddleware is not installed",
        )
    return real_ip


RealIP = Annotated[str, Depends(get_real_ip)]

__all__ = ["RealIP", "get_real_ip"]
