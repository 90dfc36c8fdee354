"""Middleware package for FastAPI application."""

from realip.core.middleware.access_log import AccessLogMiddleware
from realip.core.middleware.context import (
    RealIPMiddleware,
    real_ip_from_context,
    real_ip_from_request,
)

__all__ = [
    "AccessLogMiddleware",
    "RealIPMiddleware",
    "real_ip_from_context",
    "real_ip_from_request",
]
