"""Real client IP resolution for applications behind reverse proxies."""

from realip.core.middleware.context import (
    RealIPMiddleware,
    real_ip_from_context,
    real_ip_from_request,
)
from realip.utils.request import check_ip, get_client_ip, resolve_real_ip

__all__ = [
    "RealIPMiddleware",
    "check_ip",
    "get_client_ip",
    "real_ip_from_context",
    "real_ip_from_request",
    "resolve_real_ip",
]
