"""Request context middleware that records the real client IP address."""

import logging
from contextvars import Context, ContextVar
from typing import Final

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from realip.core.config import settings
from realip.utils.request import format_remote_addr, resolve_real_ip

logger = logging.getLogger(__name__)

real_ip_ctx: ContextVar[str] = ContextVar("real_ip")

REAL_IP_STATE_KEY: Final[str] = "real_ip"


class RealIPMiddleware(BaseHTTPMiddleware):
    """Middleware resolving the client IP from proxy headers.

    The result is stored in the request context before the next handler
    runs. Install it before anything that reads the address, such as access
    logging. Starlette runs the last added middleware first, so add this one
    after its consumers.
    """

    def __init__(
        self,
        app: ASGIApp,
        forwarded_for_header: str = settings.FORWARDED_FOR_HEADER,
        real_ip_header: str = settings.REAL_IP_HEADER,
    ) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            forwarded_for_header: Name of the forwarded-for header
            real_ip_header: Name of the real-IP header
        """
        super().__init__(app)
        self.forwarded_for_header = forwarded_for_header
        self.real_ip_header = real_ip_header

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Resolve the client IP and set it in the request context.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            FastAPI response
        """
        remote_addr = format_remote_addr(request.client)
        real_ip = resolve_real_ip(
            request.headers,
            remote_addr,
            forwarded_for_header=self.forwarded_for_header,
            real_ip_header=self.real_ip_header,
        )
        if not real_ip:
            logger.debug("No client IP resolved for connection %r", remote_addr)

        setattr(request.state, REAL_IP_STATE_KEY, real_ip)
        token = real_ip_ctx.set(real_ip)
        try:
            return await call_next(request)
        finally:
            real_ip_ctx.reset(token)


def real_ip_from_context(ctx: Context | None = None) -> str | None:
    """Get the resolved client IP from a context.

    Args:
        ctx: Context snapshot to read, defaults to the current context

    Returns:
        The resolved IP (possibly empty), or None if the middleware did not run
    """
    if ctx is not None:
        return ctx.get(real_ip_ctx)
    return real_ip_ctx.get(None)


def real_ip_from_request(request: Request) -> str | None:
    """Get the resolved client IP from a request.

    Convenience for handlers holding the request rather than the context.
    """
    return getattr(request.state, REAL_IP_STATE_KEY, None)
