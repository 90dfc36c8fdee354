"""Access log middleware recording one line per request."""

import logging
import time
from typing import Final

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from realip.core.middleware.context import real_ip_from_request

logger = logging.getLogger("realip.access")

UNRESOLVED_IP: Final[str] = "-"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Middleware logging the client IP, request line, status and duration.

    Reads the address set by RealIPMiddleware, so it must run after it.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and log the access line.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            FastAPI response
        """
        client_ip = real_ip_from_request(request) or UNRESOLVED_IP
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            process_time = time.perf_counter() - start_time

            logger.info(
                '%s "%s %s" %d %.2fms',
                client_ip,
                request.method,
                request.url.path,
                response.status_code,
                process_time * 1000,
            )

            return response

        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.error(
                '%s "%s %s" failed in %.2fms - %s',
                client_ip,
                request.method,
                request.url.path,
                process_time * 1000,
                str(e),
            )
            raise
