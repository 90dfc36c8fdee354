"""Registrar for FastAPI application setup."""

import logging

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from realip.api.system import router as system_router
from realip.core.config import Environment, settings
from realip.core.errors import (
    RealIPNotResolvedError,
    app_error_handler,
    http_error_handler,
)
from realip.core.middleware import AccessLogMiddleware, RealIPMiddleware

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        docs_url="/docs" if settings.ENVIRONMENT != Environment.PRODUCTION else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != Environment.PRODUCTION else None,
        openapi_url="/openapi.json"
        if settings.ENVIRONMENT != Environment.PRODUCTION
        else None,
    )

    register_exception_handlers(app)
    register_routers(app)
    register_middleware(app)

    return app


def register_middleware(app: FastAPI) -> None:
    """Register middleware.

    Args:
        app: FastAPI application

    Note:
        Middleware is applied in reverse order, so the first middleware registered
        will be the last to run, and the last middleware registered will be the
        first to run.

        Order of execution (first to last):
        1. Real IP (request context)
        2. Access Log (logging)
    """
    if settings.ACCESS_LOG_ENABLED:
        app.add_middleware(AccessLogMiddleware)
    else:
        logger.info("Access logging disabled")
    app.add_middleware(
        RealIPMiddleware,
        forwarded_for_header=settings.FORWARDED_FOR_HEADER,
        real_ip_header=settings.REAL_IP_HEADER,
    )


def register_routers(app: FastAPI) -> None:
    """Register API routers.

    Args:
        app: FastAPI application
    """
    app.include_router(system_router)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RealIPNotResolvedError, app_error_handler)  # type: ignore[arg-type]
