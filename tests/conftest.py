"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator

import httpx
import pytest
from fastapi import FastAPI, Request

from realip.core.middleware import (
    AccessLogMiddleware,
    RealIPMiddleware,
    real_ip_from_context,
    real_ip_from_request,
)
from realip.core.registrar import create_app

TEST_CLIENT_ADDR = ("192.0.2.1", 4321)


@pytest.fixture(scope="function")
def echo_app() -> FastAPI:
    """Create a FastAPI app exposing both accessors."""
    app = FastAPI()

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, str | None]:
        return {
            "context": real_ip_from_context(),
            "request": real_ip_from_request(request),
        }

    @app.get("/echo-sync")
    def echo_sync(request: Request) -> dict[str, str | None]:
        return {
            "context": real_ip_from_context(),
            "request": real_ip_from_request(request),
        }

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RealIPMiddleware)

    return app


@pytest.fixture(scope="function")
async def echo_client(echo_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    """Create a client whose connection address is TEST_CLIENT_ADDR."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=echo_app, client=TEST_CLIENT_ADDR),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture(scope="function")
def test_app() -> FastAPI:
    """Create the application as served in production."""
    return create_app()


@pytest.fixture(scope="function")
async def test_client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    """Create test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=test_app, client=TEST_CLIENT_ADDR),
        base_url="http://test",
    ) as client:
        yield client
