"""Tests for application setup."""

import logging

import pytest
from fastapi import status
from httpx import ASGITransport, AsyncClient

from realip.core.config import Environment, settings
from realip.core.registrar import create_app

pytestmark = pytest.mark.asyncio(loop_scope="function")


@pytest.mark.asyncio
async def test_access_log_disabled(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test the address still resolves when access logging is off."""
    monkeypatch.setattr(settings, "ACCESS_LOG_ENABLED", False)
    caplog.set_level(logging.INFO)
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app, client=("192.0.2.1", 4321)),
        base_url="http://test",
    ) as client:
        response = await client.get("/ip")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"ip": "192.0.2.1"}
    assert not [record for record in caplog.records if record.name == "realip.access"]
    assert "Access logging disabled" in caplog.text


@pytest.mark.asyncio
async def test_access_log_enabled(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test the default app logs one access line per request."""
    monkeypatch.setattr(settings, "ACCESS_LOG_ENABLED", True)
    caplog.set_level(logging.INFO, logger="realip.access")
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app, client=("192.0.2.1", 4321)),
        base_url="http://test",
    ) as client:
        await client.get("/ip", headers={"X-Real-IP": "203.0.113.5"})

    access = [record for record in caplog.records if record.name == "realip.access"]
    assert len(access) == 1
    assert access[0].getMessage().startswith('203.0.113.5 "GET /ip" 200')


@pytest.mark.asyncio
async def test_docs_disabled_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test API docs are not served in production."""
    monkeypatch.setattr(settings, "ENVIRONMENT", Environment.PRODUCTION)
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        for endpoint in ("/docs", "/redoc", "/openapi.json"):
            response = await client.get(endpoint)
            assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_docs_enabled_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test API docs are served outside production."""
    monkeypatch.setattr(settings, "ENVIRONMENT", Environment.DEVELOPMENT)
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        response = await client.get("/openapi.json")

    assert response.status_code == status.HTTP_200_OK
    assert "/ip" in response.json()["paths"]
