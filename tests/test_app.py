"""
Application setup tests.
"""

import pytest
from httpx import AsyncClient

from solobill.core.config import Settings, settings
from solobill.main import app


def test_debug_flag_reaches_app():
    assert app.debug is settings.DEBUG


def test_environment_flags(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Development")
    assert Settings().is_development is True

    monkeypatch.setenv("ENVIRONMENT", "production")
    assert Settings().is_development is False


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["app"] == settings.APP_NAME
