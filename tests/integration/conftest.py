"""Pytest configuration and fixtures for API integration tests."""

import httpx
import pytest_asyncio

from api.dependencies import (
    get_alert_service,
    get_notification_service,
    get_payment_gateway,
    get_session_factory,
    get_settings,
)
from api.main import app
from core.settings import build_app_settings


@pytest_asyncio.fixture
async def client(session_factory, notifications, alerts, gateway, auth_settings):
    """HTTP client bound to the app with test database and mock adapters."""
    settings = build_app_settings(auth=auth_settings)

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_alert_service] = lambda: alerts
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_settings] = lambda: settings

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    # Cleanup
    app.dependency_overrides.clear()
