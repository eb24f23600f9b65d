"""Pytest configuration and fixtures for API integration tests."""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api import dependencies
from api.main import create_app
from core.settings import (
    AppSettings,
    DatabaseSettings,
    EngineSettings,
    LLMSettings,
    RateLimitSettings,
)
from core.settings.modules.rate_limit_settings import RateLimitTier


def build_test_settings(rate_limit: RateLimitSettings | None = None) -> AppSettings:
    """Settings with mock text generation, no database and no artificial delays."""
    return AppSettings(
        llm=LLMSettings(api_key=""),
        engine=EngineSettings(
            integration_delay=0,
            ai_step_delay=0,
            integration_step_delay=0,
            wait_step_delay=0,
            inter_step_delay=0,
        ),
        rate_limit=rate_limit or RateLimitSettings(enabled=False),
        database=DatabaseSettings(database_url=None),
    )


@pytest.fixture
def app() -> FastAPI:
    """Fresh application with isolated dependencies."""
    application = create_app(build_test_settings())
    yield application
    dependencies.reset_dependencies()


@pytest.fixture
def client(app) -> TestClient:
    """Synchronous client for request/response checks."""
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async client sharing the test's event loop, so started runs keep running."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await dependencies.get_supervisor().shutdown()



@pytest.fixture
def rate_limited_client() -> TestClient:
    """Client for an app with rate limiting on and a two-request execution budget."""
    rate_limit = RateLimitSettings(
        enabled=True,
        execution=RateLimitTier(points=2, duration=60, block_duration=60),
    )
    yield TestClient(create_app(build_test_settings(rate_limit)))
    dependencies.reset_dependencies()
