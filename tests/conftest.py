"""Global test configuration and fixtures."""

import os

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["GEMINI_KEY"] = "test-gemini-key"
os.environ["LOG_FORMAT"] = "text"

from relay.api.dependencies import get_http_client, get_settings
from relay.core.config import Settings
from relay.main import create_app
from tests._helpers.fakes import gemini_payload, gemini_transport


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, environment="testing", gemini_key="test-gemini-key")


@pytest.fixture
def captured_requests() -> list:
    """Outbound requests seen by the mocked upstream."""
    return []


@pytest.fixture
def upstream_transport(captured_requests) -> httpx.MockTransport:
    """Default upstream: a well-formed blueprint response."""
    return gemini_transport(
        json_body=gemini_payload("root\n\tsrc\n\tREADME.md"),
        captured=captured_requests,
    )


@pytest.fixture
def test_app(test_settings, upstream_transport):
    """FastAPI app with settings and the outbound transport replaced."""
    app = create_app()
    upstream = httpx.AsyncClient(transport=upstream_transport)

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_http_client] = lambda: upstream

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app) -> TestClient:
    """Create test client."""
    return TestClient(test_app)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Async client talking to the app in-process."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://relay.test") as ac:
        yield ac
