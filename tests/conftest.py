"""Shared fixtures for Briq client tests.

Network access is never needed: every HttpClient under test is built on an
``httpx.MockTransport`` whose handler plays the role of the API.
"""

from collections.abc import Callable
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from briq.core.config import ClientConfig
from briq.transport.http_client import HttpClient

# Security: test-only key matching the API key format
TEST_API_KEY = "test_api_key_0123456789"  # nosec B105  # gitleaks:allow
TEST_BASE_URL = "https://api.briq.test"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def config() -> ClientConfig:
    """Client config pointing at a fake host."""
    return ClientConfig(
        api_key=TEST_API_KEY,
        base_url=TEST_BASE_URL,
        version="v1",
        timeout_ms=5000,
        max_attempts=3,
        sender_id="BRIQ",
    )


@pytest.fixture
def make_http_client(config: ClientConfig) -> Callable[..., HttpClient]:
    """Factory building an HttpClient whose transport calls ``handler``."""

    def _make(handler: Handler, client_config: ClientConfig | None = None, **kwargs):
        return HttpClient(
            client_config or config,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by handlers built with ``json_handler``."""
    return []


@pytest.fixture
def json_handler(recorded_requests: list[httpx.Request]) -> Callable[..., Handler]:
    """Factory for handlers that record the request and reply with JSON."""

    def _make(status_code: int = 200, body: object = None) -> Handler:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return httpx.Response(status_code, json=body if body is not None else {})

        return handler

    return _make


@pytest.fixture
def no_sleep():
    """Skip real backoff delays; yields the mock to inspect delays."""
    with patch("briq.transport.retry.asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock
