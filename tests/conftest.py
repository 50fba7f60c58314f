"""
Pytest configuration and fixtures for klevu SDK tests

This module provides shared fixtures for unit and integration tests.
No test reaches the network: services are given an httpx.Client backed
by httpx.MockTransport.
"""
import json
import os
from datetime import datetime, timezone
from typing import Any, Callable

import httpx
import pytest

from klevu.core.models import AccountCredentials


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require network access"
    )
    config.addinivalue_line(
        "markers", "integration: Service tests running against a mocked HTTP transport"
    )


# =======================
# CREDENTIAL FIXTURES
# =======================

JS_API_KEY = "klevu-1234567890"
REST_AUTH_KEY = "ABCDE1234567890"


@pytest.fixture
def account_credentials() -> AccountCredentials:
    """Valid credentials for a test account"""
    return AccountCredentials(js_api_key=JS_API_KEY, rest_auth_key=REST_AUTH_KEY)


@pytest.fixture
def invalid_account_credentials() -> AccountCredentials:
    """Credentials failing both key formats"""
    return AccountCredentials(js_api_key="foo", rest_auth_key="bar")


# =======================
# CLOCK FIXTURES
# =======================

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock always returning 2024-01-01T12:00:00+00:00"""
    return lambda: FIXED_NOW


# =======================
# HTTP FIXTURES
# =======================

class RecordingTransport(httpx.MockTransport):
    """
    Mock transport replaying a fixed response and recording every request

    Args:
        status_code: Status of every response
        json_body: Body serialised as JSON
        content: Raw body, used instead of json_body when set
        exception: Raised instead of responding
    """

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: str | bytes | None = None,
        exception: Exception | None = None,
    ):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.exception = exception
        super().__init__(self.respond)

    def respond(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.exception is not None:
            raise self.exception
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(
            self.status_code,
            content=json.dumps(self.json_body if self.json_body is not None else {}),
            headers={"Content-Type": "application/json"},
        )

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def mock_transport() -> Callable[..., RecordingTransport]:
    """Factory building a RecordingTransport"""
    return RecordingTransport


@pytest.fixture
def http_client_factory() -> Callable[..., tuple[httpx.Client, RecordingTransport]]:
    """
    Factory returning an httpx.Client and the transport it records into

    Usage:
        client, transport = http_client_factory(status_code=200, json_body={...})
    """
    clients = []

    def factory(**kwargs) -> tuple[httpx.Client, RecordingTransport]:
        transport = RecordingTransport(**kwargs)
        client = httpx.Client(transport=transport)
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        client.close()


BATCH_SUCCESS_BODY = {
    "message": "Batch accepted successfully",
    "status": "submitted",
    "jobId": "12345-1234-1234-1234-123456789012",
}


@pytest.fixture
def batch_success_body() -> dict[str, Any]:
    return dict(BATCH_SUCCESS_BODY)


# =======================
# ENVIRONMENT FIXTURES
# =======================

@pytest.fixture
def clean_klevu_env(monkeypatch):
    """Remove KLEVU_* variables so config tests start from defaults"""
    for key in list(os.environ):
        if key.startswith("KLEVU_"):
            monkeypatch.delenv(key, raising=False)
    yield monkeypatch
