"""Pytest configuration and fixtures for crew tool tests."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from crew_tools import GoogleServiceConfig, Settings  # noqa: E402

PROXY_URL = "http://proxy.test"


class MockBackend:
    """Canned HTTP backend that records every request it receives."""

    def __init__(self, status_code=200, payload=None, text=None, error=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.text = text
        self.error = error
        self.requests = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def backend():
    """Factory for mock HTTP backends."""
    return MockBackend


@pytest.fixture
def proxy_config():
    """Proxy credentials for Google adapters."""
    return GoogleServiceConfig(
        access_token="test-access-token",
        refresh_token="test-refresh-token",
        google_service_api_url=PROXY_URL,
    )


@pytest.fixture
def settings():
    """Settings isolated from the process environment and .env files."""
    return Settings(_env_file=None, google_service_api_url="", google_access_token="")
