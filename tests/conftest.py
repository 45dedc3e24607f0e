"""
Pytest configuration and fixtures for devfleet SDK tests.

No test touches the network: clients get an httpx.MockTransport driven by
FakeApi, which answers scripted routes and records every request.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import unquote

import httpx
import pytest

from devfleet.client import AsyncDevFleetClient, DevFleetClient
from devfleet.config import SDKSettings, reset_settings

API_URL = "https://api.devfleet.test"


class FakeApi:
    """Scripted API for httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: list[dict[str, Any]] = []

    def add(
        self,
        method: str,
        match: str,
        json: Any = None,
        status: int = 200,
        text: str | None = None,
        once: bool = False,
    ) -> None:
        """
        Answer requests whose method matches and whose unquoted URL contains match.

        Routes are tried in the order they were added. A route with once=True
        is dropped after its first use.
        """
        self._routes.append(
            {
                "method": method.upper(),
                "match": match,
                "json": json,
                "status": status,
                "text": text,
                "once": once,
            }
        )

    def add_pine(self, method: str, match: str, records: list[dict[str, Any]], **kwargs: Any) -> None:
        """Answer a pine query with {"d": records}."""
        self.add(method, match, json={"d": records}, **kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = unquote(str(request.url))
        for route in self._routes:
            if route["method"] == request.method and route["match"] in url:
                if route["once"]:
                    self._routes.remove(route)
                if route["text"] is not None:
                    return httpx.Response(route["status"], text=route["text"])
                if route["json"] is None:
                    return httpx.Response(route["status"])
                return httpx.Response(route["status"], json=route["json"])
        return httpx.Response(404, json={"error": f"no route for {request.method} {url}"})

    # Inspection helpers

    def urls(self, method: str | None = None) -> list[str]:
        return [
            unquote(str(request.url))
            for request in self.requests
            if method is None or request.method == method.upper()
        ]

    def last(self, method: str | None = None) -> httpx.Request:
        matching = [r for r in self.requests if method is None or r.method == method.upper()]
        assert matching, f"no {method or ''} request was sent"
        return matching[-1]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture(autouse=True)
def reset_sdk_settings():
    """Keep the shared settings instance out of test-to-test state."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fake_api() -> FakeApi:
    """Provide an empty scripted API."""
    return FakeApi()


@pytest.fixture
def settings() -> SDKSettings:
    """Provide settings pointing at the fake API."""
    return SDKSettings(api_url=API_URL, api_key="test-key")


@pytest.fixture
def client(fake_api: FakeApi, settings: SDKSettings) -> AsyncDevFleetClient:
    """Provide an async client wired to the fake API."""
    return AsyncDevFleetClient(settings=settings, transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def sync_client(fake_api: FakeApi, settings: SDKSettings) -> DevFleetClient:
    """Provide a sync client wired to the fake API."""
    return DevFleetClient(settings=settings, transport=httpx.MockTransport(fake_api.handler))
