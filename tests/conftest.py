"""Pytest configuration and shared fixtures."""
import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from playpath import PlayPathClient

BASE_URL = "http://playpath.test"
API_KEY = "test-key"


class MockBackend:
    """In-process stand-in for the PlayPath API.

    Answers from a route table keyed by (method, path) and records every
    request it sees, so tests can assert on what went over the wire.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        **response_kwargs: Any
    ) -> None:
        """Register a canned response."""
        def respond(request: httpx.Request) -> httpx.Response:
            if json is not None:
                return httpx.Response(status, json=json, **response_kwargs)
            return httpx.Response(status, **response_kwargs)

        self._routes[(method, path)] = respond

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        """Register a handler computing the response from the request."""
        self._routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": f"No route for {request.method} {request.url.path}"})
        return route(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def backend():
    """Return an empty mock backend."""
    return MockBackend()


@pytest.fixture
def http_client(backend):
    """Return an httpx client wired to the mock backend."""
    return httpx.AsyncClient(transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def client(http_client):
    """Return a PlayPath client talking to the mock backend."""
    return PlayPathClient(base_url=BASE_URL, api_key=API_KEY, http_client=http_client)


@pytest.fixture(scope="session")
def api_config():
    """Return live API configuration from environment."""
    return {
        "base_url": os.getenv("PLAYPATH_BASE_URL"),
        "api_key": os.getenv("PLAYPATH_API_KEY"),
    }
