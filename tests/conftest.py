"""
Pytest configuration and fixtures for sandfly-fabric tests.
"""

import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Add the repository root to path for imports
# This allows `from sandfly_fabric.tools import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from sandfly_fabric.integrations.sandfly import SandflyClient, SandflyConfig  # noqa: E402

LOGIN_PATH = "/v4/auth/login"

Handler = Callable[[httpx.Request], httpx.Response]


class StubSandfly:
    """
    In-memory Sandfly server for httpx.MockTransport.

    Logins are counted and issue token-1, token-2, ... Other requests
    are answered from registered routes, then from `default`, then 404.
    """

    def __init__(self):
        self.login_calls = 0
        self.login_status = 200
        self.login_body: dict[str, Any] | None = None
        self.login_requests: list[httpx.Request] = []
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Handler] = {}
        self.default: Handler | None = None

    def route(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            if json is not None:
                return httpx.Response(status_code, json=json)
            return httpx.Response(status_code)

        self.routes[(method, path)] = respond

    def route_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == LOGIN_PATH:
            self.login_calls += 1
            self.login_requests.append(request)
            if self.login_status != 200:
                return httpx.Response(self.login_status, text="invalid credentials")
            body = self.login_body or {"access_token": f"token-{self.login_calls}"}
            return httpx.Response(200, json=body)

        self.requests.append(request)
        respond = self.routes.get((request.method, request.url.path)) or self.default
        if respond is None:
            return httpx.Response(404, text=f"no route for {request.url.path}")
        return respond(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sandfly_config():
    """Create test Sandfly configuration."""
    return SandflyConfig(
        base_url="https://sandfly.test",
        username="api-user",
        password="api-password",
        timeout=5.0,
    )


@pytest.fixture
def stub():
    """Create an empty stub Sandfly server."""
    return StubSandfly()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(sandfly_config, stub, clock):
    """Create a Sandfly client wired to the stub server."""
    return SandflyClient(sandfly_config, transport=stub.transport, clock=clock)


@pytest.fixture
def sample_hosts():
    """Hosts list as returned by GET /v4/hosts."""
    return [
        {
            "uuid": "h1",
            "address": "10.0.0.1",
            "hostname": "web-1",
            "results": {"alert": 2, "error": 1, "pass": 7, "total": 10},
        },
        {
            "uuid": "h2",
            "address": "10.0.0.2",
            "hostname": "db-1",
        },
        {
            "uuid": "h3",
            "address": "10.0.0.3",
            "hostname": "cache-1",
            "results": {"alert": 3},
        },
    ]
