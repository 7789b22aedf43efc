"""
Sandfly API Client for sandfly-fabric.

This client provides async, session-authenticated access to the Sandfly
Security REST API. It exposes four verb-shaped operations and handles
login, token caching and error mapping.

Usage:
    async with SandflyClient(config) as client:
        hosts = await client.fetch("/v4/hosts")

        await client.create("/v4/scan", {"host_ids": ["..."]})

        await client.replace("/v4/schedules/abc/pause")

        await client.remove("/v4/results/123")

Session Lifecycle:
    - The first request logs in with username/password and caches the
      bearer token for `token_ttl` seconds (shorter than the real
      lifetime, so a token never expires mid-flight).
    - A 401 on fetch() drops the cached token; the failing call still
      raises and the next call logs in again.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from sandfly_fabric.integrations.base import (
    AuthenticationError,
    ConfigurationError,
    IntegrationClient,
    IntegrationConfig,
    RequestError,
)
from sandfly_fabric.integrations.sandfly.schemas import LoginRequest, TokenResponse
from sandfly_fabric.integrations.sandfly.session import CredentialSession

logger = logging.getLogger(__name__)

NO_CONTENT: dict[str, bool] = {"ok": True}


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class SandflyConfig(IntegrationConfig):
    """Configuration for the Sandfly client."""

    # Required
    username: str = ""
    password: str = field(default="", repr=False)

    # Session
    token_ttl: float = 50 * 60
    login_path: str = "/v4/auth/login"

    def __post_init__(self):
        """Validate configuration."""
        missing = [
            label
            for label, value in (
                ("host", self.base_url),
                ("username", self.username),
                ("password", self.password),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Sandfly {', '.join(missing)} required", "sandfly")


# =============================================================================
# Client
# =============================================================================


class SandflyClient(IntegrationClient):
    """
    Async client for the Sandfly API.

    Provides exactly four operations:
    - fetch(path, query): GET, returns parsed JSON
    - create(path, body): POST
    - replace(path, body): PUT
    - remove(path): DELETE, returns {"ok": True}

    The client handles:
    - Login and bearer token caching (one CredentialSession per client)
    - Single-flight login when concurrent calls see a stale session
    - Error mapping to RequestError / AuthenticationError
    """

    def __init__(
        self,
        config: SandflyConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize Sandfly client.

        Args:
            config: Sandfly configuration with host and credentials
            transport: Optional httpx transport (tests pass a MockTransport)
            clock: Monotonic time source used for token expiry
        """
        super().__init__(config, transport=transport)
        self._config: SandflyConfig = config
        self._clock = clock
        self._session = CredentialSession()
        self._login_lock = asyncio.Lock()

    @property
    def name(self) -> str:
        """Integration name."""
        return "sandfly"

    @property
    def session(self) -> CredentialSession:
        """The credential session owned by this client."""
        return self._session

    # =========================================================================
    # Authentication
    # =========================================================================

    async def acquire_token(self) -> str:
        """
        Return a valid bearer token, logging in only when needed.

        Raises:
            AuthenticationError: If the login is rejected
        """
        token = self._cached_token()
        if token is not None:
            return token

        async with self._login_lock:
            # Another task may have logged in while we waited
            token = self._cached_token()
            if token is not None:
                return token
            return await self._login()

    def _cached_token(self) -> str | None:
        if self._session.is_valid(self._clock()):
            return self._session.token
        return None

    async def _login(self) -> str:
        login_path = self._config.login_path
        credentials = LoginRequest(
            username=self._config.username,
            password=self._config.password,
        )

        response = await self._send(
            "POST",
            login_path,
            json=credentials.to_api_dict(),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            redact_body=True,
        )

        if not response.is_success:
            logger.warning(
                f"[sandfly] Login rejected for {self._config.username}: "
                f"status={response.status_code}"
            )
            raise AuthenticationError(
                f"Sandfly auth failed: {response.text}",
                self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            token = TokenResponse.model_validate(response.json()).access_token
        except ValueError as e:
            raise AuthenticationError(
                "Sandfly auth response did not contain an access token",
                self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        self._session.store(token, self._clock(), self._config.token_ttl)
        logger.info(f"[sandfly] Authenticated as {self._config.username}")
        return token

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    # =========================================================================
    # Requests
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Send an authenticated request and check its status.

        Raises:
            RequestError: For any non-success status
        """
        token = await self.acquire_token()
        response = await self._send(
            method,
            path,
            params=params,
            json=json,
            headers=self._auth_headers(token),
        )

        if response.is_success:
            return response

        if response.status_code == 401 and method == "GET":
            logger.warning(f"[sandfly] Token rejected on GET {path}, session invalidated")
            self._session.invalidate()

        raise RequestError(
            f"Sandfly {method} {path} failed: {response.text}",
            self.name,
            method=method,
            path=path,
            status_code=response.status_code,
            response_body=response.text,
        )

    @staticmethod
    def _parse(response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return dict(NO_CONTENT)
        return response.json()

    async def fetch(self, path: str, query: dict[str, str] | None = None) -> Any:
        """
        GET a resource.

        Args:
            path: API path, e.g. /v4/hosts
            query: Query parameters (string values only)

        Returns:
            Parsed JSON body
        """
        return self._parse(await self._request("GET", path, params=query))

    async def create(self, path: str, body: Any = None) -> Any:
        """POST to a resource; the body is sent only when given."""
        return self._parse(await self._request("POST", path, json=body))

    async def replace(self, path: str, body: Any = None) -> Any:
        """PUT to a resource; the body is sent only when given."""
        return self._parse(await self._request("PUT", path, json=body))

    async def remove(self, path: str) -> dict[str, bool]:
        """DELETE a resource. Any response body is discarded."""
        await self._request("DELETE", path)
        return dict(NO_CONTENT)
