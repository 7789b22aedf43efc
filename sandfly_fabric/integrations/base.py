"""
Base classes for sandfly-fabric integrations.

This module defines the foundational abstractions for the HTTP
integration layer: the error taxonomy, client configuration and the
httpx client lifecycle shared by concrete clients.

Design Principles:
1. Async-first: All I/O operations are async
2. Scoped transport: TLS verification and deadlines belong to one client
3. Uniform failures: every transport or HTTP failure is an IntegrationError

Error Taxonomy:
    - ConfigurationError: required settings absent (fatal at startup)
    - AuthenticationError: login rejected by the remote service
    - RequestError: non-success HTTP status or transport failure
    - RequestTimeoutError: the per-request deadline expired
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class IntegrationError(Exception):
    """Base exception for integration errors."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.integration = integration
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        parts = [f"[{self.integration}] {self.args[0]}"]
        if self.status_code:
            parts.append(f"(status={self.status_code})")
        return " ".join(parts)


class ConfigurationError(IntegrationError):
    """Raised when required configuration values are missing."""

    def __init__(self, message: str, integration: str = "config", **kwargs):
        super().__init__(message, integration, **kwargs)


class AuthenticationError(IntegrationError):
    """Raised when the login request is rejected."""


class RequestError(IntegrationError):
    """Raised for any non-success HTTP response or transport failure."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        method: str,
        path: str,
        **kwargs,
    ):
        super().__init__(message, integration, **kwargs)
        self.method = method
        self.path = path


class RequestTimeoutError(RequestError):
    """Raised when a request exceeds its deadline."""


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class IntegrationConfig:
    """Transport configuration for an integration client."""

    # Connection
    base_url: str = ""
    timeout: float = 30.0
    verify_ssl: bool = True

    # Observability
    log_requests: bool = False
    log_responses: bool = False


# =============================================================================
# Base Client
# =============================================================================


class IntegrationClient(ABC):
    """
    Abstract base class for integration clients.

    Provides common functionality:
    - HTTP client management (one httpx.AsyncClient per instance)
    - Deadline and network error mapping
    - Request/response logging

    Subclasses must implement:
    - name: Integration identifier
    """

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the integration client.

        Args:
            config: Integration configuration
            transport: Optional httpx transport (used to stub the network)
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this integration."""
        ...

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        redact_body: bool = False,
    ) -> httpx.Response:
        """
        Execute a single HTTP request.

        The response is returned whatever its status; interpreting the
        status is the caller's job. With redact_body the response body is
        left out of the response log.

        Raises:
            RequestTimeoutError: If the deadline expires
            RequestError: On connection or protocol failures
        """
        client = await self._get_client()

        if self.config.log_requests:
            logger.debug(f"[{self.name}] {method} {path} params={params}")

        try:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"{method} {path} timed out after {self.config.timeout}s",
                self.name,
                method=method,
                path=path,
            ) from e
        except httpx.TransportError as e:
            raise RequestError(
                f"{method} {path} network error: {e}",
                self.name,
                method=method,
                path=path,
            ) from e

        if self.config.log_responses:
            if redact_body:
                body = "<redacted>"
            else:
                body = response.text[:500] if response.text else "empty"
            logger.debug(f"[{self.name}] Response: status={response.status_code} body={body}")

        return response

    async def __aenter__(self) -> "IntegrationClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
