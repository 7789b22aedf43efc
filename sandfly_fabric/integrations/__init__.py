"""
sandfly-fabric Integrations Layer.

This module provides clients for the remote services the tools wrap.
Each integration follows a consistent pattern:

1. Client: Handles authentication and API communication
2. Schemas: Pydantic models for the payloads the client reads
3. Session: Credential state owned by a single client

Directory Structure:
    integrations/
    ├── base.py           # Error taxonomy, config, httpx lifecycle
    └── sandfly/          # Sandfly Security
        ├── client.py     # SandflyClient
        ├── schemas.py    # Pydantic models
        └── session.py    # CredentialSession
"""

from sandfly_fabric.integrations.base import (
    AuthenticationError,
    ConfigurationError,
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
    RequestError,
    RequestTimeoutError,
)

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "IntegrationClient",
    "IntegrationConfig",
    "IntegrationError",
    "RequestError",
    "RequestTimeoutError",
]
