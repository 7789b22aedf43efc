"""
Configuration Schemas for sandfly-fabric.

Security:
    The Sandfly password uses SecretStr to prevent accidental logging
    of credentials. Access the value with `.get_secret_value()`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr, field_validator

from sandfly_fabric.integrations.sandfly import SandflyConfig


class AppSettings(BaseModel):
    """
    Application settings model.

    Used for type-safe settings access.
    """

    # Sandfly server
    sandfly_host: str = Field(..., description="Sandfly server URL")
    sandfly_username: str = Field(..., description="Sandfly API username")
    sandfly_password: SecretStr = Field(..., description="Sandfly API password")
    verify_ssl: bool = Field(True, description="Verify the server's TLS certificate")
    request_timeout: float = Field(30.0, gt=0, description="Per-request deadline in seconds")

    # Service
    log_level: str = "INFO"
    log_requests: bool = False
    log_responses: bool = False
    http_host: str = "127.0.0.1"
    http_port: int = Field(8000, ge=1, le=65535)

    @field_validator("sandfly_host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    def to_client_config(self) -> SandflyConfig:
        """Build the Sandfly client configuration."""
        return SandflyConfig(
            base_url=self.sandfly_host,
            username=self.sandfly_username,
            password=self.sandfly_password.get_secret_value(),
            timeout=self.request_timeout,
            verify_ssl=self.verify_ssl,
            log_requests=self.log_requests,
            log_responses=self.log_responses,
        )
