"""
Pydantic schemas for the Sandfly API.

Only the payloads this package reads or derives are modelled; every
other response is passed through to callers as plain JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr

# Counters are reported as JSON numbers; fractional values are kept as-is
Count = int | float

# =============================================================================
# Authentication
# =============================================================================


class LoginRequest(BaseModel):
    """Body of POST /v4/auth/login."""

    username: str
    password: SecretStr

    def to_api_dict(self) -> dict[str, str]:
        """Convert to API request format with the password revealed."""
        return {
            "username": self.username,
            "password": self.password.get_secret_value(),
        }


class TokenResponse(BaseModel):
    """Successful login response."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1)
    refresh_token: str | None = None


# =============================================================================
# Hosts
# =============================================================================


class HostResultCounts(BaseModel):
    """Per-host result counters embedded in the hosts list."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    alert: Count | None = None
    error: Count | None = None
    pass_: Count | None = Field(None, alias="pass")
    total: Count | None = None


class HostRecord(BaseModel):
    """The subset of a host entry used for alert aggregation."""

    model_config = ConfigDict(extra="ignore")

    # Identifiers are opaque and passed through untouched
    uuid: Any = None
    address: Any = None
    hostname: Any = None
    results: HostResultCounts | None = None


class HostAlertSummary(BaseModel):
    """Alert counters for one host, with missing counters as zero."""

    model_config = ConfigDict(populate_by_name=True)

    host_id: Any = None
    address: Any = None
    hostname: Any = None
    alert: Count = 0
    error: Count = 0
    pass_: Count = Field(0, alias="pass")
    total: Count = 0

    @classmethod
    def from_host(cls, host: HostRecord) -> HostAlertSummary:
        counts = host.results or HostResultCounts()
        return cls(
            host_id=host.uuid,
            address=host.address,
            hostname=host.hostname,
            alert=counts.alert or 0,
            error=counts.error or 0,
            pass_=counts.pass_ or 0,
            total=counts.total or 0,
        )


class AlertReport(BaseModel):
    """Cross-host alert report returned by sandfly_get_alerts."""

    total_alerts: Count = 0
    hosts: list[HostAlertSummary] = Field(default_factory=list)

    def to_api_dict(self) -> dict:
        """Serialize with the remote field names ("pass", not "pass_")."""
        return self.model_dump(by_alias=True)
