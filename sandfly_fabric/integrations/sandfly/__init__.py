"""
Sandfly Security integration for sandfly-fabric.

Sandfly is an agentless Linux intrusion detection and incident response
platform. This integration provides the session-authenticated HTTP
adapter used by every Sandfly tool.

Usage:
    from sandfly_fabric.integrations.sandfly import SandflyClient, SandflyConfig

    client = SandflyClient(SandflyConfig(
        base_url="https://sandfly.example.com",
        username="api",
        password="...",
    ))

    version = await client.fetch("/v4/system/version")
"""

from sandfly_fabric.integrations.sandfly.client import SandflyClient, SandflyConfig
from sandfly_fabric.integrations.sandfly.schemas import (
    AlertReport,
    HostAlertSummary,
    HostRecord,
    HostResultCounts,
)
from sandfly_fabric.integrations.sandfly.session import CredentialSession

__all__ = [
    "AlertReport",
    "CredentialSession",
    "HostAlertSummary",
    "HostRecord",
    "HostResultCounts",
    "SandflyClient",
    "SandflyConfig",
]
