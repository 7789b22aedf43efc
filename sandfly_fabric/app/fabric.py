"""
The Sandfly fabric application.

FabricApp is what protocol shells talk to: it owns the client, the tool
registry built over it, and the health probe.

Usage:
    fabric = create_fabric()                 # client from SANDFLY_* env vars
    fabric = create_fabric(client=stub)      # adapter override for tests

    schemas = fabric.list_tools()
    result = await fabric.call("sandfly_get_alerts", {})
    report = await fabric.health()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sandfly_fabric import __version__
from sandfly_fabric.config import AppSettings, load_settings
from sandfly_fabric.health import HealthCheckResult, SandflyHealthChecker
from sandfly_fabric.integrations.sandfly import SandflyClient
from sandfly_fabric.tools import ToolResult, create_sandfly_registry

if TYPE_CHECKING:
    from sandfly_fabric.tools import Tool, ToolRegistry

logger = logging.getLogger(__name__)

APP_NAME = "sandfly-fabric"
APP_DESCRIPTION = (
    "Sandfly Security fabric app - agentless Linux intrusion detection and incident response"
)


class FabricApp:
    """Tools, health and lifecycle for one Sandfly client."""

    name = APP_NAME
    version = __version__
    description = APP_DESCRIPTION

    def __init__(
        self,
        client: SandflyClient,
        registry: ToolRegistry | None = None,
        *,
        health_checker: SandflyHealthChecker | None = None,
    ):
        self.client = client
        self.registry = registry if registry is not None else create_sandfly_registry(client)
        self._health_checker = health_checker or SandflyHealthChecker(APP_NAME)

    @property
    def tools(self) -> list[Tool]:
        return self.registry.list_tools()

    def list_tools(self) -> list[dict[str, Any]]:
        """Descriptor fields of every tool, for discovery."""
        return self.registry.list_schemas()

    def resolve(self, name: str) -> Tool | None:
        return self.registry.resolve(name)

    def get_required(self, name: str) -> Tool:
        """
        Raises:
            UnknownToolError: If no tool has this name
        """
        return self.registry.get_required(name)

    async def invoke(self, tool: Tool, arguments: dict[str, Any] | None) -> Any:
        return await self.registry.invoke(tool, arguments)

    async def call(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        return await self.registry.call(name, arguments)

    async def health(self) -> HealthCheckResult:
        """Probe the Sandfly server. Never raises."""
        return await self._health_checker.check(self.client)

    async def aclose(self) -> None:
        await self.client.close()

    def __repr__(self) -> str:
        return f"<FabricApp {self.name} {self.version} tools={len(self.registry)}>"


def create_fabric(
    client: SandflyClient | None = None,
    settings: AppSettings | None = None,
) -> FabricApp:
    """
    Build the fabric application.

    Args:
        client: Client to use instead of one built from settings
        settings: Settings to build the client from (defaults to the environment)

    Raises:
        ConfigurationError: If no client is given and settings are incomplete
    """
    if client is None:
        settings = settings or load_settings()
        client = SandflyClient(settings.to_client_config())
        if not settings.verify_ssl:
            logger.warning("[sandfly] TLS certificate verification disabled for this client")

    fabric = FabricApp(client)
    logger.info(f"[fabric] {fabric.name} {fabric.version} ready with {len(fabric.registry)} tools")
    return fabric
