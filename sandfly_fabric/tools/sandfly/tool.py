"""
Sandfly tools.

SandflyTool binds one catalog ToolSpec to one SandflyClient, and
create_sandfly_registry() registers the whole catalog in declaration
order.

Usage:
    registry = create_sandfly_registry(client)

    tool = registry.resolve("sandfly_get_host")
    host = await registry.invoke(tool, {"host_id": "..."})
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sandfly_fabric.tools.base import Tool, ToolAnnotations
from sandfly_fabric.tools.registry import ToolRegistry
from sandfly_fabric.tools.sandfly.catalog import TOOL_SPECS, ToolSpec

if TYPE_CHECKING:
    from sandfly_fabric.integrations.sandfly import SandflyClient

logger = logging.getLogger(__name__)


class SandflyTool(Tool):
    """A catalog entry bound to a client."""

    def __init__(self, spec: ToolSpec, client: SandflyClient):
        self._spec = spec
        self._client = client

    @property
    def spec(self) -> ToolSpec:
        return self._spec

    @property
    def name(self) -> str:
        return self._spec.name

    @property
    def description(self) -> str:
        return self._spec.description

    @property
    def input_schema(self) -> dict[str, Any]:
        return dict(self._spec.input_schema)

    @property
    def annotations(self) -> ToolAnnotations:
        return self._spec.annotations

    async def run(self, arguments: dict[str, Any]) -> Any:
        return await self._spec.action(self._client, arguments)


def create_sandfly_registry(
    client: SandflyClient,
    specs: Iterable[ToolSpec] = TOOL_SPECS,
) -> ToolRegistry:
    """
    Build a registry holding one SandflyTool per spec.

    Args:
        client: Client shared by every tool
        specs: Tool specs, registered in iteration order

    Raises:
        ToolRegistryError: If two specs share a name
    """
    registry = ToolRegistry()
    for spec in specs:
        registry.register(SandflyTool(spec, client))

    logger.info(f"[tool_registry] Registered {len(registry)} Sandfly tools")
    return registry
