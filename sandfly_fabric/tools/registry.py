"""
Tool Registry for sandfly-fabric.

The registry manages the available tools:
- Registration with validation
- Lookup by name
- Discovery (public descriptor fields only)
- Invocation

Tools are registered once at startup and immutable afterwards.
Input schemas are advisory: invoke() passes arguments through
untouched, and a missing required argument surfaces as an error from
the remote service.

Usage:
    registry = ToolRegistry()
    registry.register(SandflyTool(spec, client))

    tool = registry.resolve("sandfly_list_hosts")
    hosts = await registry.invoke(tool, {})

    schemas = registry.list_schemas()
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from .base import ToolResult

if TYPE_CHECKING:
    from .base import Tool

logger = logging.getLogger(__name__)


class ToolRegistryError(Exception):
    """Error in tool registry operations."""

    pass


class UnknownToolError(ToolRegistryError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolRegistry:
    """
    Registry of available tools.

    Tools keep their registration order, so discovery output is
    deterministic.

    Example:
        registry = ToolRegistry()
        registry.register(tool)

        tool = registry.resolve("sandfly_get_version")
        result = await registry.invoke(tool, {})
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool.

        Raises:
            ToolRegistryError: If the name is taken or the tool is invalid
        """
        if tool.name in self._tools:
            raise ToolRegistryError(f"Tool '{tool.name}' already registered.")

        self._validate_tool(tool)

        self._tools[tool.name] = tool
        logger.debug(f"[tool_registry] Registered tool: {tool.name}")

    def resolve(self, name: str) -> Tool | None:
        """
        Get a tool by exact name.

        Returns:
            Tool instance or None if not found
        """
        return self._tools.get(name)

    def get_required(self, name: str) -> Tool:
        """
        Get a tool by name, raising if not found.

        Raises:
            UnknownToolError: If tool not found
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def list_tools(self) -> list[Tool]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        """List all registered tool names in registration order."""
        return list(self._tools.keys())

    def list_schemas(self) -> list[dict[str, Any]]:
        """
        Public descriptor fields of every tool, in registration order.

        Returns:
            List of MCP tool schemas (name, description, inputSchema)
        """
        return [tool.to_schema() for tool in self._tools.values()]

    async def invoke(self, tool: Tool, arguments: dict[str, Any] | None) -> Any:
        """
        Run a tool's action with the caller's arguments.

        No schema enforcement happens here. Errors propagate unchanged.
        """
        logger.info(f"[tool_registry] Invoking {tool.name}")
        return await tool.run(arguments or {})

    async def call(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """
        Resolve and execute a tool, always returning a ToolResult.

        Unknown names and action failures become error results that carry
        the original message.
        """
        try:
            tool = self.get_required(name)
        except UnknownToolError as e:
            logger.warning(f"[tool_registry] Unknown tool requested: {name}")
            return ToolResult.error(str(e))
        return await tool.execute(arguments or {})

    def _validate_tool(self, tool: Tool) -> None:
        """
        Validate tool has required properties.

        Raises:
            ToolRegistryError: If tool is invalid
        """
        if not tool.name or not isinstance(tool.name, str):
            raise ToolRegistryError(f"Tool must have a valid name: {tool}")

        if not tool.description or not isinstance(tool.description, str):
            raise ToolRegistryError(f"Tool '{tool.name}' must have a description")

        schema = tool.input_schema
        if not isinstance(schema, dict):
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must be a dict")

        if schema.get("type") != "object":
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must have type: 'object'")

        if "properties" not in schema:
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must have 'properties'")

    def __iter__(self) -> Iterator[Tool]:
        return iter(self.list_tools())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __repr__(self) -> str:
        return f"<ToolRegistry tools={list(self._tools.keys())}>"
