"""
sandfly-fabric Tools.

Tools are named, schema-described units of callable functionality.
They wrap client calls into units that agents can discover and invoke.

MCP Alignment:
    Tool interface follows Model Context Protocol standards.
    See: https://modelcontextprotocol.io/specification/

Usage:
    registry = create_sandfly_registry(client)

    for schema in registry.list_schemas():
        print(schema["name"])

    result = await registry.call("sandfly_list_hosts", {})
"""

from .base import (
    ContentBlock,
    Tool,
    ToolAnnotations,
    ToolResult,
)
from .registry import ToolRegistry, ToolRegistryError, UnknownToolError
from .sandfly import TOOL_SPECS, SandflyTool, ToolSpec, create_sandfly_registry

__all__ = [
    # Core Tool Protocol
    "ContentBlock",
    "Tool",
    "ToolAnnotations",
    "ToolResult",
    "ToolRegistry",
    "ToolRegistryError",
    "UnknownToolError",
    # Sandfly
    "TOOL_SPECS",
    "SandflyTool",
    "ToolSpec",
    "create_sandfly_registry",
]
