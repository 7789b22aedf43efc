"""
MCP server for sandfly-fabric.

Serves the fabric's tools over the Model Context Protocol on stdio:

- tools/list returns every tool descriptor
- tools/call runs the tool and returns its JSON result as text

Failures never escape the handler as crashes: the MCP SDK turns the
raised ToolInvocationError into a result with isError=true carrying the
original message ("Unknown tool: <name>" or the error text).
"""

from __future__ import annotations

import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from sandfly_fabric.app.fabric import FabricApp

logger = logging.getLogger(__name__)


class ToolInvocationError(Exception):
    """A tool call that produced an error result."""


class MCPToolHandlers:
    """tools/list and tools/call handlers bound to one FabricApp."""

    def __init__(self, fabric: FabricApp):
        self._fabric = fabric

    async def list_tools(self) -> list[types.Tool]:
        tools = []
        for schema in self._fabric.list_tools():
            annotations = schema.get("annotations")
            tools.append(
                types.Tool(
                    name=schema["name"],
                    description=schema["description"],
                    inputSchema=schema["inputSchema"],
                    annotations=types.ToolAnnotations(**annotations) if annotations else None,
                )
            )
        return tools

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> list[types.TextContent]:
        """
        Run a tool.

        Raises:
            ToolInvocationError: For unknown tools and failed calls
        """
        result = await self._fabric.call(name, arguments)
        if result.is_error:
            raise ToolInvocationError(result.text)
        return [types.TextContent(type="text", text=result.text)]


def create_mcp_server(fabric: FabricApp) -> Server:
    """Build a low-level MCP server exposing the fabric's tools."""
    server: Server = Server(fabric.name, version=fabric.version, instructions=fabric.description)
    handlers = MCPToolHandlers(fabric)

    server.list_tools()(handlers.list_tools)
    server.call_tool()(handlers.call_tool)

    return server


async def serve_stdio(fabric: FabricApp) -> None:
    """Run the MCP server over stdin/stdout until the client disconnects."""
    server = create_mcp_server(fabric)
    logger.info(f"[mcp] Serving {len(fabric.registry)} tools over stdio")

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await fabric.aclose()
