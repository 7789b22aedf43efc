"""
sandfly-fabric application layer.

- fabric.py: FabricApp (client + registry + health)
- main.py: FastAPI HTTP surface
- mcp_server.py: MCP stdio server
"""

from .fabric import APP_NAME, FabricApp, create_fabric

__all__ = [
    "APP_NAME",
    "FabricApp",
    "create_fabric",
]
