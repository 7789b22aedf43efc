"""
sandfly-fabric - Sandfly Security tools for agents.

Exposes the Sandfly Security REST API as named, schema-described tools
that an agent or orchestrator can discover and invoke over MCP (stdio)
or HTTP, without knowing endpoints, verbs or the login flow.

- **Adapter**: session-authenticated httpx client (fetch/create/replace/remove)
- **Tool Registry**: declarative catalog of Sandfly tools, generic dispatch
- **Health**: one-call probe reporting healthy/unavailable
- **Shells**: MCP stdio server and FastAPI app

Quick Start:
    >>> from sandfly_fabric import create_fabric
    >>>
    >>> fabric = create_fabric()   # reads SANDFLY_HOST/USERNAME/PASSWORD
    >>> result = await fabric.call("sandfly_get_alerts", {})
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Core exports for convenient imports
from sandfly_fabric.app.fabric import FabricApp, create_fabric
from sandfly_fabric.integrations.sandfly import SandflyClient, SandflyConfig
from sandfly_fabric.tools import ToolRegistry, ToolResult

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Core
    "FabricApp",
    "SandflyClient",
    "SandflyConfig",
    "ToolRegistry",
    "ToolResult",
    "create_fabric",
]
