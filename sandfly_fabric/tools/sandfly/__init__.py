"""
Sandfly Security tools.

The catalog (catalog.py) describes every tool as data; tool.py binds
the catalog to a SandflyClient; alerts.py holds the one aggregating
action.
"""

from .alerts import get_alerts, summarize_host_alerts
from .catalog import TOOL_SPECS, ToolSpec
from .tool import SandflyTool, create_sandfly_registry

__all__ = [
    "TOOL_SPECS",
    "SandflyTool",
    "ToolSpec",
    "create_sandfly_registry",
    "get_alerts",
    "summarize_host_alerts",
]
