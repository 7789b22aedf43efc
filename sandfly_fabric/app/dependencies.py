"""
Dependency Injection for sandfly-fabric.

Provides the process-wide settings and FabricApp used by the HTTP
surface. Both are created on first access.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from sandfly_fabric.app.fabric import FabricApp, create_fabric
from sandfly_fabric.config import AppSettings, load_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return load_settings()


_fabric: Optional[FabricApp] = None


def get_fabric() -> FabricApp:
    """
    Get the fabric application.

    Initializes the client and tool registry on first call.
    """
    global _fabric
    if _fabric is None:
        _fabric = create_fabric(settings=get_settings())
    return _fabric


async def shutdown_fabric() -> None:
    """Close the fabric's HTTP client, if one was created."""
    global _fabric
    if _fabric is not None:
        await _fabric.aclose()
        _fabric = None
        logger.info("[fabric] Shut down")
