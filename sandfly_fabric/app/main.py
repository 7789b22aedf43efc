"""
sandfly-fabric HTTP surface.

FastAPI application exposing tool discovery, invocation and the health
probe over HTTP:

    GET  /              service info
    GET  /health        health report (status in the body)
    GET  /tools         tool descriptors
    POST /tools/{name}  invoke a tool with a JSON object of arguments
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException

from sandfly_fabric import __version__
from sandfly_fabric.app.dependencies import get_fabric, shutdown_fabric
from sandfly_fabric.app.fabric import APP_DESCRIPTION, APP_NAME, FabricApp
from sandfly_fabric.tools import UnknownToolError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Closes the Sandfly client on shutdown.
    """
    logger.info("Starting sandfly-fabric HTTP surface...")

    yield

    logger.info("Shutting down sandfly-fabric HTTP surface...")
    try:
        await shutdown_fabric()
    except Exception as e:
        logger.error(f"Error during shutdown: {e}", exc_info=True)


app = FastAPI(
    title=APP_NAME,
    description=APP_DESCRIPTION,
    version=__version__,
    lifespan=lifespan,
)


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint with service info."""
    return {
        "service": APP_NAME,
        "version": __version__,
        "status": "running",
    }


@app.get("/health", tags=["health"])
async def health_check(fabric: FabricApp = Depends(get_fabric)) -> dict[str, Any]:
    """
    Health check endpoint.

    Always answers 200; an unreachable Sandfly server is reported as
    status "unavailable" with the error in details.
    """
    result = await fabric.health()
    return result.to_dict()


@app.get("/tools", tags=["tools"])
async def list_tools(fabric: FabricApp = Depends(get_fabric)) -> dict[str, Any]:
    """List tool descriptors."""
    return {"tools": fabric.list_tools()}


@app.post("/tools/{name}", tags=["tools"])
async def call_tool(
    name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    fabric: FabricApp = Depends(get_fabric),
) -> dict[str, Any]:
    """
    Invoke a tool.

    Tool failures are reported in the result with isError=true.
    """
    try:
        tool = fabric.get_required(name)
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    result = await tool.execute(arguments or {})
    return result.to_dict()
