"""
Command-line entry point.

    sandfly-fabric                     # MCP server on stdio
    sandfly-fabric --transport http    # FastAPI app via uvicorn
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sandfly_fabric import __version__
from sandfly_fabric.app.dependencies import get_fabric, get_settings
from sandfly_fabric.integrations.base import ConfigurationError

logger = logging.getLogger("sandfly_fabric")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sandfly-fabric",
        description="Serve Sandfly Security tools over MCP (stdio) or HTTP.",
    )
    parser.add_argument(
        "--transport",
        choices=("stdio", "http"),
        default="stdio",
        help="protocol to serve (default: stdio)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        # Logging is not configured yet; stdout belongs to the MCP stream
        print(f"sandfly-fabric: {e}", file=sys.stderr)
        return 2

    # stdout carries MCP messages, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.transport == "http":
        import uvicorn

        uvicorn.run(
            "sandfly_fabric.app.main:app",
            host=settings.http_host,
            port=settings.http_port,
            log_level=settings.log_level.lower(),
        )
        return 0

    from sandfly_fabric.app.mcp_server import serve_stdio

    asyncio.run(serve_stdio(get_fabric()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
