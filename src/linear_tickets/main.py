"""Command-line entry point: serve the Linear tools over MCP stdio."""

import asyncio
import logging

from mcp.server.stdio import stdio_server

from .config import get_settings
from .connectors.http_client import close_http_client
from .mcp.server import LinearMCPServer
from .observability.logging import configure_logging

logger = logging.getLogger(__name__)


async def serve() -> None:
    """Run the MCP server until the client disconnects."""
    mcp_server = LinearMCPServer(get_settings())
    try:
        async with stdio_server() as (read_stream, write_stream):
            await mcp_server.server.run(
                read_stream,
                write_stream,
                mcp_server.server.create_initialization_options(),
            )
    finally:
        await close_http_client()


def main() -> None:
    settings = get_settings()
    configure_logging(
        environment=settings.environment,
        log_level=settings.get_log_level(),
    )
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    asyncio.run(serve())


if __name__ == "__main__":
    main()
