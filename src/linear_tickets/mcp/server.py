"""MCP server exposing the Linear tools."""

import logging
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server

from ..config import Settings, get_settings
from ..connectors.linear import LinearClient
from ..tools import LinearTools, ToolRegistry

logger = logging.getLogger(__name__)


class LinearMCPServer:
    """MCP server wrapping the Linear tool registry.

    Without an API key the server still starts, but lists no tools; the
    missing key is reported once, here, rather than on every call.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.server = Server("linear-tickets")
        self.registry: Optional[ToolRegistry] = None

        if self.settings.linear_api_key:
            client = LinearClient.from_settings(self.settings)
            self.registry = LinearTools(client).build_registry()
            logger.info("Linear tools registered: %d", len(self.registry))
        else:
            logger.warning("LINEAR_API_KEY not configured; no Linear tools registered")

        self._setup_handlers()

    async def list_tools(self) -> List[types.Tool]:
        if self.registry is None:
            return []
        return self.registry.list_tools()

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> List[types.TextContent]:
        if self.registry is None or name not in self.registry:
            return [types.TextContent(type="text", text=f"Tool not available: {name}")]

        text = await self.registry.call(name, arguments or {})
        return [types.TextContent(type="text", text=text)]

    def _setup_handlers(self):
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            """List available tools."""
            return await self.list_tools()

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: Optional[Dict[str, Any]] = None
        ) -> List[types.TextContent]:
            """Handle tool calls."""
            return await self.call_tool(name, arguments)
