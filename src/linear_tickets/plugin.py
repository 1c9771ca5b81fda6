"""Plugin entry point for agent hosts.

The host hands ``register`` an API object carrying its configuration, an
optional logger, and a ``register_tool`` hook. Without an API key nothing is
registered and a single warning is logged.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol

from mcp import types

from .config import get_settings
from .connectors.linear import LinearClient
from .tools import LinearTools, ToolRegistry

logger = logging.getLogger(__name__)

ToolCallback = Callable[[Optional[Dict[str, Any]]], Awaitable[types.CallToolResult]]


class PluginLogger(Protocol):
    """Host logger. Hosts expose either ``warn`` or ``warning``."""

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class PluginHost(Protocol):
    """What the host runtime exposes to the plugin."""

    @property
    def config(self) -> Mapping[str, Any]:
        ...

    @property
    def logger(self) -> Optional[PluginLogger]:
        ...

    def register_tool(
        self,
        tool: types.Tool,
        handler: ToolCallback,
        optional: bool = True,
    ) -> None:
        ...


def _host_logger(host: PluginHost) -> PluginLogger:
    return getattr(host, "logger", None) or logger


def _warn(log: PluginLogger, message: str) -> None:
    warn = getattr(log, "warning", None) or getattr(log, "warn")
    warn(message)


def _resolve_api_key(host: PluginHost) -> Optional[str]:
    config = getattr(host, "config", None) or {}
    api_key = config.get("apiKey") or config.get("api_key")
    if api_key:
        return str(api_key).strip() or None
    return get_settings().linear_api_key


def _make_callback(registry: ToolRegistry, name: str) -> ToolCallback:
    async def callback(arguments: Optional[Dict[str, Any]] = None) -> types.CallToolResult:
        text = await registry.call(name, arguments)
        return types.CallToolResult(content=[types.TextContent(type="text", text=text)])

    return callback


def build_registry(api_key: str, endpoint: Optional[str] = None) -> ToolRegistry:
    """Registry of all Linear tools backed by a client for ``api_key``."""
    client = LinearClient(api_key, endpoint=endpoint)
    return LinearTools(client).build_registry()


def register(host: PluginHost) -> int:
    """Register every Linear tool with ``host``.

    Returns:
        The number of tools registered (0 when no API key is configured).
    """
    log = _host_logger(host)
    api_key = _resolve_api_key(host)
    if not api_key:
        _warn(log, "Linear plugin: apiKey not configured")
        return 0

    log.info("Linear plugin: initializing...")
    registry = build_registry(api_key, endpoint=get_settings().linear_api_url)
    for tool in registry.list_tools():
        host.register_tool(tool, _make_callback(registry, tool.name), optional=True)

    log.info(f"Linear plugin: {len(registry)} tools registered")
    return len(registry)
