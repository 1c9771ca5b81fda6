"""Intent dispatch layer: tool contracts, resolution and rendering."""

from .linear import LinearTools
from .registry import ToolDefinition, ToolRegistry

__all__ = ["LinearTools", "ToolDefinition", "ToolRegistry"]
