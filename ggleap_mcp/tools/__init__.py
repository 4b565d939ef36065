"""Tools module - GGLeap tool catalog and handlers."""

from .registry import ToolConfig, ToolCatalog, load_tool_catalog, get_tool_catalog
from .handlers import TOOL_HANDLERS, ToolHandler, new_correlation_id

__all__ = [
    "ToolConfig",
    "ToolCatalog",
    "load_tool_catalog",
    "get_tool_catalog",
    "TOOL_HANDLERS",
    "ToolHandler",
    "new_correlation_id",
]
