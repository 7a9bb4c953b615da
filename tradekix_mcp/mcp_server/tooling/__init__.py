"""MCP tooling for the TradeKix server.

- catalog: declarative tool specs (name, endpoint, parameters)
- handlers: generic FastMCP tool dispatching to the TradeKix client
- registry: tool registration orchestration
"""

from tradekix_mcp.mcp_server.tooling.catalog import (
    TOOL_ENDPOINTS,
    TOOL_SPECS,
    TRADEKIX_TOOL_NAMES,
    get_tool_spec,
)
from tradekix_mcp.mcp_server.tooling.registry import register_all_tools

__all__ = [
    "TOOL_ENDPOINTS",
    "TOOL_SPECS",
    "TRADEKIX_TOOL_NAMES",
    "get_tool_spec",
    "register_all_tools",
]
