"""TradeKix MCP server (market data tools)

This package exposes the TradeKix financial-data API as read-only MCP tools.
"""

from tradekix_mcp.mcp_server.tooling import TRADEKIX_TOOL_NAMES, register_all_tools

AVAILABLE_TOOL_NAMES = sorted(TRADEKIX_TOOL_NAMES)

__all__ = ["AVAILABLE_TOOL_NAMES", "register_all_tools"]
