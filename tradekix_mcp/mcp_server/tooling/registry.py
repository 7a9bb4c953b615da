"""Tool registration orchestration for MCP server."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tradekix_mcp.mcp_server.tooling.catalog import TOOL_SPECS, ToolSpec
from tradekix_mcp.mcp_server.tooling.handlers import TradekixTool

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from tradekix_mcp.services.tradekix import TradekixClient

logger = logging.getLogger(__name__)

_MCP_REGISTERED_TOOL_NAMES: weakref.WeakKeyDictionary[object, set[str]] = (
    weakref.WeakKeyDictionary()
)


def register_tool_specs(
    mcp: FastMCP, client: TradekixClient, specs: Iterable[ToolSpec]
) -> list[str]:
    """Register each spec once per MCP instance; returns the newly added names."""
    registered = _MCP_REGISTERED_TOOL_NAMES.setdefault(mcp, set())
    added: list[str] = []
    for spec in specs:
        if spec.name in registered:
            continue
        mcp.add_tool(TradekixTool.from_spec(spec, client))
        registered.add(spec.name)
        added.append(spec.name)
    if added:
        logger.debug("Registered TradeKix tools: %s", ", ".join(added))
    return added


def register_all_tools(mcp: FastMCP, client: TradekixClient) -> None:
    register_tool_specs(mcp, client, TOOL_SPECS)


__all__ = ["register_all_tools", "register_tool_specs"]
