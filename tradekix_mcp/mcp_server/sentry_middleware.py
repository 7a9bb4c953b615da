"""Sentry tracing middleware for FastMCP tool calls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import sentry_sdk
from fastmcp.server.middleware.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from mcp.types import CallToolResult

from tradekix_mcp.mcp_server.tooling.catalog import TOOL_ENDPOINTS

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastmcp.tools.tool import ToolResult as ToolResultType

logger = logging.getLogger(__name__)


def _extract_symbol(arguments: dict[str, Any] | None) -> str | None:
    if not arguments:
        return None
    value = arguments.get("symbol")
    if value is None or value == "":
        return None
    return str(value)


def _is_error_result(result: Any) -> bool:
    """Check if the tool result indicates an error."""
    if isinstance(result, CallToolResult):
        return result.isError
    if isinstance(result, ToolResult):
        structured = result.structured_content
        if isinstance(structured, dict):
            return bool(structured.get("error") or structured.get("isError"))
        return False
    return False


class McpSentryTracingMiddleware(Middleware):
    """Sentry tracing for MCP tool calls.

    Sets transaction name to mcp.<tool_name>, opens a span per call tagged with
    the TradeKix endpoint it proxies, and records failures.
    """

    async def on_call_tool(
        self,
        context: MiddlewareContext[Any],
        call_next: Callable[[MiddlewareContext[Any]], Awaitable[ToolResultType]],
    ) -> ToolResultType:
        message = context.message
        tool_name = getattr(message, "name", "unknown")
        arguments = getattr(message, "arguments", None)
        if not isinstance(arguments, dict):
            arguments = None
        endpoint = TOOL_ENDPOINTS.get(tool_name)
        symbol = _extract_symbol(arguments)
        transaction_name = f"mcp.{tool_name}"

        scope = sentry_sdk.get_current_scope()
        scope.set_transaction_name(transaction_name, source="custom")
        tags = {"mcp.tool_name": tool_name, "mcp.method": "tools/call"}
        if endpoint:
            tags["tradekix.endpoint"] = endpoint
        if symbol:
            tags["tradekix.symbol"] = symbol
        for key, value in tags.items():
            scope.set_tag(key, value)

        span_name = f"{tool_name}:{endpoint}" if endpoint else tool_name

        # No active span means no transaction; open one so httpx spans attach.
        if scope.span is None:
            with sentry_sdk.start_transaction(
                name=transaction_name,
                op="mcp.request",
                source="custom",
            ) as transaction:
                for key, value in tags.items():
                    transaction.set_tag(key, value)
                return await self._run_tool_span(
                    context, call_next, span_name, tags, arguments, transaction
                )

        return await self._run_tool_span(
            context, call_next, span_name, tags, arguments, None
        )

    async def _run_tool_span(
        self,
        context: MiddlewareContext[Any],
        call_next: Callable[[MiddlewareContext[Any]], Awaitable[ToolResultType]],
        span_name: str,
        tags: dict[str, str],
        arguments: dict[str, Any] | None,
        transaction: Any | None,
    ) -> ToolResultType:
        with sentry_sdk.start_span(op="mcp.tool", name=span_name) as span:
            for key, value in tags.items():
                span.set_tag(key, value)
            if arguments:
                span.set_data("argument_keys", sorted(arguments))

            try:
                result = await call_next(context)
            except Exception as exc:
                span.set_status("internal_error")
                span.set_data("error_type", type(exc).__name__)
                if transaction is not None:
                    transaction.set_status("internal_error")
                logger.debug("Tool call failed: %s (%s)", span_name, type(exc).__name__)
                raise

            status = "internal_error" if _is_error_result(result) else "ok"
            span.set_status(status)
            if transaction is not None:
                transaction.set_status(status)
            return result
