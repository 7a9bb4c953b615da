import logging
import sys

from tradekix_mcp.core.config import settings
from tradekix_mcp.monitoring.sentry import capture_exception, init_sentry

# Sentry MUST be initialised before FastMCP is instantiated: MCPIntegration
# patches the low-level call_tool decorator that FastMCP uses to register its
# handler, so a later init leaves tool calls un-instrumented.
init_sentry(service_name="tradekix-mcp")

from fastmcp import FastMCP  # noqa: E402

from tradekix_mcp.mcp_server.sentry_middleware import McpSentryTracingMiddleware  # noqa: E402
from tradekix_mcp.mcp_server.tooling import register_all_tools  # noqa: E402
from tradekix_mcp.services.tradekix import TradekixClient  # noqa: E402

logger = logging.getLogger(__name__)

SUPPORTED_TRANSPORTS = ("stdio", "sse", "streamable-http")

mcp = FastMCP(
    name="tradekix",
    instructions=(
        "Financial market data from TradeKix: market overview, stock/crypto prices, "
        "indices, forex, earnings and economic calendars, congressional trades, "
        "social sentiment, financial tweets, and news summaries. "
        "Error results may carry 'upgrade' or 'retry_after_seconds' hints."
    ),
    version="0.1.0",
)

register_all_tools(mcp, TradekixClient.from_settings(settings))
mcp.add_middleware(McpSentryTracingMiddleware())


def _resolve_log_level(name: str | None) -> int:
    level = getattr(logging, str(name or "INFO").upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def _announce(transport: str) -> None:
    # always emitted, independent of LOG_LEVEL
    print(f"TradeKix MCP server running on {transport}", file=sys.stderr, flush=True)


def run_server(transport: str) -> None:
    if transport == "stdio":
        _announce(transport)
        mcp.run(transport="stdio", show_banner=False)
    elif transport in ("sse", "streamable-http"):
        _announce(transport)
        logger.info(
            "Listening: host=%s port=%s path=%s",
            settings.MCP_HOST,
            settings.MCP_PORT,
            settings.MCP_PATH,
        )
        mcp.run(
            transport=transport,
            show_banner=False,
            host=settings.MCP_HOST,
            port=settings.MCP_PORT,
            path=settings.MCP_PATH,
        )
    else:
        raise ValueError(
            f"Unsupported MCP_TYPE: {transport} (expected one of {', '.join(SUPPORTED_TRANSPORTS)})"
        )


def main() -> None:
    # stdout carries the MCP stdio stream, so logs go to stderr
    logging.basicConfig(
        level=_resolve_log_level(settings.LOG_LEVEL),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # INFO chatter from fastmcp/httpx would bury the startup line
    for noisy in ("fastmcp", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if not settings.TRADEKIX_API_KEY:
        logger.warning(
            "TRADEKIX_API_KEY is not set; tool calls will fail until it is configured"
        )

    transport = settings.MCP_TYPE
    try:
        run_server(transport)
    except Exception as exc:
        logger.exception("Fatal error: %s", exc)
        capture_exception(exc, mcp_type=transport)
        sys.exit(1)


if __name__ == "__main__":
    main()
