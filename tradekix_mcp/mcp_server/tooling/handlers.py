"""Generic FastMCP tool backed by a catalog entry.

All ten TradeKix tools share one shape: validate arguments, forward the defined
ones to the endpoint, and return the result as a single JSON text block.
"""

from __future__ import annotations

import json
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import ConfigDict, ValidationError

from tradekix_mcp.mcp_server.tooling.catalog import ToolSpec
from tradekix_mcp.services.tradekix import TradekixClient


def render_payload(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        problems.append(f"{loc}: {err.get('msg')}")
    return "; ".join(problems)


class TradekixTool(Tool):
    """MCP tool that proxies one TradeKix endpoint."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    spec: ToolSpec
    client: TradekixClient

    @classmethod
    def from_spec(cls, spec: ToolSpec, client: TradekixClient) -> TradekixTool:
        return cls(
            name=spec.name,
            description=spec.description,
            parameters=spec.input_schema(),
            spec=spec,
            client=client,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            validated = self.spec.validate_arguments(arguments)
        except ValidationError as exc:
            raise ToolError(
                f"Invalid arguments for {self.spec.name}: {_format_validation_error(exc)}"
            ) from exc

        params = self.spec.collect_params(validated)
        payload = await self.client.fetch(self.spec.endpoint, params)
        return ToolResult(content=[TextContent(type="text", text=render_payload(payload))])


__all__ = ["TradekixTool", "render_payload"]
