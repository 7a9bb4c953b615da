"""Declarative catalog of TradeKix MCP tools.

Each tool maps to one fixed API endpoint. Parameters are declared once here and
drive the JSON schema advertised to clients, argument validation, and the query
string forwarded upstream.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, create_model

_DATE_FROM = "Start date (YYYY-MM-DD)"
_DATE_TO = "End date (YYYY-MM-DD)"
_SENTIMENT_CHOICES = ("bullish", "bearish", "neutral")


@dataclass(frozen=True)
class ParamSpec:
    name: str
    description: str
    kind: Literal["string", "boolean"] = "string"
    required: bool = False
    choices: tuple[str, ...] | None = None

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.kind, "description": self.description}
        if self.choices:
            schema["enum"] = list(self.choices)
        return schema

    def annotation(self) -> Any:
        if self.kind == "boolean":
            base: Any = bool
        elif self.choices:
            base = Literal[self.choices]  # type: ignore[valid-type]
        else:
            base = str
        return base if self.required else base | None


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    endpoint: str
    params: tuple[ParamSpec, ...] = field(default_factory=tuple)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.params},
            "required": [p.name for p in self.params if p.required],
        }

    @cached_property
    def _arguments_model(self) -> type[BaseModel]:
        fields: dict[str, Any] = {}
        for p in self.params:
            # "from" is a keyword, so fields are stored under a suffix and aliased
            default = ... if p.required else None
            fields[f"{p.name}_"] = (
                p.annotation(),
                Field(default, alias=p.name, description=p.description),
            )
        model_name = "".join(part.title() for part in self.name.split("_"))
        return create_model(
            f"{model_name}Arguments",
            __config__=ConfigDict(extra="ignore", coerce_numbers_to_str=True),
            **fields,
        )

    def arguments_model(self) -> type[BaseModel]:
        return self._arguments_model

    def validate_arguments(self, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
        """Validate raw tool arguments; raises pydantic.ValidationError."""
        model = self._arguments_model.model_validate(dict(arguments or {}))
        return model.model_dump(by_alias=True)

    def collect_params(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        """Pick declared parameters that carry a defined, non-empty value."""
        collected: dict[str, Any] = {}
        for name in self.param_names:
            value = arguments.get(name)
            if value is None or value == "":
                continue
            collected[name] = value
        return collected


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="market_overview",
        description=(
            "Get a comprehensive market overview: major indices, forex rates, "
            "upcoming economic events, latest alerts, and news summaries. "
            "No parameters needed."
        ),
        endpoint="market/overview",
    ),
    ToolSpec(
        name="prices",
        description=(
            "Get historical and current price data for stocks and crypto. "
            "Requires a ticker symbol (e.g. AAPL, BTC-USD, TSLA)."
        ),
        endpoint="market/prices",
        params=(
            ParamSpec("symbol", "Ticker symbol, e.g. AAPL, BTC-USD, TSLA", required=True),
            ParamSpec("from", _DATE_FROM),
            ParamSpec("to", _DATE_TO),
            ParamSpec("limit", "Number of results (default 30)"),
        ),
    ),
    ToolSpec(
        name="indices",
        description=(
            "Get major market indices. Optionally filter by region "
            "(US, EU, APAC) or country code."
        ),
        endpoint="market/indices",
        params=(
            ParamSpec("region", "Region filter: US, EU, APAC"),
            ParamSpec("country", "Country code filter"),
        ),
    ),
    ToolSpec(
        name="forex",
        description=(
            "Get forex exchange rates. Optionally filter by currency pair "
            "(e.g. EUR/USD)."
        ),
        endpoint="market/forex",
        params=(ParamSpec("symbol", "Currency pair, e.g. EUR/USD"),),
    ),
    ToolSpec(
        name="earnings",
        description="Get upcoming and recent earnings reports. No parameters needed.",
        endpoint="events/earnings",
    ),
    ToolSpec(
        name="economic_events",
        description=(
            "Get economic events calendar: FOMC meetings, CPI releases, jobs data. "
            "Filter by country, impact level, and date range."
        ),
        endpoint="events/economic",
        params=(
            ParamSpec("country", "Country code, e.g. US"),
            ParamSpec(
                "impact", "Impact level filter", choices=("low", "medium", "high")
            ),
            ParamSpec("from", _DATE_FROM),
            ParamSpec("to", _DATE_TO),
        ),
    ),
    ToolSpec(
        name="congressional_trades",
        description=(
            "Track stock trades made by US congress members with conflict-of-interest "
            "detection. Filter by ticker, politician, party, type, and date range."
        ),
        endpoint="trades/congressional",
        params=(
            ParamSpec("symbol", "Filter by ticker symbol"),
            ParamSpec("politician", "Filter by politician name"),
            ParamSpec(
                "party", "Filter by party", choices=("Democrat", "Republican")
            ),
            ParamSpec("type", "Transaction type", choices=("buy", "sell")),
            ParamSpec("from", _DATE_FROM),
            ParamSpec("to", _DATE_TO),
        ),
    ),
    ToolSpec(
        name="sentiment",
        description=(
            "Get aggregated social media sentiment from financial discussions. "
            "Filter by sentiment and financial-only content."
        ),
        endpoint="social/sentiment",
        params=(
            ParamSpec("sentiment", "Sentiment filter", choices=_SENTIMENT_CHOICES),
            ParamSpec("financial_only", "Only financial content", kind="boolean"),
        ),
    ),
    ToolSpec(
        name="tweets",
        description=(
            "Get curated financial tweets and social posts. "
            "Filter by author, ticker, sentiment."
        ),
        endpoint="social/tweets",
        params=(
            ParamSpec("author", "Filter by author"),
            ParamSpec("symbol", "Filter by ticker symbol"),
            ParamSpec("sentiment", "Sentiment filter", choices=_SENTIMENT_CHOICES),
            ParamSpec("financial_only", "Only financial content", kind="boolean"),
        ),
    ),
    ToolSpec(
        name="news",
        description=(
            "Get AI-curated summary of latest financial news and market-moving "
            "events. No parameters needed."
        ),
        endpoint="news/summary",
    ),
)

_SPECS_BY_NAME: dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}

TRADEKIX_TOOL_NAMES: frozenset[str] = frozenset(_SPECS_BY_NAME)
TOOL_ENDPOINTS: dict[str, str] = {spec.name: spec.endpoint for spec in TOOL_SPECS}


def get_tool_spec(name: str) -> ToolSpec:
    return _SPECS_BY_NAME[name]


__all__ = [
    "ParamSpec",
    "TOOL_ENDPOINTS",
    "TOOL_SPECS",
    "TRADEKIX_TOOL_NAMES",
    "ToolSpec",
    "get_tool_spec",
]
