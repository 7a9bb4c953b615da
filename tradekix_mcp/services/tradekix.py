"""TradeKix REST API client.

Every MCP tool call goes through :class:`TradekixClient.fetch`, which issues
exactly one authenticated GET and unwraps the ``{success, data, error}``
envelope returned by the API.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from tradekix_mcp.core.config import TRADEKIX_DEFAULT_BASE_URL

if TYPE_CHECKING:
    from tradekix_mcp.core.config import Settings

logger = logging.getLogger(__name__)

API_KEY_ENV = "TRADEKIX_API_KEY"
API_KEY_HEADER = "X-API-Key"
API_KEY_SIGNUP_URL = "https://www.tradekix.ai/ai-agent-access"

MISSING_API_KEY_MESSAGE = (
    f"{API_KEY_ENV} environment variable is required.\n"
    f"Get a free key (100 calls/day) at {API_KEY_SIGNUP_URL}\n"
    f"Or run: curl -X POST {TRADEKIX_DEFAULT_BASE_URL}/connect "
    '-H "Content-Type: application/json" '
    "-d '{\"agent_name\":\"MyClaude\",\"email\":\"you@example.com\",\"source\":\"mcp\"}'"
)


class TradekixConfigError(RuntimeError):
    """Raised when the client cannot make calls because configuration is missing."""


class TradekixResponseError(RuntimeError):
    """Raised when the API answers with JSON that is not a response envelope."""


def build_query_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Keep only defined, non-empty values and stringify them for the query string.

    ``False`` is a defined value and is forwarded as ``"false"``.
    """
    query: dict[str, str] = {}
    if not params:
        return query
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


def normalize_envelope(envelope: Mapping[str, Any]) -> Any:
    """Return ``data`` for a successful envelope, otherwise a normalized error dict."""
    if envelope.get("success"):
        return envelope.get("data")

    error: dict[str, Any] = {}
    if "error" in envelope:
        error["error"] = envelope["error"]
    if envelope.get("upgrade"):
        error["upgrade"] = envelope["upgrade"]
    if envelope.get("retry_after_seconds"):
        error["retry_after_seconds"] = envelope["retry_after_seconds"]
    return error


class TradekixClient:
    """Client for the TradeKix market-data API (GET /api/v1/...)."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = TRADEKIX_DEFAULT_BASE_URL,
        timeout: float | None = None,
    ) -> None:
        self._api_key = api_key.strip() if api_key else None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> TradekixClient:
        return cls(
            api_key=settings.TRADEKIX_API_KEY,
            base_url=settings.TRADEKIX_BASE_URL,
            timeout=settings.TRADEKIX_TIMEOUT,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def build_url(self, endpoint: str) -> str:
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    def _require_api_key(self) -> str:
        if not self._api_key:
            raise TradekixConfigError(MISSING_API_KEY_MESSAGE)
        return self._api_key

    async def fetch(
        self, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> Any:
        """Call ``endpoint`` once and unwrap the response envelope.

        Returns
        -------
        Any
            The opaque ``data`` payload on success, or a dict with ``error`` and
            the optional ``upgrade`` / ``retry_after_seconds`` hints when the API
            reports a business-level failure.

        Raises
        ------
        TradekixConfigError
            No API key is configured. Raised before any network access.
        TradekixResponseError
            The body is valid JSON but not an envelope object.
        httpx.HTTPError, json.JSONDecodeError
            Transport failures and unparseable bodies propagate unchanged.
        """
        api_key = self._require_api_key()
        url = self.build_url(endpoint)
        query = build_query_params(params)
        headers = {API_KEY_HEADER: api_key, "Accept": "application/json"}

        logger.debug(
            "TradeKix request: endpoint=%s params=%s", endpoint, sorted(query)
        )

        async with httpx.AsyncClient(timeout=self._timeout) as cli:
            res = await cli.get(url, params=query, headers=headers)

        # status is not checked; error envelopes can arrive with 4xx/5xx
        envelope = res.json()
        if not isinstance(envelope, dict):
            raise TradekixResponseError(
                f"Unexpected TradeKix response for {endpoint}: "
                f"expected a JSON object, got {type(envelope).__name__}"
            )

        result = normalize_envelope(envelope)
        if not envelope.get("success"):
            logger.warning(
                "TradeKix error: endpoint=%s status=%s error=%s",
                endpoint,
                res.status_code,
                envelope.get("error"),
            )
        return result


__all__ = [
    "API_KEY_ENV",
    "API_KEY_HEADER",
    "MISSING_API_KEY_MESSAGE",
    "TradekixClient",
    "TradekixConfigError",
    "TradekixResponseError",
    "build_query_params",
    "normalize_envelope",
]
