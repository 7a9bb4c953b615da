"""
Pytest configuration and common fixtures for tradekix-mcp tests.
"""

import json
import os
from pathlib import Path
from typing import Any

import pytest


def _load_env_file(env_path: Path) -> None:
    """Load environment variables from a simple KEY=VALUE file."""
    if not env_path.is_file():
        return

    with env_path.open(encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key.strip(), value.strip())


def _ensure_test_env() -> None:
    """Ensure required environment variables exist for tests."""
    project_root = Path(__file__).resolve().parents[1]

    _load_env_file(project_root / "env.example")
    # Allow developers to provide a .env.test with custom overrides.
    _load_env_file(project_root / ".env.test")

    os.environ.setdefault("MCP_TYPE", "stdio")
    os.environ.setdefault("ENVIRONMENT", "test")

    # Never talk to a real Sentry project or leak a developer key from tests.
    os.environ["SENTRY_DSN"] = ""
    os.environ["TRADEKIX_API_KEY"] = "test-api-key"


_ensure_test_env()


class FakeResponse:
    """Minimal stand-in for httpx.Response."""

    def __init__(
        self,
        json_data: Any = None,
        status_code: int = 200,
        text: str | None = None,
    ) -> None:
        self._json_data = json_data
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(json_data)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeHttp:
    """Records GET requests made through a patched httpx.AsyncClient."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.client_kwargs: list[dict[str, Any]] = []
        self.response: FakeResponse | Exception = FakeResponse(
            {"success": True, "data": {}}
        )

    def respond(self, json_data: Any = None, status_code: int = 200, text: str | None = None) -> None:
        self.response = FakeResponse(json_data, status_code=status_code, text=text)

    def fail(self, exc: Exception) -> None:
        self.response = exc

    @property
    def last_request(self) -> dict[str, Any]:
        assert self.requests, "no request was made"
        return self.requests[-1]

    def client_class(self) -> type:
        http = self

        class _FakeAsyncClient:
            def __init__(self, **kwargs: Any) -> None:
                http.client_kwargs.append(kwargs)

            async def __aenter__(self) -> "_FakeAsyncClient":
                return self

            async def __aexit__(self, *exc_info: Any) -> None:
                return None

            async def get(self, url: str, params=None, headers=None, **kwargs: Any):
                http.requests.append(
                    {
                        "url": url,
                        "params": dict(params or {}),
                        "headers": dict(headers or {}),
                    }
                )
                if isinstance(http.response, Exception):
                    raise http.response
                return http.response

        return _FakeAsyncClient


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch) -> FakeHttp:
    """Patch httpx.AsyncClient used by the TradeKix client."""
    from tradekix_mcp.services import tradekix as tradekix_service

    http = FakeHttp()
    monkeypatch.setattr(tradekix_service.httpx, "AsyncClient", http.client_class())
    return http


class DummyMCP:
    def __init__(self) -> None:
        self.tools: dict[str, Any] = {}

    def add_tool(self, tool: Any) -> Any:
        self.tools[tool.name] = tool
        return tool


@pytest.fixture
def dummy_mcp() -> DummyMCP:
    return DummyMCP()


# Markers for different test types
pytest_plugins = ["pytest_asyncio"]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
