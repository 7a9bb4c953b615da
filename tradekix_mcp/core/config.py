from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRADEKIX_DEFAULT_BASE_URL = "https://tradekix-alpha.vercel.app/api/v1"


class Settings(BaseSettings):
    # TradeKix
    TRADEKIX_API_KEY: str | None = None  # 없으면 첫 tool 호출에서 실패
    TRADEKIX_BASE_URL: str = TRADEKIX_DEFAULT_BASE_URL
    TRADEKIX_TIMEOUT: float | None = None  # None이면 timeout 없음

    # MCP server
    MCP_TYPE: str = "stdio"
    MCP_HOST: str = "0.0.0.0"
    MCP_PORT: int = 8765
    MCP_PATH: str = "/mcp"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # Sentry
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str | None = None
    SENTRY_RELEASE: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0
    SENTRY_SEND_DEFAULT_PII: bool = False
    SENTRY_ENABLE_LOG_EVENTS: bool = True
    SENTRY_MCP_INCLUDE_PROMPTS: bool = False

    @field_validator("TRADEKIX_API_KEY", mode="before")
    @classmethod
    def strip_api_key(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("TRADEKIX_TIMEOUT", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # 대소문자 구분 안 함
        env_parse_none_str="None",  # None 문자열 파싱
        extra="ignore",  # 추가 필드 무시
    )


settings = Settings()  # import 하면 전역 singleton
