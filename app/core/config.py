"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing is required at load time: without DATABASE_URL
forum searches answer 503 and readiness fails (greetings are still served),
and without an LLM key the expander, tag matcher and reranker fall back to
their defaults.
"""

import re
from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TABLE_PREFIX_RE = re.compile(r"^[a-zA-Z0-9_]*$")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    LLM provider resolution: DEEPSEEK_API_KEY (cost-tier substitute) wins
    over OPENAI_API_KEY when both are set; see llm_provider().
    """

    # App
    app_name: str = "forum-rag"
    app_version: str = "1.0.0"
    debug: bool = False

    # Forum database (Flarum schema, read-only)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    forum_table_prefix: str = "flarum_"

    # Forum identity (links, prompts, post suggestions)
    forum_url: str = "https://tribe-community.vercel.app"
    forum_name: str = "Tribe"
    assistant_name: str = "TribeAI"

    # Language model (OpenAI-compatible chat completions)
    openai_api_key: SecretStr | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    deepseek_api_key: SecretStr | None = None
    deepseek_base_url: str = "https://api.deepseek.com"
    deepseek_model: str = "deepseek-chat"
    llm_timeout_seconds: float = 30.0

    # Retrieval pipeline
    tag_cache_ttl_seconds: int = 600
    search_main_limit: int = 6
    search_alternate_limit: int = 4
    search_alternate_queries: int = 1
    search_tag_limit: int = 5
    search_timeout_seconds: float = 10.0
    candidate_pool_size: int = 20
    rerank_top_k: int = 6

    # HTTP
    allowed_origins: str = "http://localhost:3000"
    context_rate_limit: str = "30/minute"
    session_token_header: str = "X-Flarum-Token"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_retrieval_settings(self) -> "Settings":
        """Validate values that are interpolated into SQL or bound loop sizes.

        - forum_table_prefix is interpolated into table names, so it must be
          alphanumeric/underscore only.
        - Limits, TTL and timeouts must be positive; search_alternate_queries
          may be 0 (search the original query only) and at most 3.
        """
        if not _TABLE_PREFIX_RE.fullmatch(self.forum_table_prefix):
            raise ValueError(
                "FORUM_TABLE_PREFIX may only contain letters, digits and underscores, "
                f"got: {self.forum_table_prefix!r}"
            )
        positive = {
            "tag_cache_ttl_seconds": self.tag_cache_ttl_seconds,
            "search_main_limit": self.search_main_limit,
            "search_alternate_limit": self.search_alternate_limit,
            "search_tag_limit": self.search_tag_limit,
            "candidate_pool_size": self.candidate_pool_size,
            "rerank_top_k": self.rerank_top_k,
            "search_timeout_seconds": self.search_timeout_seconds,
            "llm_timeout_seconds": self.llm_timeout_seconds,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name.upper()} must be positive, got: {value!r}")
        if not 0 <= self.search_alternate_queries <= 3:
            raise ValueError(
                "SEARCH_ALTERNATE_QUERIES must be between 0 and 3, "
                f"got: {self.search_alternate_queries!r}"
            )
        return self

    def llm_provider(self) -> tuple[str, str, str] | None:
        """Return (api_key, base_url, model) for the active provider, or None.

        None means no credential is configured; LLM-backed components then
        skip their model call entirely.
        """
        if self.deepseek_api_key and self.deepseek_api_key.get_secret_value():
            return (
                self.deepseek_api_key.get_secret_value(),
                self.deepseek_base_url,
                self.deepseek_model,
            )
        if self.openai_api_key and self.openai_api_key.get_secret_value():
            return (
                self.openai_api_key.get_secret_value(),
                self.openai_base_url,
                self.openai_model,
            )
        return None


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
