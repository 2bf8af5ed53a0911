"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Remote KV store is enabled only when BOTH url and token are set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Variable names match the hosting platform (KV_REST_API_URL, KV_REST_API_TOKEN, VERCEL)
      so a deployment needs no extra mapping
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_version: str = "1.1.0"
    public_base_url: str = "http://localhost:3000"

    # Remote key/value store (REST API, Redis-backed)
    kv_rest_api_url: str | None = None
    kv_rest_api_token: str | None = None
    kv_key_prefix: str = "sso_"
    kv_timeout_seconds: float = 10.0
    kv_max_retries: int = 2
    kv_base_delay_ms: int = 200
    kv_max_delay_ms: int = 2_000

    @field_validator("kv_rest_api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Endpoints are joined as f"{url}/set/..." — avoid a double slash."""
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            return v or None
        return v

    # File fallback
    data_dir: Path = Path("data")
    vercel: bool = False

    # Draw
    max_draw_attempts: int = 1000

    # API
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def kv_enabled(self) -> bool:
        return bool(self.kv_rest_api_url and self.kv_rest_api_token)

    @property
    def effective_data_dir(self) -> Path:
        """Serverless deployments can only write to /tmp."""
        return Path("/tmp") if self.vercel else self.data_dir


@lru_cache
def get_settings() -> Settings:
    return Settings()
