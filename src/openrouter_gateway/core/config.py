"""Centralized configuration for the OpenRouter gateway client.

Settings are loaded with pydantic-settings from ``OPENROUTER_*`` environment
variables, optionally layered over an ``[openrouter]`` table in a TOML file.
Explicit TOML values win over the environment; the environment wins over
defaults.

Environment Variables:
    - OPENROUTER_API_KEY: Provider API key (required to build a client)
    - OPENROUTER_BASE_URL: API base URL
    - OPENROUTER_DEFAULT_MODEL: Model used when a request names none
    - OPENROUTER_TIMEOUT: Per-attempt deadline (seconds)
    - OPENROUTER_MAX_RETRIES: Retries after the first attempt
    - OPENROUTER_RETRY_DELAY: Base backoff delay (seconds)
    - OPENROUTER_MAX_CONCURRENT_REQUESTS: In-flight request ceiling
    - OPENROUTER_APP_NAME / OPENROUTER_SITE_URL: Analytics headers
    - OPENROUTER_REQUEST_LOG_PATH: JSONL request log file

Usage:
    from openrouter_gateway.core.config import get_settings

    settings = get_settings()
    client = OpenRouterClient.from_settings(settings)
"""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/gpt-4o-mini"
DEFAULT_CONFIG_FILE = "config.toml"


class GatewaySettings(BaseSettings):
    """OpenRouter gateway settings.

    Attributes:
        api_key: Provider API key. None lets settings load without one; the
            client refuses to start without it.
        base_url: API base URL. Must start with http:// or https://.
        default_model: Model used when a request names none.
        timeout: Per-attempt deadline in seconds. Range: (0, 600].
        max_retries: Retries after the first attempt. Range: [0, 10].
        retry_delay: Base backoff delay in seconds. Range: [0, 60].
        max_concurrent_requests: In-flight ceiling. Range: [1, 100].
        app_name: Sent as ``X-Title`` when set.
        site_url: Sent as ``HTTP-Referer`` when set.
        request_log_path: JSONL file receiving one event per request. None
            leaves request events on the standard logging tree only.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENROUTER_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Provider API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base URL")
    default_model: str = Field(default=DEFAULT_MODEL, description="Fallback model")
    timeout: float = Field(default=30.0, gt=0.0, le=600.0, description="Attempt deadline (s)")
    max_retries: int = Field(default=3, ge=0, le=10, description="Max retry attempts")
    retry_delay: float = Field(default=1.0, ge=0.0, le=60.0, description="Base retry delay (s)")
    max_concurrent_requests: int = Field(
        default=5, ge=1, le=100, description="Max concurrent requests"
    )
    app_name: str = Field(default="", description="X-Title analytics header")
    site_url: str = Field(default="", description="HTTP-Referer analytics header")
    request_log_path: Path | None = Field(default=None, description="JSONL request log")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base_url is an http(s) URL and strip trailing slashes."""
        if not v.startswith(("http://", "https://")):
            msg = "base_url must start with http:// or https://"
            raise ValueError(msg)
        return v.rstrip("/")


def load_settings(config_path: Path | None = None) -> GatewaySettings:
    """Load settings from the environment and an optional TOML file.

    Args:
        config_path: TOML file with an ``[openrouter]`` table. None looks
            for ``config.toml`` in the working directory.

    Returns:
        GatewaySettings. Environment and defaults only if the file is absent.

    Raises:
        ValueError: If the TOML file is invalid or fails validation.
    """
    path = config_path or Path.cwd() / DEFAULT_CONFIG_FILE
    if not path.exists():
        return GatewaySettings()

    try:
        with path.open("rb") as f:
            config_data = tomllib.load(f)
        return GatewaySettings(**config_data.get("openrouter", {}))
    except Exception as exc:
        msg = f"Failed to load config from {path}: {exc}"
        raise ValueError(msg) from exc


@lru_cache(maxsize=1)
def get_settings() -> GatewaySettings:
    """Get cached settings instance (singleton pattern)."""
    return load_settings()


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "GatewaySettings",
    "get_settings",
    "load_settings",
]
