"""Runtime settings for the Braid service.

Configuration is explicit, validated and environment-driven: every field
can be overridden with a ``BRAID_`` prefixed environment variable or a
``.env`` file. Settings are read once at boot; the registry built from
them is frozen before the first request is served.

Examples:
    >>> import os
    >>> os.environ["BRAID_ADAPTERS"] = '["mock"]'
    >>> BraidSettings().adapters
    ['mock']

Tags:
    settings, configuration, pydantic, environment, braid

Doc-Types:
    - Configuration Guide
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BraidSettings(BaseSettings):
    """Settings for the dispatch service.

    Order of precedence (highest → lowest):
        1. Environment variables (``BRAID_PORT``, ``BRAID_ADAPTERS``, ...)
        2. ``.env`` file
        3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="BRAID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Network ──────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")

    # ── Observability ────────────────────────────────────────────
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Structlog log level")
    log_json: bool | None = Field(
        default=None,
        description="JSON log output; None picks JSON when stdout is not a TTY",
    )
    service_name: str = Field(default="braid-mcp-server", description="Reported by /health and logs")

    # ── Transport ────────────────────────────────────────────────
    max_body_bytes: int = Field(default=1024 * 1024, gt=0, description="Largest accepted /mcp/run body")

    # ── Dispatch ─────────────────────────────────────────────────
    enforce_timeouts: bool = Field(
        default=True,
        description="Apply per-action options.timeoutMs as a dispatch deadline",
    )
    adapters: list[str] = Field(
        default_factory=lambda: ["mock", "business"],
        description="Built-in adapters registered at boot, in order",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> BraidSettings:
    """Cached settings: loaded once per process."""
    return BraidSettings()
