"""Environment-driven settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

from veriform.utils.field_mappings import DEFAULT_FIELD_MAPPINGS, FieldMapping, load_field_mappings

DEFAULT_SSE_URL = "https://localhost:4215/verifier-sdk/sse/read/chrome_ext"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


@dataclass
class Settings:
    """Container for environment-driven settings."""

    sse_url: str = field(default_factory=lambda: _env_str("VERIFORM_SSE_URL", DEFAULT_SSE_URL))
    reconnect_attempts: int = field(default_factory=lambda: int(os.getenv("VERIFORM_RECONNECT_ATTEMPTS", "5")))
    reconnect_delay_seconds: float = field(default_factory=lambda: float(os.getenv("VERIFORM_RECONNECT_DELAY", "1.0")))
    keepalive_interval_seconds: float = field(
        default_factory=lambda: float(os.getenv("VERIFORM_KEEPALIVE_INTERVAL", "25.0"))
    )
    verify_ssl: bool = field(default_factory=lambda: _env_flag("VERIFORM_VERIFY_SSL", default=False))
    field_mappings_path: str | None = field(default_factory=lambda: os.getenv("VERIFORM_FIELD_MAPPINGS") or None)
    browser_type: str = field(default_factory=lambda: _env_str("VERIFORM_BROWSER", "chromium"))
    headless: bool = field(default_factory=lambda: _env_flag("VERIFORM_HEADLESS", default=False))
    log_level: str = field(default_factory=lambda: _env_str("VERIFORM_LOG_LEVEL", "INFO"))

    def field_mapping(self) -> FieldMapping:
        """Return the configured mapping file, or the built-in table when none is set."""

        if self.field_mappings_path:
            return load_field_mappings(self.field_mappings_path)
        return DEFAULT_FIELD_MAPPINGS


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance, reading ``.env`` first."""

    load_dotenv()
    return Settings()
