"""Plugin configuration loaded from MORRISB_* environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCRIPT_URL = "https://app.morrisb.com/track.min.js"


class PluginSettings(BaseSettings):
    """MorrisB tracking plugin settings.

    All fields are read from environment variables with the ``MORRISB_`` prefix.
    For example, ``MORRISB_SCRIPT_URL=https://cdn.example.com/t.js`` maps to
    ``script_url``.

    These are deployment-time values.  The workspace identifier is **not**
    managed here -- it lives in the options store and is edited through the
    admin settings page.
    """

    model_config = SettingsConfigDict(
        env_prefix="MORRISB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Tracking snippet ------------------------------------------------------
    script_url: str = DEFAULT_SCRIPT_URL
    """External tracking script.  Overrides only the ``src`` of the emitted tag."""

    init_function: str = "morrisb"
    """Global callable defined by the tracking script."""

    poll_interval_ms: int = 100
    poll_backoff: float = 1.5
    poll_max_interval_ms: int = 2000
    poll_max_attempts: int = 50
    """Bootstrap gives up after this many misses and fires ``morrisb:load-failed``."""

    # -- Options store ---------------------------------------------------------
    options_store: Literal["local", "redis", "database"] = "local"

    data_root: str = "./data"
    """Root directory for the local options file."""

    data_prefix: str | None = None
    """Optional namespace inserted as ``{data_root}/{data_prefix}/options.json``."""

    redis_url: str | None = None
    """Redis connection string.  Required when options_store = "redis"."""

    database_url: str | None = None
    """PostgreSQL connection string (psycopg).  Required when options_store = "database"."""

    # -- Installation check ----------------------------------------------------
    verify_timeout: float = 10.0
    verify_max_attempts: int = 3

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000


def get_settings() -> PluginSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> PluginSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return PluginSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
