"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.

The renderer itself never reads settings: callers pass a ``RenderConfig``
(or accept its defaults), which keeps ``render()`` a pure function.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from textus.markup.marker_constants import (
    DEFAULT_END_MARKER_CLASS,
    DEFAULT_START_MARKER_CLASS,
)

logger = logging.getLogger(__name__)

# src/textus/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class RenderConfig(BaseModel):
    """Markup renderer options.

    ``legacy_escape`` and ``legacy_priority`` reproduce two quirks of the
    older browser renderer for byte-for-byte comparisons against stored
    output; leave them off otherwise.
    """

    model_config = ConfigDict(frozen=True)

    start_marker_class: str = DEFAULT_START_MARKER_CLASS
    end_marker_class: str = DEFAULT_END_MARKER_CLASS
    legacy_escape: bool = False
    legacy_priority: bool = False


class LogConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    dir: Path | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"LOG__LEVEL must be one of {sorted(_LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``RENDER__LEGACY_ESCAPE``, ``LOG__LEVEL``, ``LOG__DIR``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    render: RenderConfig = RenderConfig()
    log: LogConfig = LogConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
