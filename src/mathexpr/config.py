"""
Runtime configuration for mathexpr.

Settings are read from environment variables:

    MATHEXPR_CACHE_SIZE: maximum number of compiled expressions kept by
        ``compile_expression`` (default 256, 0 disables the cache)
    MATHEXPR_LOG_LEVEL: logging level used by the CLI (default WARNING)

Invalid values fall back to the default with a logged warning rather than
failing, so a bad environment never prevents expressions from evaluating.

Usage:
    from mathexpr.config import get_settings

    settings = get_settings()
    settings.cache_size  # 256
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

CACHE_SIZE_ENV_VAR = "MATHEXPR_CACHE_SIZE"
LOG_LEVEL_ENV_VAR = "MATHEXPR_LOG_LEVEL"

DEFAULT_CACHE_SIZE = 256
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineSettings(BaseModel):
    """Process-wide engine settings."""

    cache_size: int = Field(default=DEFAULT_CACHE_SIZE, ge=0, description="Compile cache size")
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="CLI logging level")

    model_config = ConfigDict(frozen=True)


def parse_log_level(value: str | None) -> str:
    """Normalize a log level name, falling back to WARNING."""
    level = (value or "").strip().upper()
    if not level:
        return DEFAULT_LOG_LEVEL
    if level not in _LOG_LEVELS:
        logger.warning(
            "Unknown %s value '%s'. Using '%s'.", LOG_LEVEL_ENV_VAR, value, DEFAULT_LOG_LEVEL
        )
        return DEFAULT_LOG_LEVEL
    return level


def _parse_cache_size(value: str | None) -> int:
    if value is None or not value.strip():
        return DEFAULT_CACHE_SIZE
    try:
        size = int(value)
    except ValueError:
        size = -1
    if size < 0:
        logger.warning(
            "Invalid %s value '%s'. Using %d.", CACHE_SIZE_ENV_VAR, value, DEFAULT_CACHE_SIZE
        )
        return DEFAULT_CACHE_SIZE
    return size


def load_settings(environ: Mapping[str, str] | None = None) -> EngineSettings:
    """Build settings from ``environ`` (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ
    return EngineSettings(
        cache_size=_parse_cache_size(env.get(CACHE_SIZE_ENV_VAR)),
        log_level=parse_log_level(env.get(LOG_LEVEL_ENV_VAR)),
    )


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Settings for this process, read once from the environment."""
    return load_settings()
