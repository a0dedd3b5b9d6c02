"""
Settings for the Dodgem engine and its web driver.

Values come from environment variables (DODGEM_*), falling back to defaults.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger


def _get(name: str, default: Any, cast: Optional[Callable[[Any], Any]] = None) -> Any:
    env = os.environ.get(name)
    if env is None or env == "":
        return default
    return cast(env) if cast else env


@dataclass(frozen=True)
class Settings:
    game_size: int
    # plies searched by the AI side
    search_depth: int
    time_limit_s: Optional[float]
    log_level: str


def load_settings() -> Settings:
    return Settings(
        game_size=_get("DODGEM_GAME_SIZE", 3, cast=int),
        search_depth=_get("DODGEM_SEARCH_DEPTH", 5, cast=int),
        time_limit_s=_get("DODGEM_TIME_LIMIT_S", None, cast=float),
        log_level=str(_get("DODGEM_LOG_LEVEL", "INFO")).upper(),
    )


SETTINGS = load_settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Send loguru output to stderr at ``level`` (defaults to SETTINGS.log_level)."""
    logger.remove()
    logger.add(sys.stderr, level=(level or SETTINGS.log_level).upper())
