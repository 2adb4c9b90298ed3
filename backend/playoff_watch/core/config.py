"""
Environment configuration and logging setup.
"""

import logging
import os
from typing import Optional

from .season import get_current_season


STANDINGS_CACHE_TTL_SECONDS = float(os.getenv("STANDINGS_CACHE_TTL_SECONDS", "3600"))
STANDINGS_MAX_CONCURRENCY = int(os.getenv("STANDINGS_MAX_CONCURRENCY", "8"))
STANDINGS_HTTP_TIMEOUT = float(os.getenv("STANDINGS_HTTP_TIMEOUT", "30.0"))
STANDINGS_AUTO_REFRESH_SECONDS = float(os.getenv("STANDINGS_AUTO_REFRESH_SECONDS", "0"))

# Unset means "whatever season is current when asked"
_SEASON_OVERRIDE = os.getenv("STANDINGS_SEASON", "")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configured_season() -> int:
    """Return the season override if set, otherwise the current season."""
    if _SEASON_OVERRIDE:
        return int(_SEASON_OVERRIDE)
    return get_current_season()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
