"""
API module.
"""

from .routes import standings_router
from .dependencies import get_standings_service

__all__ = [
    "standings_router",
    "get_standings_service",
]
