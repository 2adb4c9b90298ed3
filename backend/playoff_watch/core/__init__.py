"""
Core configuration, season utilities, and the static team table.
"""

from .season import REGULAR_SEASON_GAMES, get_current_season
from .teams import (
    ALIAS_PAIRS,
    TEAMS,
    Conference,
    Division,
    NFLTeam,
    aliases_for,
    conference_for,
    conference_groups,
    normalize_team_code,
    provider_roster,
    team_for,
    validate_team_table,
)

__all__ = [
    "REGULAR_SEASON_GAMES",
    "get_current_season",
    "ALIAS_PAIRS",
    "TEAMS",
    "Conference",
    "Division",
    "NFLTeam",
    "aliases_for",
    "conference_for",
    "conference_groups",
    "normalize_team_code",
    "provider_roster",
    "team_for",
    "validate_team_table",
]
