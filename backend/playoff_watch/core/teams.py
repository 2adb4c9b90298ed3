"""
Static NFL team table: canonical codes, provider IDs, conferences and aliases.

Canonical codes are the keys used everywhere else in the package. Provider IDs
are ESPN's numeric team identifiers. Alias pairs are declared explicitly so
that both spellings of a franchise resolve to the same canonical code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


class Conference(str, Enum):
    """NFL conferences."""
    AFC = "AFC"
    NFC = "NFC"


class Division(str, Enum):
    """NFL divisions within a conference."""
    EAST = "East"
    NORTH = "North"
    SOUTH = "South"
    WEST = "West"


@dataclass(frozen=True)
class NFLTeam:
    """A franchise entry in the static team table."""

    code: str
    provider_id: str
    name: str
    conference: Conference
    division: Division


TEAMS_PER_CONFERENCE = 16

TEAMS: Tuple[NFLTeam, ...] = (
    # AFC East
    NFLTeam("BUF", "2", "Buffalo Bills", Conference.AFC, Division.EAST),
    NFLTeam("MIA", "15", "Miami Dolphins", Conference.AFC, Division.EAST),
    NFLTeam("NE", "17", "New England Patriots", Conference.AFC, Division.EAST),
    NFLTeam("NYJ", "20", "New York Jets", Conference.AFC, Division.EAST),
    # AFC North
    NFLTeam("BAL", "33", "Baltimore Ravens", Conference.AFC, Division.NORTH),
    NFLTeam("CIN", "4", "Cincinnati Bengals", Conference.AFC, Division.NORTH),
    NFLTeam("CLE", "5", "Cleveland Browns", Conference.AFC, Division.NORTH),
    NFLTeam("PIT", "23", "Pittsburgh Steelers", Conference.AFC, Division.NORTH),
    # AFC South
    NFLTeam("HOU", "34", "Houston Texans", Conference.AFC, Division.SOUTH),
    NFLTeam("IND", "11", "Indianapolis Colts", Conference.AFC, Division.SOUTH),
    NFLTeam("JAX", "30", "Jacksonville Jaguars", Conference.AFC, Division.SOUTH),
    NFLTeam("TEN", "10", "Tennessee Titans", Conference.AFC, Division.SOUTH),
    # AFC West
    NFLTeam("DEN", "7", "Denver Broncos", Conference.AFC, Division.WEST),
    NFLTeam("KC", "12", "Kansas City Chiefs", Conference.AFC, Division.WEST),
    NFLTeam("LV", "13", "Las Vegas Raiders", Conference.AFC, Division.WEST),
    NFLTeam("LAC", "24", "Los Angeles Chargers", Conference.AFC, Division.WEST),
    # NFC East
    NFLTeam("DAL", "6", "Dallas Cowboys", Conference.NFC, Division.EAST),
    NFLTeam("NYG", "19", "New York Giants", Conference.NFC, Division.EAST),
    NFLTeam("PHI", "21", "Philadelphia Eagles", Conference.NFC, Division.EAST),
    NFLTeam("WAS", "28", "Washington Commanders", Conference.NFC, Division.EAST),
    # NFC North
    NFLTeam("CHI", "3", "Chicago Bears", Conference.NFC, Division.NORTH),
    NFLTeam("DET", "8", "Detroit Lions", Conference.NFC, Division.NORTH),
    NFLTeam("GB", "9", "Green Bay Packers", Conference.NFC, Division.NORTH),
    NFLTeam("MIN", "16", "Minnesota Vikings", Conference.NFC, Division.NORTH),
    # NFC South
    NFLTeam("ATL", "1", "Atlanta Falcons", Conference.NFC, Division.SOUTH),
    NFLTeam("CAR", "29", "Carolina Panthers", Conference.NFC, Division.SOUTH),
    NFLTeam("NO", "18", "New Orleans Saints", Conference.NFC, Division.SOUTH),
    NFLTeam("TB", "27", "Tampa Bay Buccaneers", Conference.NFC, Division.SOUTH),
    # NFC West
    NFLTeam("ARI", "22", "Arizona Cardinals", Conference.NFC, Division.WEST),
    NFLTeam("LAR", "14", "Los Angeles Rams", Conference.NFC, Division.WEST),
    NFLTeam("SEA", "26", "Seattle Seahawks", Conference.NFC, Division.WEST),
    NFLTeam("SF", "25", "San Francisco 49ers", Conference.NFC, Division.WEST),
)

# (canonical, alias)
ALIAS_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("WAS", "WSH"),  # ESPN spelling
    ("JAX", "JAC"),
    ("LV", "LVR"),
    ("LV", "OAK"),   # relocated
    ("LAC", "SD"),   # relocated
    ("LAR", "LA"),
    ("LAR", "STL"),  # relocated
    ("NE", "NEP"),
)


def validate_team_table(
    teams: Tuple[NFLTeam, ...] = TEAMS,
    alias_pairs: Tuple[Tuple[str, str], ...] = ALIAS_PAIRS
) -> None:
    """
    Check the static table for internal consistency.

    Raises:
        ValueError: If codes or provider IDs repeat, an alias collides with a
            canonical code or points at an unknown team, or the conferences
            do not split the league into two disjoint groups of 16.
    """
    codes = [team.code for team in teams]
    if len(set(codes)) != len(codes):
        raise ValueError("Duplicate canonical team code in team table")

    provider_ids = [team.provider_id for team in teams]
    if len(set(provider_ids)) != len(provider_ids):
        raise ValueError("Duplicate provider ID in team table")

    known = set(codes)
    seen_aliases = set()
    for canonical, alias in alias_pairs:
        if canonical not in known:
            raise ValueError(f"Alias {alias} points at unknown team {canonical}")
        if alias in known:
            raise ValueError(f"Alias {alias} collides with a canonical code")
        if alias in seen_aliases:
            raise ValueError(f"Alias {alias} declared more than once")
        seen_aliases.add(alias)

    groups: Dict[Conference, List[str]] = {conference: [] for conference in Conference}
    for team in teams:
        groups[team.conference].append(team.code)
    sizes = {len(members) for members in groups.values()}
    covered = set().union(*groups.values())
    if sizes != {TEAMS_PER_CONFERENCE} or covered != known:
        raise ValueError(
            f"Conferences must partition the league into two groups of {TEAMS_PER_CONFERENCE}"
        )


validate_team_table()

_TEAMS_BY_CODE: Dict[str, NFLTeam] = {team.code: team for team in TEAMS}
_CANONICAL_BY_ALIAS: Dict[str, str] = {alias: canonical for canonical, alias in ALIAS_PAIRS}


def normalize_team_code(code: Optional[str]) -> Optional[str]:
    """
    Normalize a team code to its canonical form.

    Unknown codes are returned upper-cased so callers can still look them up.
    """
    if code is None:
        return None
    cleaned = code.strip().upper()
    if not cleaned:
        return None
    return _CANONICAL_BY_ALIAS.get(cleaned, cleaned)


def aliases_for(code: str) -> List[str]:
    """Return the canonical code followed by every declared alias for it."""
    canonical = normalize_team_code(code) or code.upper()
    return [canonical] + [alias for canon, alias in ALIAS_PAIRS if canon == canonical]


def team_for(code: str) -> Optional[NFLTeam]:
    """Look up a team by any of its codes."""
    canonical = normalize_team_code(code)
    if canonical is None:
        return None
    return _TEAMS_BY_CODE.get(canonical)


def conference_for(code: str) -> Optional[Conference]:
    team = team_for(code)
    return team.conference if team else None


def conference_groups() -> Dict[Conference, FrozenSet[str]]:
    """Partition all canonical codes by conference."""
    return {
        conference: frozenset(team.code for team in TEAMS if team.conference == conference)
        for conference in Conference
    }


def provider_roster() -> Dict[str, str]:
    """Map each canonical code to its provider ID."""
    return {team.code: team.provider_id for team in TEAMS}
