"""
League standings as the authoritative source of playoff status.

Maps each team's clinch code and seed to a PlayoffStatus. Any failure yields
an empty map so the caller falls back to its own calculation.
"""

import logging
from typing import Any, Dict, Iterator, Optional, Tuple

from .base import StandingsProvider, ProviderError, DecodeError, AuthorityUnavailable
from ..core.teams import aliases_for, normalize_team_code
from ..standings.models import ContentionMap, PlayoffStatus


logger = logging.getLogger(__name__)

ELIMINATED_CODES = frozenset({"e"})
CLINCHED_CODES = frozenset({"x", "y", "z"})
PLAYOFF_SEEDS = 7


def status_from_flags(clinch_code: Optional[str], seed: Optional[int]) -> Optional[PlayoffStatus]:
    """
    Map one team's clinch code and seed to a status.

    Returns None when neither flag says anything, so the team is left out.
    """
    if clinch_code is not None and not isinstance(clinch_code, str):
        raise DecodeError(f"Clinch code is not text: {clinch_code!r}")
    if seed is not None and not isinstance(seed, int):
        raise DecodeError(f"Seed is not an integer: {seed!r}")

    code = (clinch_code or "").strip().lower()
    if code in ELIMINATED_CODES:
        return PlayoffStatus.ELIMINATED
    if code in CLINCHED_CODES:
        return PlayoffStatus.CLINCHED
    if seed is not None:
        return PlayoffStatus.ALIVE if seed <= PLAYOFF_SEEDS else PlayoffStatus.BUBBLE
    return None


def _iter_entries(data: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    groups = data.get("children")
    if not isinstance(groups, list):
        raise DecodeError("Standings response has no conference groups")

    for group in groups:
        if not isinstance(group, dict):
            raise DecodeError("Malformed conference group")
        standings = group.get("standings") or {}
        if not isinstance(standings, dict):
            raise DecodeError("Malformed standings block")
        entries = standings.get("entries") or []
        if not isinstance(entries, list):
            raise DecodeError("Malformed standings entries")
        for entry in entries:
            if not isinstance(entry, dict):
                raise DecodeError("Malformed standings entry")
            yield entry


def _entry_flags(entry: Dict[str, Any]) -> Tuple[str, Optional[str], Optional[int]]:
    team = entry.get("team")
    abbreviation = team.get("abbreviation") if isinstance(team, dict) else None
    if not isinstance(abbreviation, str) or not abbreviation.strip():
        raise DecodeError("Standings entry without a team abbreviation")

    stats = entry.get("stats") or []
    if not isinstance(stats, list):
        raise DecodeError(f"Malformed stats for {abbreviation}")

    clinch_code = None
    seed = None
    for stat in stats:
        if not isinstance(stat, dict):
            raise DecodeError(f"Malformed stat for {abbreviation}")
        name = stat.get("name") or stat.get("type")
        if name == "clincher":
            value = stat.get("displayValue")
            if value is not None and not isinstance(value, str):
                raise DecodeError(f"Non-text clinch code for {abbreviation}: {value!r}")
            clinch_code = value or None
        elif name == "playoffSeed":
            value = stat.get("value")
            if value is None:
                continue
            try:
                seed = int(float(value))
            except (TypeError, ValueError, OverflowError):
                raise DecodeError(f"Non-numeric seed for {abbreviation}: {value!r}")

    return abbreviation, clinch_code, seed


def parse_standings(data: Dict[str, Any]) -> ContentionMap:
    """
    Build the canonical-code -> status map from a standings payload.

    Alias codes are filled in so every spelling of a team carries the same
    status.

    Raises:
        DecodeError: If any part of the payload is malformed
    """
    statuses: ContentionMap = {}
    for entry in _iter_entries(data):
        abbreviation, clinch_code, seed = _entry_flags(entry)
        status = status_from_flags(clinch_code, seed)
        if status is None:
            continue
        statuses[normalize_team_code(abbreviation)] = status

    return sync_aliases(statuses)


def sync_aliases(statuses: ContentionMap) -> ContentionMap:
    """Copy each canonical status onto every alias of that team."""
    synced = dict(statuses)
    for code, status in statuses.items():
        for alias in aliases_for(code):
            synced[alias] = status
    return synced


class StandingsAuthority:
    """Wraps a provider's standings call into an all-or-nothing status map."""

    def __init__(self, provider: StandingsProvider):
        self.provider = provider

    async def _load(self, season: int) -> ContentionMap:
        try:
            data = await self.provider.fetch_standings(season)
            statuses = parse_standings(data)
        except ProviderError as e:
            raise AuthorityUnavailable(f"Standings for {season} unavailable: {e}")

        if not statuses:
            raise AuthorityUnavailable(f"Standings for {season} had no clinch or seed data")
        return statuses

    async def fetch_statuses(self, season: int) -> ContentionMap:
        """
        Fetch authoritative statuses for a season.

        Returns:
            Canonical and alias code -> PlayoffStatus, or an empty dict if the
            authority couldn't be used
        """
        try:
            return await self._load(season)
        except AuthorityUnavailable as e:
            logger.warning("%s; falling back to local calculation", e)
            return {}
