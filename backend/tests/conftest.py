"""
Shared fixtures and fakes for the test suite.
"""

import asyncio
from typing import Any, Dict, Iterable, Optional

import pytest

from playoff_watch.core.teams import TEAMS
from playoff_watch.providers.base import StandingsProvider, TransientFetchError
from playoff_watch.standings.models import TeamRecord


def make_record(code: str, wins: int, losses: int = 0, ties: int = 0) -> TeamRecord:
    """Build a record with a throwaway team name."""
    return TeamRecord(team_code=code, team_name=f"Team {code}", wins=wins, losses=losses, ties=ties)


def standings_payload(entries: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Wrap standings entries in ESPN's conference-group shape.

    Each entry dict takes ``abbreviation`` plus optional ``clincher`` and ``seed``.
    """
    built = []
    for entry in entries:
        stats = []
        if "clincher" in entry:
            stats.append({"name": "clincher", "displayValue": entry["clincher"]})
        if "seed" in entry:
            stats.append({"name": "playoffSeed", "value": float(entry["seed"])})
        built.append({"team": {"abbreviation": entry["abbreviation"]}, "stats": stats})

    return {"children": [{"abbreviation": "NFL", "standings": {"entries": built}}]}


class FakeProvider(StandingsProvider):
    """In-memory provider that records every call."""

    def __init__(
        self,
        records: Optional[Dict[str, TeamRecord]] = None,
        standings: Optional[Dict[str, Any]] = None,
        failing: Iterable[str] = (),
        standings_error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None
    ):
        self.records = dict(records or {})
        self.standings = standings
        self.failing = set(failing)
        self.standings_error = standings_error
        self.gate = gate
        self.record_calls = []
        self.standings_calls = 0
        self.seasons = []
        self.closed = False

    @property
    def provider_name(self) -> str:
        return "fake"

    async def fetch_team_record(self, team_code: str, provider_id: str, season: int) -> TeamRecord:
        self.record_calls.append(team_code)
        if self.gate is not None:
            await self.gate.wait()
        if team_code in self.failing or team_code not in self.records:
            raise TransientFetchError(f"boom: {team_code}")
        return self.records[team_code]

    async def fetch_standings(self, season: int) -> Dict[str, Any]:
        self.standings_calls += 1
        self.seasons.append(season)
        if self.standings_error is not None:
            raise self.standings_error
        if self.standings is None:
            raise TransientFetchError("no standings")
        return self.standings

    @property
    def total_calls(self) -> int:
        return len(self.record_calls) + self.standings_calls

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def league_records() -> Dict[str, TeamRecord]:
    """A full league of records, wins descending through the table order."""
    records = {}
    for index, team in enumerate(TEAMS):
        wins = 12 - (index % 16) // 2
        records[team.code] = make_record(team.code, wins, 14 - wins)
    return records
