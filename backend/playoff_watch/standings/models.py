"""
Data models for team records, playoff status, and standings snapshots.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional


class PlayoffStatus(str, Enum):
    """A team's current playoff contention status."""
    ELIMINATED = "eliminated"
    BUBBLE = "bubble"
    ALIVE = "alive"
    CLINCHED = "clinched"
    UNKNOWN = "unknown"

    @property
    def display_text(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    PlayoffStatus.ELIMINATED: "ELIMINATED",
    PlayoffStatus.BUBBLE: "ON THE BUBBLE",
    PlayoffStatus.ALIVE: "IN CONTENTION",
    PlayoffStatus.CLINCHED: "CLINCHED",
    PlayoffStatus.UNKNOWN: "",
}


class StatusSource(str, Enum):
    """Where a refresh took its playoff statuses from."""
    AUTHORITY = "authority"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class TeamRecord:
    """A team's win/loss/tie record."""

    team_code: str
    team_name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        total = self.games_played
        if total == 0:
            return 0.0
        return self.wins / total

    @property
    def display_record(self) -> str:
        """Record display string, e.g. "10-4" or "7-7-1"."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    def with_code(self, team_code: str) -> 'TeamRecord':
        """Copy of this record filed under another code."""
        return TeamRecord(
            team_code=team_code,
            team_name=self.team_name,
            wins=self.wins,
            losses=self.losses,
            ties=self.ties
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "team_code": self.team_code,
            "team_name": self.team_name,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "record": self.display_record,
            "win_pct": self.win_percentage
        }


_RECORD_PATTERN = re.compile(r"^(\d+)-(\d+)(?:-(\d+))?$")


def parse_record(text: str, team_code: str = "", team_name: str = "") -> TeamRecord:
    """
    Parse a "W-L" or "W-L-T" string into a TeamRecord.

    Raises:
        ValueError: If the string is not a well-formed record
    """
    match = _RECORD_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(f"Malformed record string: {text!r}")

    wins, losses, ties = match.groups()
    return TeamRecord(
        team_code=team_code,
        team_name=team_name,
        wins=int(wins),
        losses=int(losses),
        ties=int(ties) if ties is not None else 0
    )


@dataclass(frozen=True)
class ContentionDetail:
    """Per-team diagnostics from the fallback contention calculation."""

    team_code: str
    seed: int
    games_remaining: int
    max_possible_wins: int
    wins_needed: int
    status: PlayoffStatus


@dataclass(frozen=True)
class StandingsEntry:
    """A team's record paired with its playoff status."""

    record: TeamRecord
    status: PlayoffStatus = PlayoffStatus.UNKNOWN


@dataclass(frozen=True)
class StandingsSnapshot:
    """
    Immutable view of every known team's record and status.

    Entries are keyed by canonical code, with alias codes mirroring their
    canonical entry. A refresh builds a new snapshot rather than mutating one.
    """

    entries: Mapping[str, StandingsEntry] = field(default_factory=dict)
    fetched_at: Optional[datetime] = None
    source: Optional[StatusSource] = None

    def __post_init__(self):
        # Freeze a private copy so callers cannot mutate a published snapshot
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @classmethod
    def empty(cls) -> 'StandingsSnapshot':
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def get(self, team_code: str) -> Optional[StandingsEntry]:
        return self.entries.get(team_code)


# Per-conference output of the contention calculator
ContentionMap = Dict[str, PlayoffStatus]
