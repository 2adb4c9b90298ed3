"""
Pydantic schemas for API responses.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


# ============== Standings Schemas ==============

class TeamStandingResponse(BaseModel):
    """A single team's record and playoff status."""
    team_code: str
    team_name: str
    wins: int
    losses: int
    ties: int
    record: str
    win_pct: float
    status: str
    status_label: str


class TeamRecordResponse(BaseModel):
    """Record string for a team."""
    team_code: str
    record: str


class TeamStatusResponse(BaseModel):
    """Playoff status for a team."""
    team_code: str
    status: str
    status_label: str


class StandingsResponse(BaseModel):
    """Full standings snapshot."""
    last_updated: Optional[datetime] = None
    source: Optional[str] = None
    state: str
    teams: List[TeamStandingResponse] = Field(default_factory=list)


class RefreshResponse(BaseModel):
    """Outcome of a refresh request."""
    outcome: str  # refreshed, cached, superseded
    fetched: int = 0
    failed: int = 0
    source: Optional[str] = None
    last_updated: Optional[datetime] = None
