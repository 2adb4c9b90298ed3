"""
NFL standings and playoff contention.

The orchestrator lives in ``playoff_watch.standings.service``.
"""

from .models import (
    PlayoffStatus,
    StatusSource,
    TeamRecord,
    ContentionDetail,
    StandingsEntry,
    StandingsSnapshot,
    ContentionMap,
    parse_record
)
from .calculator import (
    calculate_contention,
    calculate_conference_contention,
    calculate_conference_details,
    rank_conference
)
from .cache import StandingsCache

__all__ = [
    # Models
    "PlayoffStatus",
    "StatusSource",
    "TeamRecord",
    "ContentionDetail",
    "StandingsEntry",
    "StandingsSnapshot",
    "ContentionMap",
    "parse_record",
    # Calculator
    "calculate_contention",
    "calculate_conference_contention",
    "calculate_conference_details",
    "rank_conference",
    # Cache
    "StandingsCache",
]
