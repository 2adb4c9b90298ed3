"""
Standings orchestration: refresh, reconcile, and publish snapshots.

One StandingsService is built at startup and handed to whoever needs it.
A refresh fans out per-team record fetches alongside one authority call,
waits for all of them to settle, picks authority or fallback statuses, and
commits a brand new snapshot in a single step.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, Mapping, Optional

from ..core.season import REGULAR_SEASON_GAMES, get_current_season
from ..core.teams import ALIAS_PAIRS, normalize_team_code, provider_roster
from ..providers.authority import StandingsAuthority
from ..providers.base import StandingsProvider
from ..providers.fetcher import RecordFetcher, DEFAULT_MAX_CONCURRENCY
from .cache import StandingsCache, SnapshotListener, DEFAULT_TTL_SECONDS
from .calculator import calculate_contention
from .models import (
    ContentionMap,
    PlayoffStatus,
    StandingsEntry,
    StandingsSnapshot,
    StatusSource,
    TeamRecord
)


logger = logging.getLogger(__name__)

DEFAULT_RECORD = "0-0"


class TotalRefreshFailure(Exception):
    """Raised when a refresh obtained no team records at all."""
    pass


class ServiceState(str, Enum):
    """Orchestrator lifecycle."""
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshOutcome(str, Enum):
    """How a refresh call ended."""
    REFRESHED = "refreshed"
    CACHED = "cached"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class RefreshResult:
    """Summary of one refresh call."""

    outcome: RefreshOutcome
    fetched: int = 0
    failed: int = 0
    source: Optional[StatusSource] = None

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "fetched": self.fetched,
            "failed": self.failed,
            "source": self.source.value if self.source else None
        }


def reconcile_aliases(entries: Mapping[str, StandingsEntry]) -> Dict[str, StandingsEntry]:
    """
    Mirror each canonical entry onto its declared alias codes.

    Aliases always take the canonical entry, so both spellings of a team
    carry the same record and status.
    """
    reconciled = {
        code: entry for code, entry in entries.items()
        if normalize_team_code(code) == code
    }
    for canonical, alias in ALIAS_PAIRS:
        entry = reconciled.get(canonical)
        if entry is not None:
            reconciled[alias] = StandingsEntry(
                record=entry.record.with_code(alias),
                status=entry.status
            )
    return reconciled


class StandingsService:
    """
    Orchestrates standings refreshes and answers record/status lookups.

    Starting a refresh cancels any refresh already in flight; only the latest
    one may publish. Readers always see a complete snapshot.
    """

    def __init__(
        self,
        provider: StandingsProvider,
        roster: Optional[Mapping[str, str]] = None,
        season: Optional[int] = None,
        season_resolver: Callable[[], int] = get_current_season,
        cache: Optional[StandingsCache] = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        season_games: int = REGULAR_SEASON_GAMES,
        status_calculator: Callable[[Mapping[str, TeamRecord], int], ContentionMap] = calculate_contention
    ):
        """
        Initialize the service.

        Args:
            provider: Source of team records and standings
            roster: Canonical code -> provider ID, defaults to the full team table
            season: Season to fetch; if omitted it is resolved on every refresh
            season_resolver: Returns the current season when none is pinned
            cache: Snapshot cache, built from ttl_seconds if omitted
            ttl_seconds: Freshness window for the default cache
            max_concurrency: Upper bound on in-flight record requests
            season_games: Regular season length for the fallback calculation
            status_calculator: Fallback strategy used when the authority is empty
        """
        self.provider = provider
        self.roster = dict(roster) if roster is not None else provider_roster()
        self._season = season
        self._resolve_season = season_resolver
        self.cache = cache if cache is not None else StandingsCache(ttl_seconds=ttl_seconds)
        self.season_games = season_games
        self.fetcher = RecordFetcher(provider, max_concurrency=max_concurrency)
        self.authority = StandingsAuthority(provider)
        self._calculate = status_calculator
        self._inflight: Optional[asyncio.Task] = None

    # ---- reads ----

    @property
    def state(self) -> ServiceState:
        if self._inflight is not None and not self._inflight.done():
            return ServiceState.REFRESHING
        return ServiceState.IDLE

    @property
    def season(self) -> int:
        """The pinned season, or whatever season is current right now."""
        if self._season is not None:
            return self._season
        return self._resolve_season()

    @property
    def last_updated(self) -> Optional[datetime]:
        return self.cache.snapshot.fetched_at

    def get_snapshot(self) -> StandingsSnapshot:
        return self.cache.snapshot

    def team_entry(self, team_code: str) -> Optional[StandingsEntry]:
        code = normalize_team_code(team_code)
        if code is None:
            return None
        return self.cache.snapshot.get(code)

    def full_record(self, team_code: str) -> Optional[TeamRecord]:
        entry = self.team_entry(team_code)
        return entry.record if entry else None

    def current_record(self, team_code: str) -> str:
        """Record string for a team, "0-0" if it isn't known yet."""
        entry = self.team_entry(team_code)
        return entry.record.display_record if entry else DEFAULT_RECORD

    def playoff_status(self, team_code: str) -> PlayoffStatus:
        entry = self.team_entry(team_code)
        return entry.status if entry else PlayoffStatus.UNKNOWN

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Be told about every newly published snapshot."""
        return self.cache.subscribe(listener)

    # ---- refresh ----

    async def refresh(self, force: bool = False) -> RefreshResult:
        """
        Refresh standings unless the cached snapshot is still fresh.

        Args:
            force: Skip the freshness check

        Returns:
            RefreshResult describing what happened

        Raises:
            TotalRefreshFailure: If no team record could be fetched; the
                published snapshot is left as it was
        """
        if not force and self.cache.is_fresh():
            logger.debug("Using cached standings")
            return RefreshResult(outcome=RefreshOutcome.CACHED)

        previous = self._inflight
        if previous is not None and not previous.done():
            logger.info("Cancelling in-flight standings refresh")
            previous.cancel()

        task = asyncio.ensure_future(self._run_refresh())
        self._inflight = task

        try:
            return await task
        except asyncio.CancelledError:
            # A newer refresh replaced this one; the caller itself wasn't cancelled
            if task is not self._inflight:
                return RefreshResult(outcome=RefreshOutcome.SUPERSEDED)
            raise

    async def _run_refresh(self) -> RefreshResult:
        season = self.season
        logger.info("Fetching standings for %s teams (season %s)", len(self.roster), season)

        fetched, authority_statuses = await asyncio.gather(
            self.fetcher.fetch_all(self.roster, season),
            self.authority.fetch_statuses(season)
        )

        # Only the latest refresh may publish or report failure
        if asyncio.current_task() is not self._inflight:
            return RefreshResult(outcome=RefreshOutcome.SUPERSEDED)

        if not fetched.records:
            logger.error(
                "Standings refresh failed for all %s teams; keeping last snapshot",
                len(self.roster)
            )
            raise TotalRefreshFailure(
                f"No team records fetched ({fetched.failure_count} failures)"
            )

        if authority_statuses:
            source = StatusSource.AUTHORITY
            statuses = authority_statuses
        else:
            source = StatusSource.FALLBACK
            statuses = self._calculate(fetched.records, self.season_games)

        snapshot = self._build_snapshot(fetched.records, statuses, source)
        self.cache.commit(snapshot)
        logger.info(
            "Published standings: %s fetched, %s failed, statuses from %s",
            len(fetched.records), fetched.failure_count, source.value
        )

        return RefreshResult(
            outcome=RefreshOutcome.REFRESHED,
            fetched=len(fetched.records),
            failed=fetched.failure_count,
            source=source
        )

    def _build_snapshot(
        self,
        records: Mapping[str, TeamRecord],
        statuses: ContentionMap,
        source: StatusSource
    ) -> StandingsSnapshot:
        entries: Dict[str, StandingsEntry] = {}

        # Teams that failed this cycle keep their last known entry
        for code, entry in self.cache.snapshot.entries.items():
            if normalize_team_code(code) != code or code in records:
                continue
            status = statuses.get(code, entry.status) if source == StatusSource.AUTHORITY else entry.status
            entries[code] = StandingsEntry(record=entry.record, status=status)

        for code, record in records.items():
            entries[code] = StandingsEntry(
                record=record,
                status=statuses.get(code, PlayoffStatus.UNKNOWN)
            )

        return StandingsSnapshot(
            entries=reconcile_aliases(entries),
            fetched_at=datetime.now(timezone.utc),
            source=source
        )

    async def close(self) -> None:
        """Cancel any in-flight refresh and release the provider."""
        task = self._inflight
        self._inflight = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except (asyncio.CancelledError, TotalRefreshFailure):
                pass
        await self.provider.close()
