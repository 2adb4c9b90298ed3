"""
Concurrent per-team record fetching.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .base import StandingsProvider, ProviderError
from ..standings.models import TeamRecord


logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 8


@dataclass
class FetchResult:
    """Records that came back plus the codes that didn't."""

    records: Dict[str, TeamRecord] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failed)


class RecordFetcher:
    """
    Fans out one request per team.

    Each request settles on its own: a failure only drops that team from the
    result. At most ``max_concurrency`` requests are in flight at once.
    """

    def __init__(
        self,
        provider: StandingsProvider,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.provider = provider
        self.max_concurrency = max_concurrency

    async def fetch_all(self, roster: Mapping[str, str], season: int) -> FetchResult:
        """
        Fetch every team in the roster.

        Args:
            roster: Canonical team code -> provider ID
            season: The season year

        Returns:
            FetchResult with the successful records and the failed codes
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def fetch_one(team_code: str, provider_id: str) -> Optional[TeamRecord]:
            async with semaphore:
                try:
                    return await self.provider.fetch_team_record(team_code, provider_id, season)
                except ProviderError as e:
                    logger.warning("Error fetching record for %s: %s", team_code, e)
                    return None

        codes = list(roster)
        outcomes = await asyncio.gather(
            *(fetch_one(code, roster[code]) for code in codes)
        )

        result = FetchResult()
        for code, record in zip(codes, outcomes):
            if record is None:
                result.failed.append(code)
            else:
                result.records[code] = record
        return result
