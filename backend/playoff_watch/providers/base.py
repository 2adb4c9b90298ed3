"""
Abstract base class for standings data providers.

A provider answers two questions: what is one team's record, and what does
the league-wide standings table say about clinching and seeds.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..standings.models import TeamRecord


class StandingsProvider(ABC):
    """Abstract base class for sports-data providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'espn')."""
        pass

    @abstractmethod
    async def fetch_team_record(
        self, team_code: str, provider_id: str, season: int
    ) -> TeamRecord:
        """
        Fetch one team's season record.

        Args:
            team_code: Canonical team code the record is filed under
            provider_id: The provider's identifier for the team
            season: The season year

        Returns:
            The team's record

        Raises:
            TransientFetchError: If the request failed
            DecodeError: If the payload couldn't be understood
        """
        pass

    @abstractmethod
    async def fetch_standings(self, season: int) -> Dict[str, Any]:
        """
        Fetch the raw league-wide standings payload.

        Args:
            season: The season year

        Returns:
            Decoded JSON response

        Raises:
            TransientFetchError: If the request failed
            DecodeError: If the response wasn't JSON
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        pass


class ProviderError(Exception):
    """Base class for failures talking to a provider."""
    pass


class TransientFetchError(ProviderError):
    """Raised when a single request fails; the caller can try again later."""
    pass


class DecodeError(ProviderError):
    """Raised when a provider payload is malformed."""
    pass


class AuthorityUnavailable(ProviderError):
    """Raised when the standings authority can't produce any statuses."""
    pass
