"""
Sports-data providers.

Provides a common interface for fetching team records and league standings,
plus the fan-out fetcher and the standings authority built on top of it.
"""

from .base import (
    StandingsProvider,
    ProviderError,
    TransientFetchError,
    DecodeError,
    AuthorityUnavailable
)
from .espn import ESPNProvider, parse_team_record
from .fetcher import RecordFetcher, FetchResult
from .authority import StandingsAuthority, parse_standings, status_from_flags, sync_aliases


def get_provider(name: str, timeout: float = 30.0) -> StandingsProvider:
    """
    Get the provider for a data source.

    Args:
        name: Provider name ('espn')
        timeout: HTTP request timeout in seconds

    Returns:
        Provider instance

    Raises:
        ValueError: If the provider is not supported
    """
    if name.lower() == "espn":
        return ESPNProvider(timeout=timeout)

    raise ValueError(f"Unsupported provider: {name}. Supported: espn")


__all__ = [
    "StandingsProvider",
    "ProviderError",
    "TransientFetchError",
    "DecodeError",
    "AuthorityUnavailable",
    "ESPNProvider",
    "parse_team_record",
    "RecordFetcher",
    "FetchResult",
    "StandingsAuthority",
    "parse_standings",
    "status_from_flags",
    "sync_aliases",
    "get_provider",
]
