"""
ESPN standings provider.

Fetches per-team records and the league standings table from ESPN's public
site API. No authentication is required.
"""

import httpx
from typing import Any, Dict, Optional

from .base import StandingsProvider, TransientFetchError, DecodeError
from ..standings.models import TeamRecord


class ESPNProvider(StandingsProvider):
    """ESPN site API provider for NFL team records and standings."""

    TEAM_URL = "https://site.api.espn.com/apis/site/v2/sports/football/nfl/teams/{team_id}"
    STANDINGS_URL = "https://site.api.espn.com/apis/v2/sports/football/nfl/standings"

    def __init__(
        self,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the ESPN provider.

        Args:
            timeout: HTTP request timeout in seconds
            client: Optional shared client; one is created per request if omitted
        """
        self.timeout = timeout
        self._client = client

    @property
    def provider_name(self) -> str:
        return "espn"

    async def _fetch_json(self, url: str, params: Dict[str, Any]) -> Any:
        """
        Fetch JSON data from the ESPN API.

        Raises:
            TransientFetchError: On network errors or non-success responses
            DecodeError: If the body isn't valid JSON
        """
        if self._client is not None:
            return await self._get(self._client, url, params)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._get(client, url, params)

    async def _get(self, client: httpx.AsyncClient, url: str, params: Dict[str, Any]) -> Any:
        try:
            response = await client.get(url, params=params)

            if response.status_code == 404:
                raise TransientFetchError(f"Resource not found: {url}")

            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            raise TransientFetchError(f"ESPN API error: {e}")
        except httpx.RequestError as e:
            raise TransientFetchError(f"Network error: {e}")

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {url}: {e}")

    async def fetch_team_record(
        self, team_code: str, provider_id: str, season: int
    ) -> TeamRecord:
        """Fetch one team's record from the team endpoint."""
        url = self.TEAM_URL.format(team_id=provider_id)
        data = await self._fetch_json(url, {"enable": "record", "season": season})
        return parse_team_record(data, team_code)

    async def fetch_standings(self, season: int) -> Dict[str, Any]:
        """Fetch the raw standings table for a season."""
        data = await self._fetch_json(self.STANDINGS_URL, {"season": season})
        if not isinstance(data, dict):
            raise DecodeError("Standings response is not an object")
        return data

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()


def parse_team_record(data: Any, team_code: str) -> TeamRecord:
    """
    Build a TeamRecord from an ESPN team response.

    Uses the "total" record item; missing stats count as zero.

    Raises:
        DecodeError: If the payload has no team or no total record
    """
    if not isinstance(data, dict) or not isinstance(data.get("team"), dict):
        raise DecodeError(f"No team in response for {team_code}")

    team = data["team"]
    record = team.get("record") or {}
    items = record.get("items") if isinstance(record, dict) else None
    if not isinstance(items, list):
        items = []

    total = next(
        (item for item in items if isinstance(item, dict) and item.get("type") == "total"),
        None
    )
    if total is None:
        raise DecodeError(f"No total record found for {team_code}")

    stats = total.get("stats") or []
    if not isinstance(stats, list):
        raise DecodeError(f"Malformed record stats for {team_code}")

    counts = {"wins": 0, "losses": 0, "ties": 0}
    for stat in stats:
        if not isinstance(stat, dict):
            raise DecodeError(f"Malformed record stat for {team_code}")
        name = str(stat.get("name", "")).lower()
        if name not in counts:
            continue
        try:
            counts[name] = int(float(stat.get("value", 0)))
        except (TypeError, ValueError, OverflowError):
            raise DecodeError(f"Non-numeric {name} for {team_code}: {stat.get('value')!r}")

    team_name = next(
        (name for name in (team.get("displayName"), team.get("name")) if isinstance(name, str) and name),
        team_code
    )

    return TeamRecord(
        team_code=team_code,
        team_name=team_name,
        wins=counts["wins"],
        losses=counts["losses"],
        ties=counts["ties"]
    )
