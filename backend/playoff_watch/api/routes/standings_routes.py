"""
Standings API routes.
"""

import asyncio
import json
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from ..schemas import (
    StandingsResponse,
    TeamStandingResponse,
    TeamRecordResponse,
    TeamStatusResponse,
    RefreshResponse
)
from ..dependencies import get_standings_service
from ...core.teams import normalize_team_code, team_for
from ...standings.models import PlayoffStatus, StandingsEntry, StandingsSnapshot
from ...standings.service import StandingsService, TotalRefreshFailure


router = APIRouter(prefix="/standings", tags=["standings"])

KEEPALIVE_SECONDS = 15.0


def _team_response(entry: StandingsEntry) -> TeamStandingResponse:
    return TeamStandingResponse(
        **entry.record.to_dict(),
        status=entry.status.value,
        status_label=entry.status.display_text
    )


def _require_team(team_code: str) -> str:
    """Normalize a path code, 404 if it isn't an NFL team."""
    if team_for(team_code) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown team code: {team_code}"
        )
    return normalize_team_code(team_code)


def _snapshot_event(snapshot: StandingsSnapshot) -> str:
    data = {
        "last_updated": snapshot.fetched_at.isoformat() if snapshot.fetched_at else None,
        "source": snapshot.source.value if snapshot.source else None,
        "statuses": {code: entry.status.value for code, entry in sorted(snapshot.entries.items())}
    }
    return f"data: {json.dumps(data)}\n\n"


@router.get("", response_model=StandingsResponse)
async def get_standings(
    service: StandingsService = Depends(get_standings_service)
) -> StandingsResponse:
    """Return the current standings snapshot, canonical codes only."""
    snapshot = service.get_snapshot()
    teams = [
        _team_response(entry)
        for code, entry in sorted(snapshot.entries.items())
        if normalize_team_code(code) == code
    ]
    return StandingsResponse(
        last_updated=snapshot.fetched_at,
        source=snapshot.source.value if snapshot.source else None,
        state=service.state.value,
        teams=teams
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_standings(
    force: bool = False,
    service: StandingsService = Depends(get_standings_service)
) -> RefreshResponse:
    """
    Refresh standings from the provider.

    A non-forced refresh is a no-op while the cached snapshot is fresh.
    """
    try:
        result = await service.refresh(force=force)
    except TotalRefreshFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Standings refresh failed: {e}"
        )

    return RefreshResponse(**result.to_dict(), last_updated=service.last_updated)


@router.get("/stream")
async def stream_standings(
    request: Request,
    service: StandingsService = Depends(get_standings_service)
):
    """
    Stream snapshot changes via Server-Sent Events (SSE).

    Sends the current snapshot first, then one event per published snapshot.
    """
    queue: asyncio.Queue = asyncio.Queue()
    unsubscribe = service.subscribe(queue.put_nowait)

    async def event_generator():
        try:
            yield _snapshot_event(service.get_snapshot())
            while True:
                try:
                    snapshot = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    if await request.is_disconnected():
                        break
                    yield ": keep-alive\n\n"
                    continue
                yield _snapshot_event(snapshot)
        finally:
            unsubscribe()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        }
    )


@router.get("/{team_code}", response_model=TeamStandingResponse)
async def get_team_standing(
    team_code: str,
    service: StandingsService = Depends(get_standings_service)
) -> TeamStandingResponse:
    """Return one team's record and playoff status."""
    code = _require_team(team_code)
    entry = service.team_entry(code)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No standings yet for {code}"
        )
    return _team_response(entry)


@router.get("/{team_code}/record", response_model=TeamRecordResponse)
async def get_team_record(
    team_code: str,
    service: StandingsService = Depends(get_standings_service)
) -> TeamRecordResponse:
    """Return a team's record string ("0-0" until fetched)."""
    code = _require_team(team_code)
    return TeamRecordResponse(team_code=code, record=service.current_record(code))


@router.get("/{team_code}/status", response_model=TeamStatusResponse)
async def get_team_status(
    team_code: str,
    service: StandingsService = Depends(get_standings_service)
) -> TeamStatusResponse:
    """Return a team's playoff status ("unknown" until fetched)."""
    code = _require_team(team_code)
    playoff_status: PlayoffStatus = service.playoff_status(code)
    return TeamStatusResponse(
        team_code=code,
        status=playoff_status.value,
        status_label=playoff_status.display_text
    )
