"""
FastAPI dependencies.
"""

from fastapi import HTTPException, Request, status

from ..standings.service import StandingsService


def get_standings_service(request: Request) -> StandingsService:
    """
    Resolve the service built during application startup.

    Raises:
        HTTPException: 503 if the application hasn't finished starting
    """
    service = getattr(request.app.state, "standings_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Standings service is not ready"
        )
    return service
