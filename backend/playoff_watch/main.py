"""
NFL Playoff Watch - FastAPI Application

Main entry point for the web API.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import standings_router
from .core.config import (
    CORS_ORIGINS,
    STANDINGS_AUTO_REFRESH_SECONDS,
    STANDINGS_CACHE_TTL_SECONDS,
    STANDINGS_HTTP_TIMEOUT,
    STANDINGS_MAX_CONCURRENCY,
    configure_logging,
    configured_season,
)
from .providers import get_provider
from .standings.service import StandingsService, TotalRefreshFailure


logger = logging.getLogger(__name__)


def build_service() -> StandingsService:
    """Construct the single standings service from configuration."""
    return StandingsService(
        provider=get_provider("espn", timeout=STANDINGS_HTTP_TIMEOUT),
        season_resolver=configured_season,
        ttl_seconds=STANDINGS_CACHE_TTL_SECONDS,
        max_concurrency=STANDINGS_MAX_CONCURRENCY,
    )


async def auto_refresh(service: StandingsService, interval: float) -> None:
    """
    Refresh standings on a fixed interval.

    Failures are logged and retried on the next tick; the last good
    snapshot keeps being served in the meantime.
    """
    while True:
        try:
            await service.refresh()
        except TotalRefreshFailure as e:
            logger.error("Scheduled standings refresh failed: %s", e)
        except Exception:
            logger.exception("Unexpected error in scheduled standings refresh")
        await asyncio.sleep(interval)


async def stop_background(task: Optional[asyncio.Task]) -> None:
    """Cancel a background task and wait for it, logging how it ended."""
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    except Exception:
        logger.exception("Standings auto-refresh loop ended with an error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    configure_logging()
    service = build_service()
    app.state.standings_service = service

    background = None
    if STANDINGS_AUTO_REFRESH_SECONDS > 0:
        background = asyncio.create_task(auto_refresh(service, STANDINGS_AUTO_REFRESH_SECONDS))
    try:
        yield
    finally:
        # Shutdown
        try:
            await stop_background(background)
        finally:
            await service.close()


# Create FastAPI app
app = FastAPI(
    title="NFL Playoff Watch",
    description="NFL team records and playoff contention status.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(standings_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "NFL Playoff Watch API",
        "version": "1.0.0",
        "docs": "/api/docs",
        "health": "/api/health"
    }
