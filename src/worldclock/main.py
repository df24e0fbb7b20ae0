"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI

from worldclock.api.routes import health, pages
from worldclock.config import settings
from worldclock.database import init_db
from worldclock.tasks.fetch_job import fetch_time_data

logger = logging.getLogger(__name__)


async def refresh_time_data(app: FastAPI) -> None:
    """Fetch the time data and publish it for the API."""
    try:
        app.state.time_data = await fetch_time_data()
    except Exception as e:
        logger.error(f"Time data refresh failed: {e}", exc_info=True)
        return
    app.state.last_refresh = datetime.now(UTC).isoformat()
    logger.info(f"Published time data for {len(app.state.time_data)} pages")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.time_data = {}
    app.state.last_refresh = None
    if settings.use_cache:
        await init_db()

    # Startup: configure and start the scheduler
    interval = settings.refresh_interval_minutes or settings.cache_ttl_minutes
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        refresh_time_data,
        trigger=IntervalTrigger(minutes=interval),
        args=[app],
        id="refresh_time_data",
        name="Refresh world clock time data",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started: time data refresh every {interval} minutes")

    # Fire a one-off startup refresh in the background
    refresh_task = asyncio.create_task(refresh_time_data(app))
    logger.info("Startup refresh triggered in background")

    yield

    # Shutdown: stop the scheduler gracefully
    refresh_task.cancel()
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")


# Create FastAPI app
app = FastAPI(
    title="World Clock API",
    description="City times and UTC offsets scraped from world clock pages",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(pages.router, prefix="/api", tags=["pages"])
