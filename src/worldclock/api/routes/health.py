"""Liveness and refresh status of the world clock service."""

from fastapi import APIRouter, Request

from worldclock.api.routes.pages import get_time_data

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(request: Request) -> dict[str, str | int | None]:
    """
    Report whether time data has been published yet.

    ``last_refresh`` stays None until the first successful refresh, and
    ``pages`` counts the pages currently served.
    """
    return {
        "status": "ok",
        "pages": len(get_time_data(request)),
        "last_refresh": getattr(request.app.state, "last_refresh", None),
    }
