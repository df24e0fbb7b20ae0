"""World clock page and city endpoints (read-only)."""

from fastapi import APIRouter, HTTPException, Query, Request

from worldclock.schemas.city import CityRecordSchema, PageSnapshotResponse
from worldclock.scrapers.models import PageSnapshot, SortMode, merge_snapshots

router = APIRouter()


def get_time_data(request: Request) -> dict[str, PageSnapshot]:
    """Latest dataset published by the refresh job; empty until the first run."""
    return getattr(request.app.state, "time_data", None) or {}


@router.get("/pages", response_model=list[PageSnapshotResponse])
async def get_pages(request: Request) -> list[PageSnapshotResponse]:
    """List every page with its cities, ordered by page name."""
    time_data = get_time_data(request)
    return [
        PageSnapshotResponse.from_snapshot(name, time_data[name]) for name in sorted(time_data)
    ]


@router.get("/pages/{name}", response_model=PageSnapshotResponse)
async def get_page(name: str, request: Request) -> PageSnapshotResponse:
    """Get one page by its catalog name."""
    snapshot = get_time_data(request).get(name)
    if snapshot is None:
        raise HTTPException(status_code=404, detail=f"Page '{name}' not found")
    return PageSnapshotResponse.from_snapshot(name, snapshot)


@router.get("/cities", response_model=list[CityRecordSchema])
async def get_cities(
    request: Request,
    sort: SortMode = Query(default=SortMode.BY_NAME, description="Order by 'name' or 'offset'"),
) -> list[CityRecordSchema]:
    """
    Get the cities of all pages merged into one list.

    A city listed on several pages appears once.
    """
    time_data = get_time_data(request)
    merged = merge_snapshots((time_data[name] for name in sorted(time_data)), sort)
    return [CityRecordSchema.from_record(r) for r in merged]
