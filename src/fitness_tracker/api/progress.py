"""Progress tracking endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Literal
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from fitness_tracker.api.auth import require_api_token
from fitness_tracker.api.schemas import ProgressCreate, ProgressUpdate  # noqa: TC001
from fitness_tracker.api.serializers import (
    serialize_charts,
    serialize_entry,
    serialize_summary,
)

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(
    prefix="/users/{user_id}/progress",
    tags=["progress"],
    dependencies=[Depends(require_api_token)],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_progress(
    user_id: UUID, payload: ProgressCreate, request: Request
) -> dict[str, object]:
    """Log a new progress entry."""
    container: AppContainer = request.app.state.container
    view = container.progress_service.log_progress(user_id, payload.to_payload())
    return {"progress": serialize_entry(view)}


@router.get("")
async def progress_history(  # noqa: PLR0913
    user_id: UUID,
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    start: datetime | None = None,
    end: datetime | None = None,
    order: Literal["asc", "desc"] = "desc",
) -> dict[str, object]:
    """Return paginated progress history."""
    container: AppContainer = request.app.state.container
    history = container.progress_service.get_history(
        user_id,
        page=page,
        limit=limit,
        start=start,
        end=end,
        descending=order == "desc",
    )
    return {
        "count": len(history.entries),
        "total": history.total,
        "page": history.page,
        "pages": history.pages,
        "entries": [serialize_entry(view) for view in history.entries],
    }


@router.get("/summary")
async def progress_summary(
    user_id: UUID, request: Request, days: int = Query(default=30, ge=1)
) -> dict[str, object]:
    """Return progress totals, trends, insights and milestones."""
    container: AppContainer = request.app.state.container
    summary = container.progress_service.get_summary(user_id, days)
    return {"summary": serialize_summary(summary)}


@router.get("/charts")
async def progress_charts(
    user_id: UUID, request: Request, days: int = Query(default=90, ge=1)
) -> dict[str, object]:
    """Return chart-ready progress series."""
    container: AppContainer = request.app.state.container
    charts = container.progress_service.get_charts(user_id, days)
    return {"charts": serialize_charts(charts)}


@router.put("/{entry_id}")
async def update_progress(
    user_id: UUID, entry_id: UUID, payload: ProgressUpdate, request: Request
) -> dict[str, object]:
    """Update a progress entry."""
    container: AppContainer = request.app.state.container
    view = container.progress_service.update_entry(
        user_id, entry_id, payload.to_payload()
    )
    return {"progress": serialize_entry(view)}


@router.delete("/{entry_id}")
async def delete_progress(
    user_id: UUID, entry_id: UUID, request: Request
) -> dict[str, str]:
    """Delete a progress entry."""
    container: AppContainer = request.app.state.container
    container.progress_service.delete_entry(user_id, entry_id)
    return {"status": "deleted"}
