"""Target and progress endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from pcf_tracker.api.auth import require_user
from pcf_tracker.api.http_models import (
    ProgressResponse,
    TargetsResponse,
    TargetsUpdateRequest,
)

if TYPE_CHECKING:
    from pcf_tracker.containers import AppContainer

router = APIRouter(prefix="/api", tags=["targets"])


@router.get("/targets", response_model=TargetsResponse)
async def get_targets(
    request: Request, user_id: UUID = Depends(require_user)
) -> TargetsResponse:
    """Return the user's targets, creating defaults on first access."""
    container: AppContainer = request.app.state.container
    targets = container.target_service.get_targets(user_id)
    return TargetsResponse.from_domain(targets)


@router.put("/targets", response_model=TargetsResponse)
async def set_targets(
    payload: TargetsUpdateRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> TargetsResponse:
    """Merge the supplied fields into the user's targets."""
    container: AppContainer = request.app.state.container
    targets = container.target_service.set_targets(
        user_id, payload.model_dump(exclude_none=True)
    )
    return TargetsResponse.from_domain(targets)


@router.get("/progress/{day}", response_model=ProgressResponse)
async def get_progress(
    day: date, request: Request, user_id: UUID = Depends(require_user)
) -> ProgressResponse:
    """Return the day's progress against targets."""
    container: AppContainer = request.app.state.container
    progress = container.progress_service.get_day_progress(user_id, day)
    return ProgressResponse.from_domain(progress)
