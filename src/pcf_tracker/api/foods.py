"""Food catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from pcf_tracker.api.auth import require_user
from pcf_tracker.api.http_models import (
    FoodBulkRequest,
    FoodCreateRequest,
    FoodImportResponse,
    FoodResponse,
)

if TYPE_CHECKING:
    from pcf_tracker.containers import AppContainer

router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("", response_model=list[FoodResponse])
async def list_foods(
    request: Request, user_id: UUID = Depends(require_user)
) -> list[FoodResponse]:
    """Return the user's foods, newest first."""
    container: AppContainer = request.app.state.container
    foods = container.food_service.list_foods(user_id)
    return [FoodResponse.from_domain(food) for food in foods]


@router.post("", response_model=FoodResponse)
async def create_food(
    payload: FoodCreateRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> FoodResponse:
    """Create a food from per-100g values."""
    container: AppContainer = request.app.state.container
    food = container.food_service.create_food(
        user_id,
        name=payload.name,
        protein=payload.protein,
        carbs=payload.carbs,
        fats=payload.fats,
        calories=payload.calories,
    )
    return FoodResponse.from_domain(food)


@router.delete("/{food_id}")
async def delete_food(
    food_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, bool]:
    """Delete a food from the catalog."""
    container: AppContainer = request.app.state.container
    container.food_service.delete_food(user_id, food_id)
    return {"success": True}


@router.post("/bulk", response_model=FoodImportResponse)
async def bulk_import(
    payload: FoodBulkRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> FoodImportResponse:
    """Import foods from tabular rows."""
    container: AppContainer = request.app.state.container
    result = container.food_service.bulk_import(user_id, payload.rows)
    return FoodImportResponse.from_domain(result)


@router.post("/upload", response_model=FoodImportResponse)
async def upload_spreadsheet(
    request: Request,
    file: UploadFile = File(...),
    user_id: UUID = Depends(require_user),
) -> FoodImportResponse:
    """Import foods from an uploaded Excel or CSV file."""
    container: AppContainer = request.app.state.container
    max_bytes = container.settings.max_upload_bytes
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File too large",
        )
    result = container.food_service.import_spreadsheet(
        user_id, file.filename or "", content
    )
    return FoodImportResponse.from_domain(result)
