"""Daily intake endpoints."""

from __future__ import annotations

import logging
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from pcf_tracker.api.auth import require_user
from pcf_tracker.api.http_models import (
    AddMealRequest,
    DishRequestModel,
    IntakeResponse,
)
from pcf_tracker.domain.intakes import DEFAULT_QUANTITY_G, DishRequest

if TYPE_CHECKING:
    from pcf_tracker.containers import AppContainer

router = APIRouter(prefix="/api/intakes", tags=["intakes"])

_logger = logging.getLogger(__name__)


@router.get("/{day}", response_model=IntakeResponse)
async def get_intake(
    day: date, request: Request, user_id: UUID = Depends(require_user)
) -> IntakeResponse:
    """Return the day's meals and totals, empty if nothing was logged."""
    container: AppContainer = request.app.state.container
    intake = container.intake_service.get_intake(user_id, day)
    return IntakeResponse.from_domain(intake)


@router.post("", response_model=IntakeResponse)
async def add_meal(
    payload: AddMealRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> IntakeResponse:
    """Log a meal and return the updated day."""
    container: AppContainer = request.app.state.container
    intake = await container.intake_service.add_meal(
        user_id,
        payload.date,
        payload.meal_type,
        _to_dish_requests(payload.dishes),
    )
    return IntakeResponse.from_domain(intake)


@router.delete("/{day}/meals/{meal_id}", response_model=IntakeResponse)
async def delete_meal(
    day: date,
    meal_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> IntakeResponse:
    """Delete a meal and return the updated day."""
    container: AppContainer = request.app.state.container
    intake = await container.intake_service.delete_meal(user_id, day, meal_id)
    return IntakeResponse.from_domain(intake)


def _to_dish_requests(dishes: list[DishRequestModel]) -> list[DishRequest]:
    """Convert payload dishes, skipping ids that cannot name any food."""
    requests = []
    for dish in dishes:
        try:
            food_id = UUID(dish.food_id)
        except ValueError:
            _logger.info("Dropping dish with malformed food id %r", dish.food_id)
            continue
        quantity = (
            DEFAULT_QUANTITY_G if dish.quantity_grams is None else dish.quantity_grams
        )
        requests.append(DishRequest(food_id=food_id, quantity=quantity))
    return requests
