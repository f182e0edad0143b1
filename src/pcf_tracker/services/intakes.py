"""Daily intake aggregation service."""

import asyncio
import logging
import weakref
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from pcf_tracker.domain.errors import NotFoundError, ValidationError
from pcf_tracker.domain.foods import FoodProfile
from pcf_tracker.domain.intakes import (
    DEFAULT_QUANTITY_G,
    DailyIntake,
    DishLineItem,
    DishRequest,
    Meal,
    MealType,
)
from pcf_tracker.services.foods import FoodService

_logger = logging.getLogger(__name__)


class IntakeRepository(Protocol):
    """Persistence interface for daily intakes."""

    def get_intake(self, user_id: UUID, day: date) -> DailyIntake | None:
        """Return the stored intake for the day, if present."""

    def save_intake(self, intake: DailyIntake) -> DailyIntake:
        """Insert or replace the intake for its (user, day) key and return it."""


class DayLocks:
    """Per (user, day) locks serializing read-modify-write of an intake."""

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[tuple[UUID, date], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def for_day(self, user_id: UUID, day: date) -> asyncio.Lock:
        """Return the lock shared by every mutation of this day key."""
        key = (user_id, day)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock


@dataclass
class IntakeService:
    """Service that scales dishes and keeps day totals in sync with meals."""

    food_service: FoodService
    repository: IntakeRepository
    locks: DayLocks = field(default_factory=DayLocks)

    def get_intake(self, user_id: UUID, day: date) -> DailyIntake:
        """Return the day's intake, or an unsaved empty one."""
        intake = self.repository.get_intake(user_id, day)
        if intake is None:
            return DailyIntake.empty(user_id, day)
        return intake

    def resolve_dish(
        self,
        user_id: UUID,
        food_id: UUID,
        quantity: float | None = DEFAULT_QUANTITY_G,
    ) -> DishLineItem:
        """Scale a food's per-100g profile to the given grams."""
        food = self.food_service.get_food(user_id, food_id)
        if food is None:
            raise NotFoundError(f"Food {food_id} not found")
        grams = DEFAULT_QUANTITY_G if quantity is None else float(quantity)
        return scale_food(food, grams)

    async def add_meal(
        self,
        user_id: UUID,
        day: date,
        meal_type: MealType | str,
        dish_requests: Sequence[DishRequest],
    ) -> DailyIntake:
        """Append a meal to the day and persist recomputed totals.

        Requests naming unknown foods are dropped. The call fails only when
        nothing resolves, in which case storage is left untouched.
        """
        resolved_type = _parse_meal_type(meal_type)
        dishes = await asyncio.to_thread(
            self._resolve_dishes, user_id, dish_requests
        )
        if not dishes:
            raise ValidationError("At least one dish must reference a known food")

        async with self.locks.for_day(user_id, day):
            intake = await asyncio.to_thread(self.repository.get_intake, user_id, day)
            if intake is None:
                intake = DailyIntake.empty(user_id, day)
            meal = Meal(
                id=uuid4(),
                meal_type=resolved_type,
                dishes=dishes,
                created_at=datetime.now(tz=UTC),
            )
            saved = await asyncio.to_thread(
                self.repository.save_intake, intake.with_meals([*intake.meals, meal])
            )
        _logger.info(
            "Added meal %s (%s dishes) for user %s on %s",
            meal.id,
            len(dishes),
            user_id,
            day.isoformat(),
        )
        return saved

    async def delete_meal(self, user_id: UUID, day: date, meal_id: UUID) -> DailyIntake:
        """Remove a meal by id and persist recomputed totals.

        Deleting a meal that is not in the day leaves the meals unchanged.
        """
        async with self.locks.for_day(user_id, day):
            intake = await asyncio.to_thread(self.repository.get_intake, user_id, day)
            if intake is None:
                raise NotFoundError("Intake not found")
            remaining = [meal for meal in intake.meals if meal.id != meal_id]
            if len(remaining) == len(intake.meals):
                _logger.info("Meal %s not present on %s", meal_id, day.isoformat())
            saved = await asyncio.to_thread(
                self.repository.save_intake, intake.with_meals(remaining)
            )
        return saved

    def _resolve_dishes(
        self, user_id: UUID, dish_requests: Sequence[DishRequest]
    ) -> list[DishLineItem]:
        dishes: list[DishLineItem] = []
        for request in dish_requests:
            try:
                dishes.append(
                    self.resolve_dish(user_id, request.food_id, request.quantity)
                )
            except NotFoundError:
                _logger.info("Dropping dish with unknown food %s", request.food_id)
        return dishes


def scale_food(food: FoodProfile, quantity: float) -> DishLineItem:
    """Return a dish snapshot with nutrients scaled by ``quantity / 100``."""
    multiplier = quantity / 100
    return DishLineItem(
        name=food.name,
        quantity=quantity,
        protein=food.protein * multiplier,
        carbs=food.carbs * multiplier,
        fats=food.fats * multiplier,
        calories=food.calories * multiplier,
        food_id=food.id,
    )


def _parse_meal_type(value: MealType | str) -> MealType:
    try:
        return MealType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown meal type: {value}") from exc
