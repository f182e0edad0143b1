"""Domain models for daily intakes.

A daily intake is the single aggregate a user has for one calendar day. Its
meals embed dish snapshots whose nutrient values are already scaled to the
eaten quantity, so the day totals only ever depend on the meal list.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

DEFAULT_QUANTITY_G = 100.0


class MealType(StrEnum):
    """Meal categories a user can log."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    OTHER = "Other"


@dataclass(frozen=True)
class NutrientTotals:
    """Absolute protein, carbs, fats (grams) and calories (kcal)."""

    protein: float
    carbs: float
    fats: float
    calories: float

    @classmethod
    def zero(cls) -> "NutrientTotals":
        return cls(0.0, 0.0, 0.0, 0.0)

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
            calories=self.calories + other.calories,
        )


@dataclass(frozen=True)
class DishRequest:
    """A food reference and the grams eaten."""

    food_id: UUID
    quantity: float = DEFAULT_QUANTITY_G


@dataclass(frozen=True)
class DishLineItem:
    """Snapshot of a dish with nutrients scaled to its quantity."""

    name: str
    quantity: float
    protein: float
    carbs: float
    fats: float
    calories: float
    food_id: UUID | None = None

    @property
    def nutrients(self) -> NutrientTotals:
        return NutrientTotals(
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            calories=self.calories,
        )


@dataclass(frozen=True)
class Meal:
    """A logged meal within a day."""

    id: UUID
    meal_type: MealType
    dishes: list[DishLineItem]
    created_at: datetime

    @property
    def totals(self) -> NutrientTotals:
        return sum_dishes(self.dishes)


@dataclass(frozen=True)
class DailyIntake:
    """All meals of one user on one day, with derived totals.

    ``totals`` is computed from ``meals`` on construction and cannot be passed
    in, so a record can never carry totals that disagree with its meals.
    ``id`` is ``None`` for a day that has not been stored yet.
    """

    id: UUID | None
    user_id: UUID
    day: date
    meals: list[Meal] = field(default_factory=list)
    totals: NutrientTotals = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "totals", sum_meals(self.meals))

    @classmethod
    def empty(cls, user_id: UUID, day: date) -> "DailyIntake":
        """Return an unsaved intake with no meals."""
        return cls(id=None, user_id=user_id, day=day, meals=[])

    def with_meals(self, meals: list[Meal]) -> "DailyIntake":
        """Return a copy with the given meals and recomputed totals."""
        return DailyIntake(id=self.id, user_id=self.user_id, day=self.day, meals=meals)


def sum_dishes(dishes: list[DishLineItem]) -> NutrientTotals:
    """Return the element-wise sum of dish nutrients."""
    total = NutrientTotals.zero()
    for dish in dishes:
        total = total + dish.nutrients
    return total


def sum_meals(meals: list[Meal]) -> NutrientTotals:
    """Return the element-wise sum over every dish of every meal."""
    total = NutrientTotals.zero()
    for meal in meals:
        total = total + sum_dishes(meal.dishes)
    return total
