"""Pydantic models for HTTP payloads.

JSON keys are camelCase to match the web client.
"""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pcf_tracker.domain.foods import FoodImportResult, FoodProfile
from pcf_tracker.domain.intakes import (
    DEFAULT_QUANTITY_G,
    DailyIntake,
    DishLineItem,
    Meal,
    MealType,
    NutrientTotals,
)
from pcf_tracker.domain.progress import DayProgress, NutrientProgress, ProgressStatus
from pcf_tracker.domain.targets import DietType, TargetProfile


class ApiModel(BaseModel):
    """Base model using camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FoodCreateRequest(ApiModel):
    """Manual food entry; nutrient values are per 100 g and parsed leniently."""

    name: str | None = None
    protein: Any = None
    carbs: Any = None
    fats: Any = None
    calories: Any = None


class FoodBulkRequest(ApiModel):
    """Rows of a tabular food dataset."""

    rows: list[dict[str, Any]] = Field(default_factory=list)


class DishRequestModel(ApiModel):
    """A dish reference within a meal request."""

    food_id: str
    quantity_grams: float | None = DEFAULT_QUANTITY_G


class AddMealRequest(ApiModel):
    """Payload for logging a meal on a day."""

    date: date
    meal_type: MealType
    dishes: list[DishRequestModel] = Field(default_factory=list)


class TargetsUpdateRequest(ApiModel):
    """Partial or full target update."""

    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    calories: float | None = None
    diet_type: DietType | None = None


class FoodResponse(ApiModel):
    """Food catalog entry."""

    id: UUID
    name: str
    protein: float
    carbs: float
    fats: float
    calories: float
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, food: FoodProfile) -> "FoodResponse":
        return cls(
            id=food.id,
            name=food.name,
            protein=food.protein,
            carbs=food.carbs,
            fats=food.fats,
            calories=food.calories,
            created_at=food.created_at,
        )


class FoodImportResponse(ApiModel):
    """Outcome of a bulk import."""

    created_count: int
    items: list[FoodResponse]

    @classmethod
    def from_domain(cls, result: FoodImportResult) -> "FoodImportResponse":
        return cls(
            created_count=result.created_count,
            items=[FoodResponse.from_domain(food) for food in result.items],
        )


class TotalsResponse(ApiModel):
    """Nutrient totals."""

    protein: float
    carbs: float
    fats: float
    calories: float

    @classmethod
    def from_domain(cls, totals: NutrientTotals) -> "TotalsResponse":
        return cls(
            protein=totals.protein,
            carbs=totals.carbs,
            fats=totals.fats,
            calories=totals.calories,
        )


class DishResponse(ApiModel):
    """Scaled dish snapshot."""

    food_id: UUID | None
    name: str
    quantity: float
    protein: float
    carbs: float
    fats: float
    calories: float

    @classmethod
    def from_domain(cls, dish: DishLineItem) -> "DishResponse":
        return cls(
            food_id=dish.food_id,
            name=dish.name,
            quantity=dish.quantity,
            protein=dish.protein,
            carbs=dish.carbs,
            fats=dish.fats,
            calories=dish.calories,
        )


class MealResponse(ApiModel):
    """Logged meal."""

    id: UUID
    meal_type: MealType
    created_at: datetime
    dishes: list[DishResponse]
    totals: TotalsResponse

    @classmethod
    def from_domain(cls, meal: Meal) -> "MealResponse":
        return cls(
            id=meal.id,
            meal_type=meal.meal_type,
            created_at=meal.created_at,
            dishes=[DishResponse.from_domain(dish) for dish in meal.dishes],
            totals=TotalsResponse.from_domain(meal.totals),
        )


class IntakeResponse(ApiModel):
    """A day's meals and totals."""

    id: UUID | None
    date: date
    meals: list[MealResponse]
    totals: TotalsResponse

    @classmethod
    def from_domain(cls, intake: DailyIntake) -> "IntakeResponse":
        return cls(
            id=intake.id,
            date=intake.day,
            meals=[MealResponse.from_domain(meal) for meal in intake.meals],
            totals=TotalsResponse.from_domain(intake.totals),
        )


class TargetsResponse(ApiModel):
    """A user's daily targets."""

    protein: float
    carbs: float
    fats: float
    calories: float
    diet_type: DietType

    @classmethod
    def from_domain(cls, targets: TargetProfile) -> "TargetsResponse":
        return cls(
            protein=targets.protein,
            carbs=targets.carbs,
            fats=targets.fats,
            calories=targets.calories,
            diet_type=targets.diet_type,
        )


class NutrientProgressResponse(ApiModel):
    """Progress of one nutrient."""

    nutrient: str
    current: float
    target: float
    percent: float
    status: ProgressStatus

    @classmethod
    def from_domain(cls, entry: NutrientProgress) -> "NutrientProgressResponse":
        return cls(
            nutrient=entry.nutrient,
            current=entry.current,
            target=entry.target,
            percent=entry.percent,
            status=entry.status,
        )


class ProgressResponse(ApiModel):
    """Progress of a day against targets."""

    date: date
    diet_type: DietType
    meal_count: int
    totals: TotalsResponse
    nutrients: list[NutrientProgressResponse]

    @classmethod
    def from_domain(cls, progress: DayProgress) -> "ProgressResponse":
        return cls(
            date=progress.day,
            diet_type=progress.diet_type,
            meal_count=progress.meal_count,
            totals=TotalsResponse.from_domain(progress.totals),
            nutrients=[
                NutrientProgressResponse.from_domain(entry)
                for entry in progress.nutrients
            ],
        )
