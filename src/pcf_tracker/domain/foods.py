"""Domain models for the user food catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodProfile:
    """A food with nutrient amounts per 100 grams."""

    id: UUID
    user_id: UUID
    name: str
    protein: float
    carbs: float
    fats: float
    calories: float
    created_at: datetime | None = None


@dataclass(frozen=True)
class FoodImportResult:
    """Outcome of a bulk food import."""

    created_count: int
    items: list[FoodProfile]
