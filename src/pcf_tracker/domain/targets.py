"""Domain models for daily nutrient targets."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class DietType(StrEnum):
    """Display hint describing how progress against targets is judged."""

    MAINTENANCE = "maintenance"
    DEFICIT = "deficit"
    SURPLUS = "surplus"


DEFAULT_TARGETS: dict[str, object] = {
    "protein": 150.0,
    "carbs": 200.0,
    "fats": 65.0,
    "calories": 2000.0,
    "diet_type": DietType.MAINTENANCE,
}


@dataclass(frozen=True)
class TargetProfile:
    """A user's absolute daily goals."""

    user_id: UUID
    protein: float
    carbs: float
    fats: float
    calories: float
    diet_type: DietType = DietType.MAINTENANCE

    @classmethod
    def defaults(cls, user_id: UUID) -> "TargetProfile":
        return cls(user_id=user_id, **DEFAULT_TARGETS)
