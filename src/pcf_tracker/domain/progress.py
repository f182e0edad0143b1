"""Domain models for progress against targets."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from pcf_tracker.domain.intakes import NutrientTotals
from pcf_tracker.domain.targets import DietType


class ProgressStatus(StrEnum):
    """How close a nutrient is to its target for the diet type."""

    ON_TRACK = "on_track"
    NEAR = "near"
    OFF_TRACK = "off_track"
    UNSET = "unset"


@dataclass(frozen=True)
class NutrientProgress:
    """Progress of a single nutrient."""

    nutrient: str
    current: float
    target: float
    percent: float
    status: ProgressStatus


@dataclass(frozen=True)
class DayProgress:
    """Progress of all nutrients for a day."""

    day: date
    diet_type: DietType
    meal_count: int
    totals: NutrientTotals
    nutrients: list[NutrientProgress]
