"""Progress of a day's intake against the user's targets."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from pcf_tracker.domain.intakes import NutrientTotals
from pcf_tracker.domain.progress import DayProgress, NutrientProgress, ProgressStatus
from pcf_tracker.domain.targets import DietType, TargetProfile
from pcf_tracker.services.intakes import IntakeService
from pcf_tracker.services.targets import TargetService

NUTRIENTS = ("calories", "protein", "carbs", "fats")

# Percent-of-target bands.
LOWER_BAND = 90
UPPER_BAND = 110
MAINTENANCE_ON_TRACK = (95, 105)
MAINTENANCE_NEAR = (85, 115)


@dataclass
class ProgressService:
    """Service combining intake totals with targets."""

    intake_service: IntakeService
    target_service: TargetService

    def get_day_progress(self, user_id: UUID, day: date) -> DayProgress:
        """Return per-nutrient progress for the day."""
        intake = self.intake_service.get_intake(user_id, day)
        targets = self.target_service.get_targets(user_id)
        return DayProgress(
            day=day,
            diet_type=targets.diet_type,
            meal_count=len(intake.meals),
            totals=intake.totals,
            nutrients=_nutrient_progress(intake.totals, targets),
        )


def progress_status(percent: float, diet_type: DietType) -> ProgressStatus:
    """Classify a percentage of target for the diet type.

    A deficit is on track while under target, a surplus while over it, and
    maintenance while within a few percent of it.
    """
    if diet_type == DietType.DEFICIT:
        if percent < LOWER_BAND:
            return ProgressStatus.ON_TRACK
        if percent < UPPER_BAND:
            return ProgressStatus.NEAR
        return ProgressStatus.OFF_TRACK
    if diet_type == DietType.SURPLUS:
        if percent > UPPER_BAND:
            return ProgressStatus.ON_TRACK
        if percent > LOWER_BAND:
            return ProgressStatus.NEAR
        return ProgressStatus.OFF_TRACK
    if MAINTENANCE_ON_TRACK[0] < percent < MAINTENANCE_ON_TRACK[1]:
        return ProgressStatus.ON_TRACK
    if MAINTENANCE_NEAR[0] < percent < MAINTENANCE_NEAR[1]:
        return ProgressStatus.NEAR
    return ProgressStatus.OFF_TRACK


def _nutrient_progress(
    totals: NutrientTotals, targets: TargetProfile
) -> list[NutrientProgress]:
    entries = []
    for nutrient in NUTRIENTS:
        current = getattr(totals, nutrient)
        target = getattr(targets, nutrient)
        if target <= 0:
            entries.append(
                NutrientProgress(
                    nutrient=nutrient,
                    current=current,
                    target=target,
                    percent=0.0,
                    status=ProgressStatus.UNSET,
                )
            )
            continue
        percent = current / target * 100
        entries.append(
            NutrientProgress(
                nutrient=nutrient,
                current=current,
                target=target,
                percent=percent,
                status=progress_status(percent, targets.diet_type),
            )
        )
    return entries
