"""Supabase repository for user targets."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from pcf_tracker.adapters.supabase_queries import execute
from pcf_tracker.domain.errors import PersistenceError
from pcf_tracker.domain.targets import DietType, TargetProfile
from pcf_tracker.services.targets import TargetRepository


@dataclass
class SupabaseTargetRepository(TargetRepository):
    """Supabase implementation for user targets."""

    client: Client

    def get_targets(self, user_id: UUID) -> TargetProfile | None:
        """Return the stored targets for a user."""
        response = execute(
            self.client.table("targets")
            .select("user_id, protein, carbs, fats, calories, diet_type")
            .eq("user_id", str(user_id))
            .limit(1),
            "Failed to load targets",
        )
        if not response.data:
            return None
        return _parse_targets(response.data[0])

    def save_targets(self, targets: TargetProfile) -> TargetProfile:
        """Upsert the user's targets row."""
        response = execute(
            self.client.table("targets").upsert(
                {
                    "user_id": str(targets.user_id),
                    "protein": targets.protein,
                    "carbs": targets.carbs,
                    "fats": targets.fats,
                    "calories": targets.calories,
                    "diet_type": targets.diet_type.value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            ),
            "Failed to save targets",
        )
        if not response.data:
            raise PersistenceError("Failed to save targets")
        return _parse_targets(response.data[0])


def _parse_targets(row: dict[str, object]) -> TargetProfile:
    return TargetProfile(
        user_id=UUID(str(row["user_id"])),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fats=float(row.get("fats", 0.0)),
        calories=float(row.get("calories", 0.0)),
        diet_type=DietType(row.get("diet_type") or DietType.MAINTENANCE),
    )
