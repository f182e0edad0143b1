"""Supabase repository for daily intakes.

Each intake is one ``daily_intakes`` row: meals are stored as a JSON array and
the day totals as numeric columns, so meals and totals are written together.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from pcf_tracker.adapters.supabase_queries import execute
from pcf_tracker.domain.errors import PersistenceError
from pcf_tracker.domain.intakes import DailyIntake, DishLineItem, Meal, MealType
from pcf_tracker.services.intakes import IntakeRepository


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation for daily intakes."""

    client: Client

    def get_intake(self, user_id: UUID, day: date) -> DailyIntake | None:
        """Return the intake row for a user and day."""
        response = execute(
            self.client.table("daily_intakes")
            .select("id, user_id, day, meals")
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .limit(1),
            "Failed to load daily intake",
        )
        if not response.data:
            return None
        return _parse_intake(response.data[0])

    def save_intake(self, intake: DailyIntake) -> DailyIntake:
        """Upsert the intake on its unique (user_id, day) key."""
        row: dict[str, object] = {
            "user_id": str(intake.user_id),
            "day": intake.day.isoformat(),
            "meals": [_serialize_meal(meal) for meal in intake.meals],
            "total_protein": intake.totals.protein,
            "total_carbs": intake.totals.carbs,
            "total_fats": intake.totals.fats,
            "total_calories": intake.totals.calories,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        if intake.id is not None:
            row["id"] = str(intake.id)
        response = execute(
            self.client.table("daily_intakes").upsert(row, on_conflict="user_id,day"),
            "Failed to save daily intake",
        )
        if not response.data:
            raise PersistenceError("Failed to save daily intake")
        return _parse_intake(response.data[0])


def _serialize_meal(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "type": meal.meal_type.value,
        "timestamp": meal.created_at.isoformat(),
        "dishes": [
            {
                "food_id": str(dish.food_id) if dish.food_id else None,
                "name": dish.name,
                "quantity": dish.quantity,
                "protein": dish.protein,
                "carbs": dish.carbs,
                "fats": dish.fats,
                "calories": dish.calories,
            }
            for dish in meal.dishes
        ],
    }


def _parse_intake(row: dict[str, object]) -> DailyIntake:
    meals = row.get("meals") or []
    return DailyIntake(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["day"])),
        meals=[_parse_meal(meal) for meal in meals],
    )


def _parse_meal(raw: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(str(raw["id"])),
        meal_type=MealType(raw.get("type") or MealType.OTHER),
        created_at=datetime.fromisoformat(str(raw["timestamp"])),
        dishes=[_parse_dish(dish) for dish in raw.get("dishes") or []],
    )


def _parse_dish(raw: dict[str, object]) -> DishLineItem:
    food_id = raw.get("food_id")
    return DishLineItem(
        name=str(raw.get("name", "")),
        quantity=float(raw.get("quantity") or 0.0),
        protein=float(raw.get("protein") or 0.0),
        carbs=float(raw.get("carbs") or 0.0),
        fats=float(raw.get("fats") or 0.0),
        calories=float(raw.get("calories") or 0.0),
        food_id=UUID(str(food_id)) if food_id else None,
    )
