"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from pcf_tracker.adapters.supabase_queries import execute
from pcf_tracker.domain.errors import PersistenceError
from pcf_tracker.domain.foods import FoodProfile
from pcf_tracker.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for user foods."""

    client: Client

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> FoodProfile:
        """Create a food row and return it."""
        response = execute(
            self.client.table("foods").insert({"user_id": str(user_id), **payload}),
            "Failed to create food item",
        )
        if not response.data:
            raise PersistenceError("Failed to create food item")
        return _parse_food(response.data[0])

    def create_foods(
        self, user_id: UUID, payloads: list[dict[str, object]]
    ) -> list[FoodProfile]:
        """Insert several food rows with a single request."""
        response = execute(
            self.client.table("foods").insert(
                [{"user_id": str(user_id), **payload} for payload in payloads]
            ),
            "Failed to import food items",
        )
        if not response.data:
            raise PersistenceError("Failed to import food items")
        return [_parse_food(row) for row in response.data]

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodProfile | None:
        """Return a food owned by the user, if present."""
        response = execute(
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "Failed to load food item",
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_foods(self, user_id: UUID) -> list[FoodProfile]:
        """Return the user's foods, newest first."""
        response = execute(
            self.client.table("foods")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True),
            "Failed to list food items",
        )
        return [_parse_food(row) for row in response.data or []]

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete a food owned by the user."""
        response = execute(
            self.client.table("foods")
            .delete()
            .eq("id", str(food_id))
            .eq("user_id", str(user_id)),
            "Failed to delete food item",
        )
        return bool(response.data)


def _parse_food(row: dict[str, object]) -> FoodProfile:
    """Parse a food row into a domain model."""
    created_raw = row.get("created_at")
    return FoodProfile(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fats=float(row.get("fats") or 0.0),
        calories=float(row.get("calories") or 0.0),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
