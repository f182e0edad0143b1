"""Services for managing the user food catalog."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pcf_tracker.domain.errors import NotFoundError, ValidationError
from pcf_tracker.domain.foods import FoodImportResult, FoodProfile
from pcf_tracker.services.food_import import normalize_rows, read_spreadsheet

NUTRIENT_FIELDS = ("protein", "carbs", "fats", "calories")

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> FoodProfile:
        """Create a food and return it."""

    def create_foods(
        self, user_id: UUID, payloads: list[dict[str, object]]
    ) -> list[FoodProfile]:
        """Create several foods in one batch and return them."""

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodProfile | None:
        """Return a food owned by the user, if present."""

    def list_foods(self, user_id: UUID) -> list[FoodProfile]:
        """Return the user's foods, newest first."""

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete a food owned by the user and report whether it existed."""


@dataclass
class FoodService:
    """Application service for food catalog operations."""

    repository: FoodRepository

    def create_food(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: object,
        protein: object = None,
        carbs: object = None,
        fats: object = None,
        calories: object = None,
    ) -> FoodProfile:
        """Create a food from per-100g values, coercing bad numbers to 0."""
        payload = build_food_payload(
            {
                "name": name,
                "protein": protein,
                "carbs": carbs,
                "fats": fats,
                "calories": calories,
            }
        )
        if not payload["name"]:
            raise ValidationError("Food name is required")
        return self.repository.create_food(user_id, payload)

    def list_foods(self, user_id: UUID) -> list[FoodProfile]:
        """Return the user's foods, most recently created first."""
        return self.repository.list_foods(user_id)

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodProfile | None:
        """Return a food if it belongs to the user."""
        return self.repository.get_food(user_id, food_id)

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a food; meals already logged keep their snapshots."""
        if not self.repository.delete_food(user_id, food_id):
            raise NotFoundError("Food item not found")

    def bulk_import(
        self, user_id: UUID, rows: Iterable[Mapping[str, object]]
    ) -> FoodImportResult:
        """Insert every named row as a new food in one batch."""
        payloads = [build_food_payload(row) for row in normalize_rows(rows)]
        payloads = [payload for payload in payloads if payload["name"]]
        if not payloads:
            return FoodImportResult(created_count=0, items=[])
        created = self.repository.create_foods(user_id, payloads)
        _logger.info("Imported %s foods for user %s", len(created), user_id)
        return FoodImportResult(created_count=len(created), items=created)

    def import_spreadsheet(
        self, user_id: UUID, filename: str, content: bytes
    ) -> FoodImportResult:
        """Import foods from the first sheet of an uploaded spreadsheet."""
        return self.bulk_import(user_id, read_spreadsheet(filename, content))


def build_food_payload(values: Mapping[str, object]) -> dict[str, object]:
    """Return a storable food payload with a trimmed name and float nutrients."""
    raw_name = values.get("name")
    payload: dict[str, object] = {
        "name": "" if raw_name is None else str(raw_name).strip()
    }
    for field_name in NUTRIENT_FIELDS:
        payload[field_name] = to_float(values.get(field_name))
    return payload


def to_float(value: object) -> float:
    """Parse a nutrient amount leniently.

    Anything that is not a finite, non-negative number becomes 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(parsed) or parsed < 0:
        return 0.0
    return parsed
