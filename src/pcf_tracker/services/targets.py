"""Daily target service."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from pcf_tracker.domain.errors import ValidationError
from pcf_tracker.domain.targets import DietType, TargetProfile

TARGET_FIELDS = ("protein", "carbs", "fats", "calories", "diet_type")


class TargetRepository(Protocol):
    """Persistence interface for user targets."""

    def get_targets(self, user_id: UUID) -> TargetProfile | None:
        """Return the user's targets, if stored."""

    def save_targets(self, targets: TargetProfile) -> TargetProfile:
        """Insert or replace the user's targets and return them."""


@dataclass
class TargetService:
    """Service for reading and updating daily targets."""

    repository: TargetRepository

    def get_targets(self, user_id: UUID) -> TargetProfile:
        """Return the user's targets, storing the defaults on first read."""
        existing = self.repository.get_targets(user_id)
        if existing is not None:
            return existing
        return self.repository.save_targets(TargetProfile.defaults(user_id))

    def set_targets(
        self, user_id: UUID, fields: Mapping[str, object]
    ) -> TargetProfile:
        """Merge the given fields into the user's targets.

        Fields left out keep their stored value, or the default when the user
        has no targets yet.
        """
        current = self.repository.get_targets(user_id) or TargetProfile.defaults(
            user_id
        )
        changes = _parse_fields(fields)
        return self.repository.save_targets(replace(current, **changes))


def _parse_fields(fields: Mapping[str, object]) -> dict[str, object]:
    changes: dict[str, object] = {}
    for name in TARGET_FIELDS:
        value = fields.get(name)
        if value is None:
            continue
        if name == "diet_type":
            try:
                changes[name] = DietType(value)
            except ValueError as exc:
                raise ValidationError(f"Unknown diet type: {value}") from exc
            continue
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ValidationError(f"Target {name} must be a number")
        changes[name] = float(value)
    return changes
