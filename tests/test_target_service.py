"""Tests for target service."""

from uuid import uuid4

import pytest

from pcf_tracker.domain.errors import ValidationError
from pcf_tracker.domain.targets import DietType, TargetProfile
from pcf_tracker.services.targets import TargetService
from tests.conftest import InMemoryTargetRepository


def test_get_targets_creates_defaults_once() -> None:
    repo = InMemoryTargetRepository()
    service = TargetService(repo)
    user_id = uuid4()

    first = service.get_targets(user_id)
    second = service.get_targets(user_id)

    assert first == second
    assert (first.protein, first.carbs, first.fats, first.calories) == (
        150,
        200,
        65,
        2000,
    )
    assert first.diet_type == DietType.MAINTENANCE
    assert repo.saves == 1


def test_set_targets_merges_partial_update() -> None:
    repo = InMemoryTargetRepository()
    service = TargetService(repo)
    user_id = uuid4()
    repo.targets[user_id] = TargetProfile(
        user_id=user_id, protein=120, carbs=180, fats=60, calories=1800
    )

    updated = service.set_targets(user_id, {"calories": 2200, "protein": None})

    assert updated.calories == 2200
    assert updated.protein == 120
    assert updated.carbs == 180
    assert updated.diet_type == DietType.MAINTENANCE
    assert repo.targets[user_id] == updated


def test_set_targets_without_row_overlays_defaults() -> None:
    service = TargetService(InMemoryTargetRepository())
    user_id = uuid4()

    updated = service.set_targets(user_id, {"protein": 180, "diet_type": "deficit"})

    assert updated.protein == 180
    assert updated.carbs == 200
    assert updated.calories == 2000
    assert updated.diet_type == DietType.DEFICIT


def test_set_targets_accepts_negative_values() -> None:
    service = TargetService(InMemoryTargetRepository())

    updated = service.set_targets(uuid4(), {"fats": -5})

    assert updated.fats == -5


@pytest.mark.parametrize(
    "fields",
    [
        {"diet_type": "bulking"},
        {"calories": "lots"},
        {"protein": True},
    ],
)
def test_set_targets_rejects_invalid_fields(fields) -> None:
    repo = InMemoryTargetRepository()
    service = TargetService(repo)

    with pytest.raises(ValidationError):
        service.set_targets(uuid4(), fields)

    assert repo.saves == 0
