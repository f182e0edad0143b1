"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import httpx
import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from pcf_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from pcf_tracker.adapters.supabase_intake_repository import (
    SupabaseIntakeRepository,
)
from pcf_tracker.adapters.supabase_target_repository import (
    SupabaseTargetRepository,
)
from pcf_tracker.api.app import create_app
from pcf_tracker.containers import AppContainer
from pcf_tracker.domain.errors import PersistenceError
from pcf_tracker.domain.intakes import DailyIntake, DishLineItem, Meal, MealType
from pcf_tracker.domain.targets import DietType, TargetProfile
from pcf_tracker.services.foods import FoodService
from pcf_tracker.services.intakes import IntakeService
from pcf_tracker.services.progress import ProgressService
from pcf_tracker.services.targets import TargetService


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "upsert": [], "delete": []}
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _food_row(user_id: UUID, name: str = "Rice") -> dict[str, object]:
    return {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "name": name,
        "protein": 2.7,
        "carbs": 28,
        "fats": 0.3,
        "calories": 130,
        "created_at": "2024-01-01T08:00:00+00:00",
    }


def test_supabase_food_repository_create_and_get() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("foods")
    user_id = uuid4()
    row = _food_row(user_id)
    foods_table.queue("insert", [row])
    foods_table.queue("select", [row])

    repository = SupabaseFoodRepository(client)
    created = repository.create_food(user_id, {"name": "Rice", "calories": 130.0})
    fetched = repository.get_food(user_id, created.id)

    assert foods_table.last_payload == {
        "user_id": str(user_id),
        "name": "Rice",
        "calories": 130.0,
    }
    assert fetched == created
    assert created.created_at == datetime(2024, 1, 1, 8, tzinfo=UTC)
    assert ("user_id", str(user_id)) in foods_table.last_filters
    assert ("id", str(created.id)) in foods_table.last_filters


def test_supabase_food_repository_batch_insert() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("foods")
    user_id = uuid4()
    foods_table.queue("insert", [_food_row(user_id, "Tofu"), _food_row(user_id)])

    repository = SupabaseFoodRepository(client)
    created = repository.create_foods(user_id, [{"name": "Tofu"}, {"name": "Rice"}])

    assert [food.name for food in created] == ["Tofu", "Rice"]
    assert isinstance(foods_table.last_payload, list)
    assert len(foods_table.last_payload) == 2


def test_supabase_food_repository_list_and_delete() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("foods")
    user_id = uuid4()
    row = _food_row(user_id)
    foods_table.queue("select", [row])
    foods_table.queue("delete", [row])

    repository = SupabaseFoodRepository(client)
    foods = repository.list_foods(user_id)
    deleted = repository.delete_food(user_id, foods[0].id)
    missing = repository.delete_food(user_id, uuid4())

    assert foods_table.last_order == ("created_at", True)
    assert deleted is True
    assert missing is False


def test_supabase_food_repository_raises_on_failed_insert() -> None:
    repository = SupabaseFoodRepository(FakeSupabaseClient())

    with pytest.raises(PersistenceError):
        repository.create_food(uuid4(), {"name": "Rice"})


def test_supabase_intake_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    intakes_table = client.table("daily_intakes")
    user_id = uuid4()
    food_id = uuid4()
    meal = Meal(
        id=uuid4(),
        meal_type=MealType.LUNCH,
        created_at=datetime(2024, 1, 1, 12, tzinfo=UTC),
        dishes=[
            DishLineItem(
                name="Chicken Breast",
                quantity=150,
                protein=46.5,
                carbs=0,
                fats=5.4,
                calories=247.5,
                food_id=food_id,
            )
        ],
    )
    intake = DailyIntake(id=None, user_id=user_id, day=date(2024, 1, 1), meals=[meal])

    repository = SupabaseIntakeRepository(client)
    intakes_table.queue("upsert", [])
    with pytest.raises(PersistenceError):
        repository.save_intake(intake)

    payload = intakes_table.last_payload
    assert isinstance(payload, dict)
    assert intakes_table.last_on_conflict == "user_id,day"
    assert "id" not in payload
    assert payload["day"] == "2024-01-01"
    assert payload["total_calories"] == 247.5

    stored_row = {**payload, "id": str(uuid4())}
    intakes_table.queue("upsert", [stored_row])
    intakes_table.queue("select", [stored_row])
    saved = repository.save_intake(intake)
    fetched = repository.get_intake(user_id, date(2024, 1, 1))

    assert fetched == saved
    assert fetched is not None
    assert fetched.meals == [meal]
    assert fetched.totals.protein == 46.5


def test_supabase_intake_repository_missing_day() -> None:
    repository = SupabaseIntakeRepository(FakeSupabaseClient())

    assert repository.get_intake(uuid4(), date(2024, 1, 1)) is None


def test_supabase_target_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    targets_table = client.table("targets")
    user_id = uuid4()
    row = {
        "user_id": str(user_id),
        "protein": 160,
        "carbs": 180,
        "fats": 70,
        "calories": 2100,
        "diet_type": "surplus",
    }
    targets_table.queue("upsert", [row])
    targets_table.queue("select", [row])

    repository = SupabaseTargetRepository(client)
    saved = repository.save_targets(
        TargetProfile(
            user_id=user_id,
            protein=160,
            carbs=180,
            fats=70,
            calories=2100,
            diet_type=DietType.SURPLUS,
        )
    )
    fetched = repository.get_targets(user_id)

    assert targets_table.last_on_conflict == "user_id"
    assert saved == fetched
    assert saved.diet_type == DietType.SURPLUS
    assert repository.get_targets(uuid4()) is None


@pytest.mark.parametrize(
    "error",
    [
        APIError({"message": "connection refused", "code": "08006"}),
        httpx.ConnectError("connection refused"),
    ],
)
def test_supabase_adapters_raise_persistence_error_on_client_failure(error) -> None:
    client = FakeSupabaseClient()
    for name in ("foods", "daily_intakes", "targets"):
        client.table(name).error = error
    user_id = uuid4()

    with pytest.raises(PersistenceError):
        SupabaseFoodRepository(client).list_foods(user_id)
    with pytest.raises(PersistenceError):
        SupabaseIntakeRepository(client).get_intake(user_id, date(2024, 1, 1))
    with pytest.raises(PersistenceError):
        SupabaseTargetRepository(client).save_targets(TargetProfile.defaults(user_id))


def test_storage_outage_is_reported_as_service_unavailable(
    settings, auth_headers
) -> None:
    client = FakeSupabaseClient()
    client.table("daily_intakes").error = APIError({"message": "connection refused"})
    food_service = FoodService(SupabaseFoodRepository(client))
    intake_service = IntakeService(
        food_service=food_service, repository=SupabaseIntakeRepository(client)
    )
    target_service = TargetService(SupabaseTargetRepository(client))
    container = AppContainer(
        settings=settings,
        food_service=food_service,
        intake_service=intake_service,
        target_service=target_service,
        progress_service=ProgressService(
            intake_service=intake_service, target_service=target_service
        ),
    )

    response = TestClient(create_app(container)).get(
        "/api/intakes/2024-01-01", headers=auth_headers
    )

    assert response.status_code == 503
    assert response.json() == {"error": "Failed to load daily intake"}
