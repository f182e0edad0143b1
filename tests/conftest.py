"""Shared test fixtures."""

import time
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from pcf_tracker.config import Settings
from pcf_tracker.containers import AppContainer
from pcf_tracker.domain.errors import PersistenceError
from pcf_tracker.domain.foods import FoodProfile
from pcf_tracker.domain.intakes import DailyIntake
from pcf_tracker.domain.targets import TargetProfile
from pcf_tracker.services.foods import FoodRepository, FoodService
from pcf_tracker.services.intakes import IntakeRepository, IntakeService
from pcf_tracker.services.progress import ProgressService
from pcf_tracker.services.targets import TargetRepository, TargetService

API_TOKEN = "api-token"


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: list[FoodProfile] = field(default_factory=list)
    batch_calls: int = 0

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> FoodProfile:
        food = FoodProfile(
            id=uuid4(),
            user_id=user_id,
            name=str(payload["name"]),
            protein=float(payload.get("protein", 0.0)),
            carbs=float(payload.get("carbs", 0.0)),
            fats=float(payload.get("fats", 0.0)),
            calories=float(payload.get("calories", 0.0)),
            created_at=datetime.now(tz=UTC),
        )
        self.foods.append(food)
        return food

    def create_foods(
        self, user_id: UUID, payloads: list[dict[str, object]]
    ) -> list[FoodProfile]:
        self.batch_calls += 1
        return [self.create_food(user_id, payload) for payload in payloads]

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodProfile | None:
        for food in self.foods:
            if food.id == food_id and food.user_id == user_id:
                return food
        return None

    def list_foods(self, user_id: UUID) -> list[FoodProfile]:
        return [food for food in reversed(self.foods) if food.user_id == user_id]

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        food = self.get_food(user_id, food_id)
        if food is None:
            return False
        self.foods.remove(food)
        return True


@dataclass
class InMemoryIntakeRepository(IntakeRepository):
    """In-memory intake repository keyed by (user, day) like the real table."""

    rows: dict[tuple[UUID, date], DailyIntake] = field(default_factory=dict)
    saves: int = 0
    read_delay_seconds: float = 0.0

    def get_intake(self, user_id: UUID, day: date) -> DailyIntake | None:
        row = self.rows.get((user_id, day))
        if self.read_delay_seconds:
            time.sleep(self.read_delay_seconds)
        return row

    def save_intake(self, intake: DailyIntake) -> DailyIntake:
        self.saves += 1
        key = (intake.user_id, intake.day)
        existing = self.rows.get(key)
        intake_id = existing.id if existing else intake.id or uuid4()
        stored = DailyIntake(
            id=intake_id,
            user_id=intake.user_id,
            day=intake.day,
            meals=list(intake.meals),
        )
        self.rows[key] = stored
        return stored


@dataclass
class InMemoryTargetRepository(TargetRepository):
    """In-memory target repository for tests."""

    targets: dict[UUID, TargetProfile] = field(default_factory=dict)
    saves: int = 0

    def get_targets(self, user_id: UUID) -> TargetProfile | None:
        return self.targets.get(user_id)

    def save_targets(self, targets: TargetProfile) -> TargetProfile:
        self.saves += 1
        self.targets[targets.user_id] = targets
        return targets


@dataclass
class FailingIntakeRepository(InMemoryIntakeRepository):
    """Intake repository whose writes always fail."""

    def save_intake(self, intake: DailyIntake) -> DailyIntake:
        raise PersistenceError("Failed to save daily intake")


def build_services(
    intake_repository: IntakeRepository | None = None,
) -> tuple[FoodService, IntakeService, TargetService, ProgressService]:
    food_service = FoodService(InMemoryFoodRepository())
    intake_service = IntakeService(
        food_service=food_service,
        repository=intake_repository or InMemoryIntakeRepository(),
    )
    target_service = TargetService(InMemoryTargetRepository())
    progress_service = ProgressService(
        intake_service=intake_service,
        target_service=target_service,
    )
    return food_service, intake_service, target_service, progress_service


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token=API_TOKEN,
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def auth_headers(user_id: UUID) -> dict[str, str]:
    return {"X-Api-Token": API_TOKEN, "X-User-Id": str(user_id)}


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    food_service, intake_service, target_service, progress_service = (
        build_services()
    )
    return AppContainer(
        settings=settings,
        food_service=food_service,
        intake_service=intake_service,
        target_service=target_service,
        progress_service=progress_service,
    )
