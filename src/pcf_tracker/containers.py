"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from pcf_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from pcf_tracker.adapters.supabase_intake_repository import (
    SupabaseIntakeRepository,
)
from pcf_tracker.adapters.supabase_target_repository import (
    SupabaseTargetRepository,
)
from pcf_tracker.config import Settings
from pcf_tracker.services.foods import FoodService
from pcf_tracker.services.intakes import IntakeService
from pcf_tracker.services.progress import ProgressService
from pcf_tracker.services.targets import TargetService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    intake_service: IntakeService
    target_service: TargetService
    progress_service: ProgressService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_service = FoodService(SupabaseFoodRepository(supabase_client))
    intake_service = IntakeService(
        food_service=food_service,
        repository=SupabaseIntakeRepository(supabase_client),
    )
    target_service = TargetService(SupabaseTargetRepository(supabase_client))
    progress_service = ProgressService(
        intake_service=intake_service,
        target_service=target_service,
    )

    return AppContainer(
        settings=resolved_settings,
        food_service=food_service,
        intake_service=intake_service,
        target_service=target_service,
        progress_service=progress_service,
    )
