"""Dependency container wiring for the application."""

from dataclasses import dataclass

from diet_tracker.adapters.json_state_repository import JsonStateRepository
from diet_tracker.config import Settings
from diet_tracker.domain.state import AppState
from diet_tracker.services.daily_log import DailyLogService
from diet_tracker.services.foods import FoodSearchService
from diet_tracker.services.profile import ProfileService
from diet_tracker.services.state_store import AppStateStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: AppStateStore
    daily_log_service: DailyLogService
    food_search_service: FoodSearchService
    profile_service: ProfileService


def build_store(settings: Settings) -> AppStateStore:
    """Load (or seed) the state store described by ``settings``."""
    zone = settings.zone()
    return AppStateStore(
        repository=JsonStateRepository(settings.state_file, tz=zone),
        defaults=AppState(
            user_first_name=settings.default_user_first_name,
            goals=settings.default_goal(),
        ),
        tz=zone,
        recents_capacity=settings.recents_capacity,
        seed_example_data=settings.seed_example_data,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = build_store(resolved_settings)
    return AppContainer(
        settings=resolved_settings,
        store=store,
        daily_log_service=DailyLogService(store),
        food_search_service=FoodSearchService(store),
        profile_service=ProfileService(store),
    )
