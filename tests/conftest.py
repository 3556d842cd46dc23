"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer, build_container
from diet_tracker.domain.errors import PersistenceError
from diet_tracker.domain.goals import Goal
from diet_tracker.domain.meals import FoodItem, Meal
from diet_tracker.domain.nutrition import Nutrients
from diet_tracker.domain.state import AppState
from diet_tracker.services.state_store import AppStateStore, StateRepository

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=UTC)


@dataclass
class InMemoryStateRepository(StateRepository):
    """In-memory state repository for tests."""

    stored: AppState | None = None
    saves: list[AppState] = field(default_factory=list)

    def load(self) -> AppState | None:
        return self.stored

    def save(self, state: AppState) -> None:
        self.stored = state
        self.saves.append(state)


@dataclass
class FailingStateRepository(InMemoryStateRepository):
    """Repository whose saves fail while ``fail`` is set."""

    fail: bool = False

    def save(self, state: AppState) -> None:
        if self.fail:
            raise PersistenceError("disk full")
        super().save(state)


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now


def food(
    name: str, calories: int = 0, protein: int = 0, carbs: int = 0, fat: int = 0
) -> FoodItem:
    return FoodItem(
        name=name,
        nutrients=Nutrients(calories=calories, protein=protein, carbs=carbs, fat=fat),
    )


def meal(name: str, *items: FoodItem) -> Meal:
    return Meal(name=name, items=items)


def make_store(
    repository: StateRepository | None = None,
    seed_example_data: bool = False,
    clock: FixedClock | None = None,
    goals: Goal | None = None,
) -> AppStateStore:
    return AppStateStore(
        repository=repository or InMemoryStateRepository(),
        defaults=AppState(user_first_name="Alex", goals=goals or Goal.none()),
        tz=UTC,
        seed_example_data=seed_example_data,
        clock=clock or FixedClock(),
    )


@pytest.fixture
def repository() -> InMemoryStateRepository:
    return InMemoryStateRepository()


@pytest.fixture
def store(repository: InMemoryStateRepository) -> AppStateStore:
    return make_store(repository)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(state_file=tmp_path / "state.json", timezone=None)


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)
