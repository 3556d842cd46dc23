"""Application state store: owns the in-memory state and its persistence."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, tzinfo
from typing import Protocol

from diet_tracker.domain.errors import PersistenceError
from diet_tracker.domain.goals import Goal
from diet_tracker.domain.meals import DailyLog, FoodItem, Meal, start_of_day
from diet_tracker.domain.nutrition import Nutrients
from diet_tracker.domain.recents import RECENTS_CAPACITY, RecentsCache
from diet_tracker.domain.state import AppState

logger = logging.getLogger(__name__)


class StateRepository(Protocol):
    """Persistence interface for the whole application state."""

    def load(self) -> AppState | None:
        """Return the stored state, or None when absent or unreadable."""

    def save(self, state: AppState) -> None:
        """Replace the stored state. Raises PersistenceError on failure."""


def _now() -> datetime:
    return datetime.now(tz=UTC)


def example_log(day: datetime) -> DailyLog:
    """Return the example breakfast written on first run."""
    eggs = FoodItem(
        name="Eggs (2)", nutrients=Nutrients(calories=150, protein=12, carbs=1, fat=10)
    )
    oats = FoodItem(
        name="Oatmeal (50g)",
        nutrients=Nutrients(calories=190, protein=7, carbs=33, fat=3),
    )
    breakfast = Meal(name="Breakfast", emoji="🍳", items=(eggs, oats))
    return DailyLog(date=day, meals=(breakfast,))


@dataclass
class AppStateStore:
    """Single owner of the application state.

    Every public operation runs under one lock and persists before returning.
    A mutation is committed to memory only after the repository accepted it,
    so a failed save leaves the previous state in place and raises
    PersistenceError.
    """

    repository: StateRepository
    defaults: AppState = field(
        default_factory=lambda: AppState(user_first_name="", goals=Goal.none())
    )
    tz: tzinfo | None = None
    recents_capacity: int = RECENTS_CAPACITY
    seed_example_data: bool = True
    clock: Callable[[], datetime] = _now
    _state: AppState = field(init=False, repr=False)
    _recents: RecentsCache = field(init=False, repr=False)
    _lock: threading.RLock = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._lock = threading.RLock()
        loaded = self.repository.load()
        if loaded is None:
            self._state = self._seed()
        else:
            self._state = self._normalize(loaded)
        self._recents = RecentsCache.rebuild(
            self._state.logs_by_day.values(), capacity=self.recents_capacity
        )

    @property
    def user_first_name(self) -> str:
        return self._state.user_first_name

    @property
    def goals(self) -> Goal:
        return self._state.goals

    @property
    def state(self) -> AppState:
        """Return a snapshot of the current state."""
        with self._lock:
            return replace(self._state, logs_by_day=dict(self._state.logs_by_day))

    @property
    def recent_food_items(self) -> tuple[FoodItem, ...]:
        return self._recents.food_items

    @property
    def recent_meals(self) -> tuple[Meal, ...]:
        return self._recents.meals

    def today(self) -> datetime:
        """Return the lookup key for the current day."""
        return self.day_key(self.clock())

    def day_key(self, day: date | datetime) -> datetime:
        """Normalize ``day`` to the start-of-day key used by the store."""
        return start_of_day(day, self.tz)

    def get_or_create_log(self, day: date | datetime) -> DailyLog:
        """Return the log for ``day``, creating and persisting an empty one."""
        key = self.day_key(day)
        with self._lock:
            existing = self._state.logs_by_day.get(key)
            if existing is not None:
                return existing
            created = DailyLog(date=key)
            try:
                self._commit(self._state.with_log(created))
            except PersistenceError:
                logger.warning("Returning unsaved empty log for %s", key.date())
            return created

    def update_log(
        self, day: date | datetime, change: Callable[[DailyLog], DailyLog]
    ) -> DailyLog:
        """Apply ``change`` to the day's log and persist, as one locked step.

        When ``change`` returns the log unchanged nothing is written.
        """
        with self._lock:
            log = self.get_or_create_log(day)
            updated = change(log)
            if updated is log:
                return log
            self.save_log(updated)
            return self._state.logs_by_day[self.day_key(updated.date.date())]

    def save_log(self, log: DailyLog) -> None:
        """Store ``log`` under its calendar day, refresh recents and persist."""
        key = self.day_key(log.date.date())
        if key != log.date:
            log = replace(log, date=key)
        with self._lock:
            self._commit(
                self._state.with_log(log), recents=self._recents.capture(log)
            )

    def update_goals(self, goals: Goal) -> None:
        """Replace the active goal and persist."""
        with self._lock:
            self._commit(replace(self._state, goals=goals))

    def update_name(self, name: str) -> None:
        """Replace the user's first name and persist."""
        with self._lock:
            self._commit(replace(self._state, user_first_name=name))

    def _commit(self, state: AppState, recents: RecentsCache | None = None) -> None:
        try:
            self.repository.save(state)
        except PersistenceError:
            logger.warning("Save failed; keeping the last persisted state")
            raise
        self._state = state
        if recents is not None:
            self._recents = recents

    def _seed(self) -> AppState:
        state = replace(self.defaults, logs_by_day={})
        if self.seed_example_data:
            state = state.with_log(example_log(self.today()))
        logger.info("Seeding new state (example data: %s)", self.seed_example_data)
        try:
            self.repository.save(state)
        except PersistenceError:
            logger.exception("Could not persist seeded state")
        return state

    def _normalize(self, state: AppState) -> AppState:
        logs: dict[datetime, DailyLog] = {}
        for log in state.logs_by_day.values():
            key = self.day_key(log.date.date())
            logs[key] = log if key == log.date else replace(log, date=key)
        return replace(state, logs_by_day=logs)
