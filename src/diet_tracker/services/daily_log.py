"""Daily log commands and derived views."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from diet_tracker.domain.goals import GoalProgress, GoalStatus, goal_progress
from diet_tracker.domain.meals import DailyLog, FoodItem, Meal
from diet_tracker.domain.nutrition import Nutrients
from diet_tracker.services.foods import quick_meal
from diet_tracker.services.state_store import AppStateStore


@dataclass
class DailyLogService:
    """Service that adds and removes meals on a day's log."""

    store: AppStateStore

    def get_today_log(self) -> DailyLog:
        """Return today's log, creating it if needed."""
        return self.store.get_or_create_log(self.store.today())

    def get_log(self, day: date | datetime | None = None) -> DailyLog:
        """Return the log for ``day`` (today when omitted)."""
        if day is None:
            return self.get_today_log()
        return self.store.get_or_create_log(day)

    def add_meal(self, meal: Meal, day: date | datetime | None = None) -> DailyLog:
        """Append a meal to the day's log and persist."""
        return self.store.update_log(
            self._day(day), lambda log: log.with_meal(meal)
        )

    def add_food_as_meal(
        self, item: FoodItem, day: date | datetime | None = None
    ) -> DailyLog:
        """Log a single food as its own meal, named after the food."""
        return self.add_meal(quick_meal([item], name=item.name), day)

    def remove_meal(
        self, meal_id: UUID, day: date | datetime | None = None
    ) -> DailyLog:
        """Remove a meal by id; unknown ids leave the log untouched."""
        return self.store.update_log(
            self._day(day), lambda log: log.without_meal(meal_id)
        )

    def totals(self, day: date | datetime | None = None) -> Nutrients:
        """Return the day's summed nutrients."""
        return self.get_log(day).total_nutrients()

    def goal_status(self, day: date | datetime | None = None) -> GoalStatus:
        """Evaluate the day's log against the active goal."""
        return self.get_log(day).goal_status(self.store.goals)

    def goal_progress(self, day: date | datetime | None = None) -> list[GoalProgress]:
        """Return per-dimension progress rows for the day."""
        return goal_progress(self.totals(day), self.store.goals)

    def _day(self, day: date | datetime | None) -> date | datetime:
        return self.store.today() if day is None else day
