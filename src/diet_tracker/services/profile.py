"""User profile and goal settings."""

from dataclasses import dataclass

from diet_tracker.domain.errors import InvalidNumbersError
from diet_tracker.domain.goals import Goal
from diet_tracker.services.foods import parse_non_negative_int
from diet_tracker.services.state_store import AppStateStore


def parse_goal_form(calories: str, protein: str, carbs: str, fat: str) -> Goal:
    """Build a goal from text fields; blank fields are unconstrained."""
    values: list[int | None] = []
    for raw in (calories, protein, carbs, fat):
        if not raw or not raw.strip():
            values.append(None)
            continue
        parsed = parse_non_negative_int(raw)
        if parsed is None:
            raise InvalidNumbersError()
        values.append(parsed)
    return Goal(
        daily_calories=values[0],
        daily_protein=values[1],
        daily_carbs=values[2],
        daily_fat=values[3],
    )


@dataclass
class ProfileService:
    """Service for the user's name and daily goals."""

    store: AppStateStore

    def get_name(self) -> str:
        """Return the user's first name."""
        return self.store.user_first_name

    def update_name(self, name: str) -> None:
        """Persist the user's first name, trimmed."""
        self.store.update_name(name.strip())

    def get_goals(self) -> Goal:
        """Return the active goal."""
        return self.store.goals

    def update_goals(self, goals: Goal) -> None:
        """Persist a new active goal."""
        self.store.update_goals(goals)

    def update_goals_from_form(
        self, calories: str, protein: str, carbs: str, fat: str
    ) -> Goal:
        """Parse the goals form and persist the result."""
        goals = parse_goal_form(calories, protein, carbs, fat)
        self.store.update_goals(goals)
        return goals
