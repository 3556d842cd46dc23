"""Root application state."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from diet_tracker.domain.goals import Goal
from diet_tracker.domain.meals import DailyLog


@dataclass(frozen=True)
class AppState:
    """Everything that is persisted: name, goals and logs keyed by day."""

    user_first_name: str
    goals: Goal
    logs_by_day: dict[datetime, DailyLog] = field(default_factory=dict)

    def with_log(self, log: DailyLog) -> "AppState":
        """Return a copy with ``log`` stored under its date."""
        return replace(self, logs_by_day={**self.logs_by_day, log.date: log})

    def ordered_logs(self) -> list[DailyLog]:
        """Return logs in ascending date order."""
        return [self.logs_by_day[day] for day in sorted(self.logs_by_day)]
