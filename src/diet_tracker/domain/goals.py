"""Goal domain models and evaluation."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from diet_tracker.domain.nutrition import Nutrients


@dataclass(frozen=True)
class Goal:
    """Daily targets. ``None`` leaves a dimension unconstrained."""

    daily_calories: int | None = None
    daily_protein: int | None = None
    daily_carbs: int | None = None
    daily_fat: int | None = None

    def __post_init__(self) -> None:
        for name in ("daily_calories", "daily_protein", "daily_carbs", "daily_fat"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative")

    @classmethod
    def none(cls) -> "Goal":
        """Return a goal with every dimension unconstrained."""
        return cls()


class GoalIssueKind(Enum):
    """Kinds of deviation, in evaluation order."""

    OVER_CALORIES = "over_calories"
    UNDER_PROTEIN = "under_protein"
    OVER_CARBS = "over_carbs"
    OVER_FAT = "over_fat"


_ISSUE_TEMPLATES = {
    GoalIssueKind.OVER_CALORIES: "Over calories by {by}",
    GoalIssueKind.UNDER_PROTEIN: "Under protein by {by}g",
    GoalIssueKind.OVER_CARBS: "Over carbs by {by}g",
    GoalIssueKind.OVER_FAT: "Over fat by {by}g",
}


@dataclass(frozen=True)
class GoalIssue:
    """A single deviation from the goal and its positive magnitude."""

    kind: GoalIssueKind
    by: int

    @classmethod
    def over_calories(cls, by: int) -> "GoalIssue":
        return cls(GoalIssueKind.OVER_CALORIES, by)

    @classmethod
    def under_protein(cls, by: int) -> "GoalIssue":
        return cls(GoalIssueKind.UNDER_PROTEIN, by)

    @classmethod
    def over_carbs(cls, by: int) -> "GoalIssue":
        return cls(GoalIssueKind.OVER_CARBS, by)

    @classmethod
    def over_fat(cls, by: int) -> "GoalIssue":
        return cls(GoalIssueKind.OVER_FAT, by)

    @property
    def description(self) -> str:
        return _ISSUE_TEMPLATES[self.kind].format(by=self.by)

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class GoalStatus:
    """Outcome of a goal evaluation: on track, or the issues needing attention."""

    issues: tuple[GoalIssue, ...] = ()

    @classmethod
    def on_track(cls) -> "GoalStatus":
        return cls()

    @classmethod
    def needs_attention(cls, issues: Iterable[GoalIssue]) -> "GoalStatus":
        return cls(tuple(issues))

    @property
    def is_on_track(self) -> bool:
        return not self.issues


class GoalEvaluable(Protocol):
    """Anything that can evaluate itself against a goal."""

    def goal_status(self, goal: Goal) -> GoalStatus:
        """Return the status of this value for ``goal``."""


def evaluate_goal(totals: Nutrients, goal: Goal) -> GoalStatus:
    """Compare totals to a goal in calories, protein, carbs, fat order.

    Calories, carbs and fat are flagged when strictly over target; protein is
    flagged when strictly under. Absent targets are skipped.
    """
    issues: list[GoalIssue] = []
    if goal.daily_calories is not None and totals.calories > goal.daily_calories:
        issues.append(GoalIssue.over_calories(totals.calories - goal.daily_calories))
    if goal.daily_protein is not None and totals.protein < goal.daily_protein:
        issues.append(GoalIssue.under_protein(goal.daily_protein - totals.protein))
    if goal.daily_carbs is not None and totals.carbs > goal.daily_carbs:
        issues.append(GoalIssue.over_carbs(totals.carbs - goal.daily_carbs))
    if goal.daily_fat is not None and totals.fat > goal.daily_fat:
        issues.append(GoalIssue.over_fat(totals.fat - goal.daily_fat))
    if not issues:
        return GoalStatus.on_track()
    return GoalStatus.needs_attention(issues)


@dataclass(frozen=True)
class GoalProgress:
    """Progress of one dimension toward its target."""

    label: str
    current: int
    target: int | None
    over_is_bad: bool = True

    @property
    def fraction(self) -> float:
        if not self.target:
            return 0.0
        return min(self.current / self.target, 1.0)

    @property
    def is_over(self) -> bool:
        return bool(self.target) and self.current > self.target

    @property
    def is_flagged(self) -> bool:
        return self.is_over and self.over_is_bad

    @property
    def is_met(self) -> bool:
        return self.target is not None and self.current >= self.target

    @property
    def remaining(self) -> int | None:
        if self.target is None:
            return None
        return self.target - self.current

    @property
    def caption(self) -> str | None:
        if self.target is None:
            return None
        if self.is_flagged:
            return f"Over by {self.current - self.target}"
        return f"{self.target - self.current} remaining"


def goal_progress(totals: Nutrients, goal: Goal) -> list[GoalProgress]:
    """Return progress rows for calories, protein, carbs and fat."""
    return [
        GoalProgress("Calories", totals.calories, goal.daily_calories),
        GoalProgress(
            "Protein (g)", totals.protein, goal.daily_protein, over_is_bad=False
        ),
        GoalProgress("Carbs (g)", totals.carbs, goal.daily_carbs),
        GoalProgress("Fat (g)", totals.fat, goal.daily_fat),
    ]
