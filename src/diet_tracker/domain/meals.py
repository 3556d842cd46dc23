"""Domain models for meal logging."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, tzinfo
from uuid import UUID, uuid4

from diet_tracker.domain.goals import Goal, GoalStatus, evaluate_goal
from diet_tracker.domain.nutrition import Nutrients, sum_nutrients

DEFAULT_MEAL_EMOJI = "🍽"


def start_of_day(value: date | datetime, tz: tzinfo | None = None) -> datetime:
    """Truncate ``value`` to local midnight.

    ``tz`` selects the calendar; ``None`` means the system local zone. Naive
    datetimes are read as wall-clock time in that calendar, aware ones are
    converted into it first. The result is always timezone-aware.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=tz) if tz else value.astimezone()
        day = value.astimezone(tz).date()
    else:
        day = value
    midnight = datetime.combine(day, time())
    if tz is None:
        return midnight.astimezone()
    return midnight.replace(tzinfo=tz)


@dataclass(frozen=True)
class FoodItem:
    """A named food with its nutrients."""

    name: str
    nutrients: Nutrients
    id: UUID = field(default_factory=uuid4)

    def total_nutrients(self) -> Nutrients:
        return self.nutrients

    def calorie_count(self) -> int:
        return self.total_nutrients().calories


@dataclass(frozen=True)
class Meal:
    """A named, emoji-tagged group of food items."""

    name: str
    items: tuple[FoodItem, ...] = ()
    emoji: str = DEFAULT_MEAL_EMOJI
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def total_nutrients(self) -> Nutrients:
        return sum_nutrients(self.items)

    def calorie_count(self) -> int:
        return self.total_nutrients().calories

    def with_item(self, item: FoodItem) -> "Meal":
        """Return a copy with ``item`` appended."""
        return replace(self, items=(*self.items, item))


@dataclass(frozen=True)
class DailyLog:
    """The meals eaten on one calendar day.

    ``date`` is normalized to start-of-day on construction and is the lookup
    key for the day. An aware ``date`` keeps its own zone, a naive one is read
    in the system local zone.
    """

    date: datetime
    meals: tuple[Meal, ...] = ()
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        zone = self.date.tzinfo if isinstance(self.date, datetime) else None
        object.__setattr__(self, "date", start_of_day(self.date, zone))
        object.__setattr__(self, "meals", tuple(self.meals))

    def total_nutrients(self) -> Nutrients:
        return sum_nutrients(self.meals)

    def calorie_count(self) -> int:
        return self.total_nutrients().calories

    def goal_status(self, goal: Goal) -> GoalStatus:
        """Evaluate this day's totals against ``goal``."""
        return evaluate_goal(self.total_nutrients(), goal)

    def food_items(self) -> list[FoodItem]:
        """Return every item of every meal, in log order."""
        return [item for meal in self.meals for item in meal.items]

    def with_meal(self, meal: Meal) -> "DailyLog":
        """Return a copy with ``meal`` appended."""
        return replace(self, meals=(*self.meals, meal))

    def without_meal(self, meal_id: UUID) -> "DailyLog":
        """Return a copy without the first meal whose id is ``meal_id``."""
        for index, meal in enumerate(self.meals):
            if meal.id == meal_id:
                return replace(
                    self, meals=self.meals[:index] + self.meals[index + 1 :]
                )
        return self
