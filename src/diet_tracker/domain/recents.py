"""Recently used meals and food items."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from diet_tracker.domain.meals import DailyLog, FoodItem, Meal

RECENTS_CAPACITY = 12

T = TypeVar("T", FoodItem, Meal)


def dedupe_by_name(entries: Iterable[T], capacity: int) -> tuple[T, ...]:
    """Keep the first entry per case-insensitive name, up to ``capacity``."""
    seen: set[str] = set()
    kept: list[T] = []
    for entry in entries:
        if len(kept) >= capacity:
            break
        name = entry.name.lower()
        if name in seen:
            continue
        seen.add(name)
        kept.append(entry)
    return tuple(kept)


@dataclass(frozen=True)
class RecentsCache:
    """Most-recent-first, name-unique lists of meals and food items."""

    food_items: tuple[FoodItem, ...] = ()
    meals: tuple[Meal, ...] = ()
    capacity: int = RECENTS_CAPACITY

    def capture(self, log: DailyLog) -> "RecentsCache":
        """Return a cache with the log's meals and items placed in front."""
        return RecentsCache(
            food_items=dedupe_by_name(
                [*log.food_items(), *self.food_items], self.capacity
            ),
            meals=dedupe_by_name([*log.meals, *self.meals], self.capacity),
            capacity=self.capacity,
        )

    @classmethod
    def rebuild(
        cls, logs: Iterable[DailyLog], capacity: int = RECENTS_CAPACITY
    ) -> "RecentsCache":
        """Capture every log in ascending date order, starting from empty."""
        cache = cls(capacity=capacity)
        for log in sorted(logs, key=lambda entry: entry.date):
            cache = cache.capture(log)
        return cache
