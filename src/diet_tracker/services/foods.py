"""Food entry: validation, presets and search."""

from dataclasses import dataclass

from diet_tracker.domain.errors import InvalidNameError, InvalidNumbersError
from diet_tracker.domain.meals import FoodItem, Meal
from diet_tracker.domain.nutrition import Nutrients
from diet_tracker.services.state_store import AppStateStore

DEFAULT_MEAL_NAME = "Meal"


def preset_foods() -> list[FoodItem]:
    """Return the built-in catalog of common foods."""
    return [
        FoodItem(
            name="Apple", nutrients=Nutrients(calories=95, protein=0, carbs=25, fat=0)
        ),
        FoodItem(
            name="Caesar Salad",
            nutrients=Nutrients(calories=320, protein=18, carbs=12, fat=22),
        ),
        FoodItem(
            name="Grilled Chicken",
            nutrients=Nutrients(calories=231, protein=43, carbs=0, fat=5),
        ),
    ]


def parse_non_negative_int(value: object) -> int | None:
    """Parse a form value as a non-negative integer, or return None.

    Strings must be plain ASCII digits: no sign, whitespace or underscores.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def build_food_item(
    name: str, calories: str, protein: str, carbs: str, fat: str
) -> FoodItem:
    """Validate raw form fields and build a food item.

    The name is checked first, then the four numbers together.
    """
    cleaned = name.strip()
    if not cleaned:
        raise InvalidNameError()
    numbers = [
        parse_non_negative_int(value) for value in (calories, protein, carbs, fat)
    ]
    if any(number is None for number in numbers):
        raise InvalidNumbersError()
    cals, prot, carb, fats = numbers
    return FoodItem(
        name=cleaned,
        nutrients=Nutrients(calories=cals, protein=prot, carbs=carb, fat=fats),
    )


def quick_meal(items: list[FoodItem], name: str | None = None) -> Meal:
    """Wrap items in a meal with the default emoji."""
    return Meal(name=name or DEFAULT_MEAL_NAME, items=tuple(items))


@dataclass
class FoodSearchService:
    """Search presets and recently used foods."""

    store: AppStateStore

    def searchable_items(self, query: str | None = None) -> list[FoodItem]:
        """Return presets then recents, filtered by a case-insensitive substring."""
        base = [*preset_foods(), *self.store.recent_food_items]
        needle = (query or "").strip().lower()
        if not needle:
            return base
        return [item for item in base if needle in item.name.lower()]

    def recent_meals(self) -> list[Meal]:
        """Return recently added meals, newest first."""
        return list(self.store.recent_meals)
