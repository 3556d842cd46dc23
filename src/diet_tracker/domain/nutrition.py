"""Nutrition domain models."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Nutrients:
    """Immutable calories and macronutrients (kcal and grams)."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0

    def __post_init__(self) -> None:
        for name in ("calories", "protein", "carbs", "fat"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")

    def __add__(self, other: "Nutrients") -> "Nutrients":
        if not isinstance(other, Nutrients):
            return NotImplemented
        return add(self, other)

    @classmethod
    def zero(cls) -> "Nutrients":
        """Return the additive identity."""
        return ZERO


ZERO = Nutrients(calories=0, protein=0, carbs=0, fat=0)


def add(a: Nutrients, b: Nutrients) -> Nutrients:
    """Field-wise sum of two nutrient values."""
    return Nutrients(
        calories=a.calories + b.calories,
        protein=a.protein + b.protein,
        carbs=a.carbs + b.carbs,
        fat=a.fat + b.fat,
    )


def sum_nutrients(parts: Iterable["Aggregatable"]) -> Nutrients:
    """Fold the totals of ``parts`` left to right, starting from zero."""
    total = ZERO
    for part in parts:
        total = add(total, part.total_nutrients())
    return total


class Aggregatable(Protocol):
    """Anything that can report calories and macronutrients."""

    def total_nutrients(self) -> Nutrients:
        """Return the summed nutrients."""

    def calorie_count(self) -> int:
        """Return calories derived from ``total_nutrients``."""
