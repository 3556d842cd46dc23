"""Pydantic models for the persisted state document."""

import logging
from datetime import datetime, tzinfo
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from diet_tracker.domain.goals import Goal
from diet_tracker.domain.meals import DailyLog, FoodItem, Meal, start_of_day
from diet_tracker.domain.nutrition import Nutrients
from diet_tracker.domain.state import AppState

logger = logging.getLogger(__name__)


class NutrientsDocument(BaseModel):
    """Nutrients payload."""

    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)


class FoodItemDocument(BaseModel):
    """Food item payload."""

    id: UUID
    name: str
    nutrients: NutrientsDocument


class MealDocument(BaseModel):
    """Meal payload."""

    id: UUID
    name: str
    emoji: str
    items: list[FoodItemDocument] = Field(default_factory=list)


class DailyLogDocument(BaseModel):
    """Daily log payload. The enclosing map key is the authoritative date."""

    id: UUID
    date: str
    meals: list[MealDocument] = Field(default_factory=list)


class GoalDocument(BaseModel):
    """Goal payload; null leaves a dimension unconstrained."""

    model_config = ConfigDict(populate_by_name=True)

    daily_calories: int | None = Field(default=None, ge=0, alias="dailyCalories")
    daily_protein: int | None = Field(default=None, ge=0, alias="dailyProtein")
    daily_carbs: int | None = Field(default=None, ge=0, alias="dailyCarbs")
    daily_fat: int | None = Field(default=None, ge=0, alias="dailyFat")


class StateDocument(BaseModel):
    """Top-level persisted document."""

    model_config = ConfigDict(populate_by_name=True)

    user_first_name: str = Field(alias="userFirstName")
    goals: GoalDocument
    logs: dict[str, DailyLogDocument] = Field(default_factory=dict)


def state_to_document(state: AppState) -> StateDocument:
    """Convert the domain state into its document form."""
    goals = state.goals
    return StateDocument(
        user_first_name=state.user_first_name,
        goals=GoalDocument(
            daily_calories=goals.daily_calories,
            daily_protein=goals.daily_protein,
            daily_carbs=goals.daily_carbs,
            daily_fat=goals.daily_fat,
        ),
        logs={
            day.isoformat(): _log_to_document(log)
            for day, log in state.logs_by_day.items()
        },
    )


def document_to_state(document: StateDocument, tz: tzinfo | None = None) -> AppState:
    """Convert a document into domain state, dropping unparsable log keys."""
    goals = document.goals
    logs: dict[datetime, DailyLog] = {}
    for raw_key, payload in document.logs.items():
        try:
            parsed = datetime.fromisoformat(raw_key)
        except ValueError:
            logger.warning("Dropping log with unparsable date key %r", raw_key)
            continue
        key = start_of_day(parsed, tz)
        logs[key] = DailyLog(
            id=payload.id,
            date=key,
            meals=tuple(_meal_from_document(meal) for meal in payload.meals),
        )
    return AppState(
        user_first_name=document.user_first_name,
        goals=Goal(
            daily_calories=goals.daily_calories,
            daily_protein=goals.daily_protein,
            daily_carbs=goals.daily_carbs,
            daily_fat=goals.daily_fat,
        ),
        logs_by_day=logs,
    )


def _log_to_document(log: DailyLog) -> DailyLogDocument:
    return DailyLogDocument(
        id=log.id,
        date=log.date.isoformat(),
        meals=[
            MealDocument(
                id=meal.id,
                name=meal.name,
                emoji=meal.emoji,
                items=[
                    FoodItemDocument(
                        id=item.id,
                        name=item.name,
                        nutrients=NutrientsDocument(
                            calories=item.nutrients.calories,
                            protein=item.nutrients.protein,
                            carbs=item.nutrients.carbs,
                            fat=item.nutrients.fat,
                        ),
                    )
                    for item in meal.items
                ],
            )
            for meal in log.meals
        ],
    )


def _meal_from_document(payload: MealDocument) -> Meal:
    return Meal(
        id=payload.id,
        name=payload.name,
        emoji=payload.emoji,
        items=tuple(
            FoodItem(
                id=item.id,
                name=item.name,
                nutrients=Nutrients(
                    calories=item.nutrients.calories,
                    protein=item.nutrients.protein,
                    carbs=item.nutrients.carbs,
                    fat=item.nutrients.fat,
                ),
            )
            for item in payload.items
        ),
    )
