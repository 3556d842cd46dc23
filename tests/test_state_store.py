"""Tests for the application state store."""

import threading
import time
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from diet_tracker.domain.errors import PersistenceError
from diet_tracker.domain.goals import Goal, GoalIssue, GoalStatus
from diet_tracker.domain.meals import DailyLog
from diet_tracker.domain.state import AppState
from diet_tracker.services.daily_log import DailyLogService
from diet_tracker.services.state_store import AppStateStore
from tests.conftest import (
    NOW,
    FailingStateRepository,
    FixedClock,
    InMemoryStateRepository,
    food,
    make_store,
    meal,
)


def test_seeds_example_breakfast_when_nothing_stored() -> None:
    repository = InMemoryStateRepository()

    store = make_store(repository, seed_example_data=True)

    today = store.get_or_create_log(NOW)
    assert [m.name for m in today.meals] == ["Breakfast"]
    assert [i.name for i in today.meals[0].items] == ["Eggs (2)", "Oatmeal (50g)"]
    assert today.calorie_count() == 340
    assert repository.saves
    assert [i.name for i in store.recent_food_items] == ["Eggs (2)", "Oatmeal (50g)"]


def test_seed_without_example_data_is_empty() -> None:
    repository = InMemoryStateRepository()

    store = make_store(repository)

    assert store.state.logs_by_day == {}
    assert store.user_first_name == "Alex"
    assert repository.stored is not None


def test_loads_existing_state_and_rebuilds_recents() -> None:
    day = datetime(2026, 10, 18, tzinfo=UTC)
    stored = AppState(
        user_first_name="Sam",
        goals=Goal(daily_calories=1800),
        logs_by_day={day: DailyLog(date=day, meals=(meal("Dinner", food("Soup")),))},
    )
    repository = InMemoryStateRepository(stored=stored)

    store = make_store(repository, seed_example_data=True)

    assert store.user_first_name == "Sam"
    assert store.goals == Goal(daily_calories=1800)
    assert [m.name for m in store.recent_meals] == ["Dinner"]
    assert repository.saves == []


def test_seed_survives_failed_write() -> None:
    repository = FailingStateRepository(fail=True)

    store = make_store(repository, seed_example_data=True)

    assert [m.name for m in store.get_or_create_log(NOW).meals] == ["Breakfast"]
    assert store.recent_meals[0].name == "Breakfast"
    assert repository.saves == []


def test_get_or_create_log_creates_and_persists(
    store: AppStateStore, repository: InMemoryStateRepository
) -> None:
    day = date(2026, 10, 1)

    log = store.get_or_create_log(day)

    assert log.meals == ()
    assert repository.stored is not None
    assert log.date in repository.stored.logs_by_day
    assert store.get_or_create_log(day) is log


def test_lookup_ignores_time_of_day(store: AppStateStore) -> None:
    morning = datetime(2026, 10, 19, 6, 15, tzinfo=UTC)
    evening = datetime(2026, 10, 19, 22, 40, tzinfo=UTC)

    first = store.get_or_create_log(morning)

    assert store.get_or_create_log(evening) is first
    assert len(store.state.logs_by_day) == 1


def test_save_log_overwrites_and_refreshes_recents(
    store: AppStateStore, repository: InMemoryStateRepository
) -> None:
    log = store.get_or_create_log(NOW).with_meal(meal("Lunch", food("Rice", 200)))

    store.save_log(log)

    assert store.get_or_create_log(NOW) == log
    assert repository.stored is not None
    assert repository.stored.logs_by_day[log.date] == log
    assert [m.name for m in store.recent_meals] == ["Lunch"]
    assert [i.name for i in store.recent_food_items] == ["Rice"]


def test_save_log_normalizes_date(store: AppStateStore) -> None:
    log = DailyLog(date=NOW + timedelta(hours=5))

    store.save_log(log)

    assert store.day_key(NOW) in store.state.logs_by_day


def test_update_goals_and_name_persist(
    store: AppStateStore, repository: InMemoryStateRepository
) -> None:
    store.update_goals(Goal(daily_protein=120))
    store.update_name("Robin")

    assert repository.stored is not None
    assert repository.stored.goals == Goal(daily_protein=120)
    assert repository.stored.user_first_name == "Robin"
    assert store.goals == Goal(daily_protein=120)


def test_failed_save_rolls_back_and_raises() -> None:
    repository = FailingStateRepository()
    store = make_store(repository)
    repository.fail = True

    with pytest.raises(PersistenceError):
        store.update_name("Robin")
    with pytest.raises(PersistenceError):
        store.save_log(DailyLog(date=NOW, meals=(meal("Lunch", food("Rice")),)))

    assert store.user_first_name == "Alex"
    assert store.state.logs_by_day == {}
    assert store.recent_meals == ()


def test_failed_create_returns_unsaved_empty_log() -> None:
    repository = FailingStateRepository()
    store = make_store(repository)
    repository.fail = True

    log = store.get_or_create_log(NOW)

    assert log.meals == ()
    assert store.state.logs_by_day == {}


def test_today_follows_clock() -> None:
    clock = FixedClock()
    store = make_store(clock=clock)

    clock.now = NOW + timedelta(days=1)

    assert store.today() == datetime(2026, 10, 20, tzinfo=UTC)


def test_state_snapshot_is_detached(store: AppStateStore) -> None:
    snapshot = store.state
    snapshot.logs_by_day[NOW] = DailyLog(date=NOW)

    assert store.state.logs_by_day == {}


def test_end_to_end_goal_flow(store: AppStateStore) -> None:
    service = DailyLogService(store)

    service.add_meal(meal("Breakfast", food("Eggs", 150)))
    assert service.get_today_log().total_nutrients().calories == 150

    store.update_goals(Goal(daily_calories=100))
    assert service.goal_status() == GoalStatus.needs_attention(
        [GoalIssue.over_calories(50)]
    )


@dataclass
class SlowStateRepository(InMemoryStateRepository):
    """Repository whose saves take long enough for threads to interleave."""

    delay: float = 0.01

    def save(self, state: AppState) -> None:
        time.sleep(self.delay)
        super().save(state)


def test_concurrent_meal_commands_are_serialized() -> None:
    repository = SlowStateRepository()
    store = make_store(repository)
    service = DailyLogService(store)
    service.get_today_log()

    threads = [
        threading.Thread(
            target=service.add_meal, args=(meal(f"M{index}", food(f"F{index}", 10)),)
        )
        for index in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    names = sorted(m.name for m in service.get_today_log().meals)
    assert names == [f"M{index}" for index in range(8)]
    assert service.totals().calories == 80
    assert repository.stored is not None
    assert len(repository.stored.logs_by_day[store.today()].meals) == 8


def test_update_log_without_change_does_not_write(
    store: AppStateStore, repository: InMemoryStateRepository
) -> None:
    store.get_or_create_log(NOW)
    saves = len(repository.saves)

    log = store.update_log(NOW, lambda current: current)

    assert log is store.get_or_create_log(NOW)
    assert len(repository.saves) == saves


def test_save_log_keeps_calendar_day_in_store_zone() -> None:
    new_york = ZoneInfo("America/New_York")
    store = AppStateStore(
        repository=InMemoryStateRepository(),
        tz=new_york,
        seed_example_data=False,
        clock=FixedClock(),
    )

    store.save_log(DailyLog(date=datetime(2026, 10, 19, 12, 0)))

    keys = [day.date() for day in store.state.logs_by_day]
    assert keys == [date(2026, 10, 19)]
    store.get_or_create_log(datetime(2026, 10, 19, 23, 0, tzinfo=new_york))
    assert len(store.state.logs_by_day) == 1
