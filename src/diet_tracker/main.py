"""Console summary of today's log."""

from diet_tracker.app_logging import configure_logging
from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer, build_container
from diet_tracker.domain.goals import GoalProgress, GoalStatus
from diet_tracker.domain.meals import DailyLog


def format_today(name: str, log: DailyLog) -> str:
    """Format the greeting, totals and meals for a log."""
    totals = log.total_nutrients()
    lines = [
        f"Good morning, {name}!",
        f"Today: {totals.calories} kcal, "
        f"{totals.protein}P / {totals.carbs}C / {totals.fat}F",
    ]
    if log.meals:
        lines.append("Meals:")
        for meal in log.meals:
            lines.append(f"- {meal.emoji} {meal.name}: {meal.calorie_count()} kcal")
            for item in meal.items:
                lines.append(f"    {item.name}: {item.calorie_count()} kcal")
    else:
        lines.append("No meals logged yet.")
    return "\n".join(lines)


def format_progress(rows: list[GoalProgress]) -> str:
    """Format progress rows, one per dimension."""
    lines = []
    for row in rows:
        if row.target is None:
            lines.append(f"{row.label}: {row.current}")
        else:
            lines.append(f"{row.label}: {row.current} / {row.target} ({row.caption})")
    return "\n".join(lines)


def format_status(status: GoalStatus) -> str:
    """Format a goal status."""
    if status.is_on_track:
        return "Status: on track"
    issues = "; ".join(issue.description for issue in status.issues)
    return f"Status: needs attention ({issues})"


def render(container: AppContainer) -> str:
    """Render the full console summary."""
    service = container.daily_log_service
    log = service.get_today_log()
    return "\n".join(
        [
            "Diet Tracker",
            format_today(container.profile_service.get_name(), log),
            format_progress(service.goal_progress()),
            format_status(service.goal_status()),
        ]
    )


def main() -> None:
    """Print today's summary."""
    settings = Settings()
    configure_logging(settings.log_level)
    print(render(build_container(settings)))


if __name__ == "__main__":
    main()
