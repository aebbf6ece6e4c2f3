from collections import Counter
from datetime import date
from typing import Dict, Iterable

from core.aggregation import daily_totals
from core.domain import DayStatus, GoalConfig, GoalWindow, Transaction
from core.period import daily_goal, goal_window, month_view


def classify_day(
    day: date,
    window: GoalWindow,
    today: date,
    spent: float,
    goal_per_day: float,
) -> str:
    # the goal window gates everything: past days before it are inactive, not good
    if not window.contains(day):
        return DayStatus.INACTIVE
    if day > today:
        return DayStatus.FUTURE
    if spent > goal_per_day:
        return DayStatus.EXCEEDED
    return DayStatus.GOOD


def month_activity(
    trans: Iterable[Transaction],
    goal: GoalConfig,
    today: date,
    year: int,
    month: int,
) -> Dict[int, str]:
    """Status of every day of the displayed month, keyed by day of month."""
    window = goal_window(goal)
    limit = daily_goal(goal)
    spent = daily_totals(trans, today, year, month)
    return {
        d: classify_day(date(year, month, d), window, today, spent.get(d, 0.0), limit)
        for d in month_view(year, month).days
    }


def activity_counts(activity: Dict[int, str]) -> Dict[str, int]:
    counts = Counter(activity.values())
    return {status: counts.get(status, 0) for status in DayStatus.ALL}
