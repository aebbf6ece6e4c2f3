import calendar
import math
from datetime import date
from typing import Tuple

from core.domain import GoalConfig, GoalWindow, MonthView, window_end


def round_half_up(x: float) -> int:
    """Round .5 away from zero for positives, unlike the builtin round()."""
    return int(math.floor(x + 0.5))


def goal_window(goal: GoalConfig) -> GoalWindow:
    return GoalWindow(start=goal.start_date, end=window_end(goal.start_date, goal.period_days))


def daily_goal(goal: GoalConfig) -> int:
    if goal.period_days <= 0:
        return 0
    return round_half_up(goal.target / goal.period_days)


def month_view(year: int, month: int) -> MonthView:
    # calendar.monthrange counts weekdays from Monday = 0
    weekday, n_days = calendar.monthrange(year, month)
    return MonthView(
        year=year,
        month=month,
        days=tuple(range(1, n_days + 1)),
        first_weekday=(weekday + 1) % 7,
    )


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def previous_month(year: int, month: int) -> Tuple[int, int]:
    return shift_month(year, month, -1)


def next_month(year: int, month: int) -> Tuple[int, int]:
    return shift_month(year, month, 1)


def days_elapsed(goal: GoalConfig, today: date) -> int:
    """Days of the goal window already started, today included, within 0..period."""
    window = goal_window(goal)
    if today < window.start:
        return 0
    return min(goal.period_days, (today - window.start).days + 1)


def days_remaining(goal: GoalConfig, today: date) -> int:
    return goal.period_days - days_elapsed(goal, today)
