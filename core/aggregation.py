"""Fold a transaction list into the figures the pages display.

Every function here is pure: the same transactions, goal and ``today`` always
give the same result. Magnitudes are taken with ``abs`` per kind, so a record
stored with the "wrong" sign still counts on the side its kind says.
"""
from collections import defaultdict
from datetime import date
from functools import reduce
from typing import Dict, Iterable, List, Optional, Tuple

from core.colors import progress_color, status_tier, to_css
from core.dates import resolve_date
from core.domain import GoalConfig, Transaction
from core.period import daily_goal, round_half_up
from core.transforms import expense_transactions, income_transactions


def _sum_magnitudes(trans: Iterable[Transaction]) -> float:
    return reduce(lambda acc, t: acc + t.magnitude, trans, 0.0)


def total_expense(trans: Iterable[Transaction]) -> float:
    return _sum_magnitudes(expense_transactions(trans))


def total_income(trans: Iterable[Transaction]) -> float:
    return _sum_magnitudes(income_transactions(trans))


def balance(trans: Iterable[Transaction]) -> float:
    trans = tuple(trans)
    return total_income(trans) - total_expense(trans)


def spending_percentage(expense: float, target: float) -> int:
    # not clamped: overspending shows as > 100
    if not target or target <= 0:
        return 0
    return round_half_up(100 * expense / target)


def remaining(expense: float, target: float) -> float:
    return max(0.0, target - expense)


def category_totals(
    trans: Iterable[Transaction],
    today: date,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> Dict[str, float]:
    """Expense magnitude per category.

    Without a month filter every expense counts, dated or not. With one, only
    expenses whose date resolves into that (year, month) are kept.
    """
    totals: Dict[str, float] = defaultdict(float)
    for t in expense_transactions(trans):
        if year is not None and month is not None:
            d = resolve_date(t, today)
            if d is None or (d.year, d.month) != (year, month):
                continue
        totals[t.category] += t.magnitude
    return dict(totals)


def mood_totals(trans: Iterable[Transaction]) -> Dict[str, dict]:
    """Spending per mood over mood-tagged expenses only.

    ``share`` and ``count_share`` are integer percentages of the tagged subset;
    expenses without a mood are left out of both numerator and denominator.
    """
    tagged = [t for t in expense_transactions(trans) if t.mood]
    amount_total = _sum_magnitudes(tagged)
    count_total = len(tagged)

    grouped: Dict[str, List[Transaction]] = defaultdict(list)
    for t in tagged:
        grouped[t.mood].append(t)

    result = {}
    for mood, items in grouped.items():
        total = _sum_magnitudes(items)
        result[mood] = {
            "total": total,
            "count": len(items),
            "share": round_half_up(100 * total / amount_total) if amount_total else 0,
            "count_share": round_half_up(100 * len(items) / count_total),
        }
    return result


def daily_totals(
    trans: Iterable[Transaction], today: date, year: int, month: int
) -> Dict[int, float]:
    totals: Dict[int, float] = defaultdict(float)
    for t in expense_transactions(trans):
        d = resolve_date(t, today)
        if d is not None and d.year == year and d.month == month:
            totals[d.day] += t.magnitude
    return dict(totals)


def spent_on(trans: Iterable[Transaction], today: date, day: date) -> float:
    return daily_totals(trans, today, day.year, day.month).get(day.day, 0.0)


def monthly_totals(trans: Iterable[Transaction], today: date) -> Dict[Tuple[int, int], float]:
    totals: Dict[Tuple[int, int], float] = defaultdict(float)
    for t in expense_transactions(trans):
        d = resolve_date(t, today)
        if d is not None:
            totals[(d.year, d.month)] += t.magnitude
    return dict(totals)


def available_months(trans: Iterable[Transaction], today: date) -> List[Tuple[int, int]]:
    """Months with any dated expense, newest first, for the month selector."""
    return sorted(monthly_totals(trans, today), reverse=True)


def active_days(trans: Iterable[Transaction], today: date) -> int:
    return len({d for d in (resolve_date(t, today) for t in trans) if d is not None})


def summarize(trans: Iterable[Transaction], goal: GoalConfig, today: date) -> dict:
    trans = tuple(trans)
    expense = total_expense(trans)
    income = total_income(trans)
    percentage = spending_percentage(expense, goal.target)
    return {
        "total_income": income,
        "total_expense": expense,
        "balance": income - expense,
        "target": goal.target,
        "percentage": percentage,
        "remaining": remaining(expense, goal.target),
        "daily_goal": daily_goal(goal),
        "category_totals": category_totals(trans, today),
        "mood_totals": mood_totals(trans),
        "color": to_css(progress_color(percentage)),
        "status": status_tier(percentage),
    }
