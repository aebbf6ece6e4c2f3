import time
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple

INCOME = "income"
EXPENSE = "expense"

INCOME_CATEGORY = "income"
OTHER_CATEGORY = "other"

MOODS = ("happy", "neutral", "sad")
GOAL_PERIODS = (7, 14, 21, 30)

DEFAULT_TARGET = 5000
DEFAULT_PERIOD = 30


class DayStatus:
    FUTURE = "future"
    EXCEEDED = "exceeded"
    GOOD = "good"
    INACTIVE = "inactive"

    ALL = (FUTURE, EXCEEDED, GOOD, INACTIVE)


@dataclass(frozen=True)
class Transaction:
    id: str
    kind: str                    # "income" or "expense"
    amount: float                # + for income, - for expense
    category: str
    occurred_on: str             # free text, e.g. "Nov 4", "10/31", "2024-11-04"
    mood: Optional[str] = None   # expenses only
    note: str = ""

    @property
    def magnitude(self) -> float:
        return abs(self.amount)

    @property
    def is_expense(self) -> bool:
        return self.kind == EXPENSE

    @property
    def is_income(self) -> bool:
        return self.kind == INCOME


@dataclass(frozen=True)
class GoalConfig:
    target: float
    period_days: int
    start_date: date


@dataclass(frozen=True)
class GoalWindow:
    start: date
    end: date  # inclusive

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    days: Tuple[int, ...]
    first_weekday: int  # 0 = Sunday


def default_goal(today: date) -> GoalConfig:
    return GoalConfig(target=DEFAULT_TARGET, period_days=DEFAULT_PERIOD, start_date=today)


def make_transaction(
    kind: str,
    amount: float,
    category: str,
    occurred_on: str,
    mood: Optional[str] = None,
    note: str = "",
    id: Optional[str] = None,
    now: Optional[float] = None,
) -> Transaction:
    """Build a transaction with the sign convention applied.

    Expenses are stored negative and incomes positive whatever sign the caller
    passed. Income always lands in the "income" category and never carries a mood.
    """
    magnitude = abs(float(amount))
    if kind == INCOME:
        signed = magnitude
        category = INCOME_CATEGORY
        mood = None
    else:
        signed = -magnitude
        category = (category or OTHER_CATEGORY).strip().lower()

    if id is None:
        stamp = time.time() if now is None else now
        id = str(int(stamp * 1000))

    return Transaction(
        id=id,
        kind=kind,
        amount=signed,
        category=category,
        occurred_on=occurred_on,
        mood=mood,
        note=note,
    )


def window_end(start: date, period_days: int) -> date:
    return start + timedelta(days=period_days - 1)
