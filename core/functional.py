from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, TypeVar

from core.domain import (
    EXPENSE,
    GOAL_PERIODS,
    INCOME,
    INCOME_CATEGORY,
    MOODS,
    OTHER_CATEGORY,
    GoalConfig,
    Transaction,
)

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value

    def __hash__(self) -> int:
        return hash(("Some", self._value))


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return self

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)

    def __hash__(self) -> int:
        return hash("Nothing")


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def get_error(self) -> E:
        raise ValueError("Right carries no error")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def failure(error: str, message: str, **details: Any) -> Left:
    """Left carrying the usual {"error", "message", ...} payload."""
    return Left({"error": error, "message": message, **details})


def validate_goal(goal: GoalConfig) -> Either[dict, GoalConfig]:
    if goal.target is None or goal.target <= 0:
        return failure(
            "invalid_target",
            "Target must be a positive amount",
            target=goal.target,
        )
    if goal.period_days not in GOAL_PERIODS:
        return failure(
            "invalid_period",
            f"Period must be one of {', '.join(str(p) for p in GOAL_PERIODS)} days",
            period_days=goal.period_days,
        )
    return Right(goal)


def validate_transaction(
    t: Transaction,
    cats: Iterable[str],
) -> Either[dict, Transaction]:

    if t.kind not in (INCOME, EXPENSE):
        return failure("unknown_kind", f"Unknown transaction kind {t.kind!r}", kind=t.kind)

    if not t.amount:
        return failure("zero_amount", "Amount must not be zero", amount=t.amount)

    if t.kind == INCOME:
        if t.category != INCOME_CATEGORY:
            return failure(
                "category_kind_mismatch",
                f"Income must use the {INCOME_CATEGORY!r} category",
                category=t.category,
            )
        if t.mood is not None:
            return failure("mood_on_income", "Only expenses can carry a mood", mood=t.mood)
        return Right(t)

    allowed = set(cats) | {OTHER_CATEGORY}
    if t.category not in allowed:
        return failure(
            "category_not_found",
            f"Category {t.category!r} does not exist",
            category=t.category,
        )

    if t.mood is not None and t.mood not in MOODS:
        return failure("unknown_mood", f"Unknown mood {t.mood!r}", mood=t.mood)

    return Right(t)
