from collections import defaultdict
from datetime import date
from itertools import islice
from typing import Callable, Iterable, Iterator, Tuple

from core.dates import resolve_date
from core.domain import Transaction


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def _recency_key(today: date):
    def key(t: Transaction):
        d = resolve_date(t, today)
        # dated entries first (newest first), then ids, which are creation stamps
        return (d is not None, d or date.min, t.id.zfill(20))
    return key


def recent_transactions(
    trans: Iterable[Transaction], today: date, n: int
) -> Iterator[Transaction]:
    ordered = sorted(trans, key=_recency_key(today), reverse=True)
    return islice(ordered, max(0, n))


def top_categories(trans: Iterable[Transaction], k: int) -> Iterator[Tuple[str, float]]:
    totals: dict = defaultdict(float)
    for t in iter_transactions(trans, lambda t: t.is_expense):
        totals[t.category] += t.magnitude

    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    for name, total in ordered[: max(0, k)]:
        yield name, total
