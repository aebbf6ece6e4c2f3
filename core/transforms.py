import json
import logging
import math
from typing import Iterable, Optional, Tuple

from core.domain import EXPENSE, INCOME, INCOME_CATEGORY, MOODS, OTHER_CATEGORY, Transaction

logger = logging.getLogger(__name__)


def transaction_from_dict(d: dict) -> Optional[Transaction]:
    """Build a Transaction from a stored record, or None if it is unusable.

    The kind must be income or expense and the amount a finite number. A mood
    outside the known set is dropped rather than rejecting the record.
    """
    try:
        kind = str(d["kind"])
        amount = float(d["amount"])
        if kind not in (INCOME, EXPENSE):
            raise ValueError(f"unknown kind {kind!r}")
        if not math.isfinite(amount):
            raise ValueError(f"amount {amount!r} is not finite")
        fallback = INCOME_CATEGORY if kind == INCOME else OTHER_CATEGORY
        mood = d.get("mood")
        return Transaction(
            id=str(d["id"]),
            kind=kind,
            amount=amount,
            category=str(d.get("category") or fallback).lower(),
            occurred_on=str(d.get("occurred_on") or ""),
            mood=mood if isinstance(mood, str) and mood in MOODS else None,
            note=str(d.get("note") or ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("skipping malformed transaction %r: %s", d, e)
        return None


def load_seed(path: str) -> Tuple[Tuple[Transaction, ...], Tuple[str, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = map(transaction_from_dict, data.get("transactions", []))
    transactions = tuple(t for t in records if t is not None)
    categories = tuple(data.get("categories", []))

    return transactions, categories


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return trans + (t,)


def remove_transaction(
    trans: Tuple[Transaction, ...], tid: str
) -> Tuple[Transaction, ...]:
    return tuple(t for t in trans if t.id != tid)



def relabel_category(
    trans: Tuple[Transaction, ...], old: str, new: str
) -> Tuple[Transaction, ...]:
    return tuple(
        Transaction(
            id=t.id,
            kind=t.kind,
            amount=t.amount,
            category=new if t.is_expense and t.category == old else t.category,
            occurred_on=t.occurred_on,
            mood=t.mood,
            note=t.note,
        )
        for t in trans
    )


def income_transactions(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.kind == INCOME, trans))


def expense_transactions(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.kind == EXPENSE, trans))


def transaction_to_dict(t: Transaction) -> dict:
    return {
        "id": t.id,
        "kind": t.kind,
        "amount": t.amount,
        "category": t.category,
        "occurred_on": t.occurred_on,
        "mood": t.mood,
        "note": t.note,
    }
