"""The user's expense categories.

A category set is a tuple of unique lowercase names. The four baseline names
can be neither removed nor renamed, and the set is never allowed to become
empty. Mutations return ``Either``: ``Right`` with the new state, or ``Left``
with an error payload and nothing changed.
"""
from typing import Iterable, Tuple

from core.domain import INCOME_CATEGORY, OTHER_CATEGORY, Transaction
from core.functional import Either, Right, failure
from core.transforms import relabel_category

BASELINE_CATEGORIES = ("shopping", "food", "transport", "entertainment")
# income labels income rows and other is the expense fallback
RESERVED_CATEGORIES = (INCOME_CATEGORY, OTHER_CATEGORY)

CategorySet = Tuple[str, ...]


def clean_name(name) -> str:
    return name.strip().lower() if isinstance(name, str) else ""


def normalize_categories(raw) -> CategorySet:
    """Coerce whatever was persisted into a valid category set.

    Non-strings, blanks, duplicates and reserved names are dropped; missing
    baseline names are put back at the front in their usual order.
    """
    seen = []
    for item in raw if isinstance(raw, (list, tuple)) else ():
        name = clean_name(item)
        if name and name not in seen and name not in RESERVED_CATEGORIES:
            seen.append(name)
    missing = [b for b in BASELINE_CATEGORIES if b not in seen]
    return tuple(missing + seen)


def add_category(cats: CategorySet, name: str) -> Either[dict, CategorySet]:
    name = clean_name(name)
    if not name:
        return failure("empty_name", "Category name must not be empty")
    if name in RESERVED_CATEGORIES:
        return failure("reserved_category", f"Category {name!r} is reserved", category=name)
    if name in cats:
        return failure("duplicate_category", f"Category {name!r} already exists", category=name)
    return Right(cats + (name,))


def remove_category(cats: CategorySet, name: str) -> Either[dict, CategorySet]:
    name = clean_name(name)
    if name not in cats:
        return failure("category_not_found", f"Category {name!r} does not exist", category=name)
    if len(cats) <= 1:
        return failure("last_category", "At least one category must remain", category=name)
    if name in BASELINE_CATEGORIES:
        return failure("baseline_category", f"Category {name!r} cannot be removed", category=name)
    return Right(tuple(c for c in cats if c != name))


def rename_category(
    cats: CategorySet,
    trans: Tuple[Transaction, ...],
    old: str,
    new: str,
) -> Either[dict, Tuple[CategorySet, Tuple[Transaction, ...]]]:
    """Rename a category and relabel its transactions in one step."""
    old, new = clean_name(old), clean_name(new)
    if old in BASELINE_CATEGORIES:
        return failure("baseline_category", f"Category {old!r} cannot be renamed", category=old)
    if old not in cats:
        return failure("category_not_found", f"Category {old!r} does not exist", category=old)
    if not new:
        return failure("empty_name", "Category name must not be empty")
    if new in RESERVED_CATEGORIES:
        return failure("reserved_category", f"Category {new!r} is reserved", category=new)
    if new in cats:
        return failure("duplicate_category", f"Category {new!r} already exists", category=new)

    renamed = tuple(new if c == old else c for c in cats)
    return Right((renamed, relabel_category(trans, old, new)))


def expense_categories(cats: Iterable[str]) -> Tuple[str, ...]:
    cats = tuple(cats)
    return cats if OTHER_CATEGORY in cats else cats + (OTHER_CATEGORY,)
