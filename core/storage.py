"""Local JSON stand-ins for the transaction, settings and category stores."""
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

from core.categories import CategorySet, normalize_categories
from core.domain import GoalConfig, Transaction
from core.transforms import (
    add_transaction,
    remove_transaction,
    transaction_from_dict,
    transaction_to_dict,
)

logger = logging.getLogger(__name__)


class JsonFile:

    def __init__(self, path):
        self.path = Path(path)

    def read(self, default: Any = None) -> Any:
        if not self.path.exists():
            return default
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("could not read %s: %s", self.path, e)
            return default

    def exists(self) -> bool:
        return self.path.exists()

    def write(self, data: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        tmp.replace(self.path)


class TransactionStore:

    def __init__(self, path):
        self._file = JsonFile(path)

    def exists(self) -> bool:
        return self._file.exists()

    def list(self) -> Tuple[Transaction, ...]:
        raw = self._file.read(default=[])
        if not isinstance(raw, list):
            logger.warning("transaction file %s is not a list", self._file.path)
            return ()
        return tuple(t for t in map(transaction_from_dict, raw) if t is not None)

    def replace_all(self, trans: Iterable[Transaction]) -> None:
        self._file.write([transaction_to_dict(t) for t in trans])

    def append(self, t: Transaction) -> None:
        self.replace_all(add_transaction(self.list(), t))
        logger.info("transaction %s appended", t.id)

    def delete(self, tid: str) -> bool:
        current = self.list()
        kept = remove_transaction(current, tid)
        if len(kept) == len(current):
            return False
        self.replace_all(kept)
        logger.info("transaction %s deleted", tid)
        return True


class SettingsStore:
    """Goal settings on disk, with a guard against saving before loading.

    ``loading`` stays True until ``load()`` has run once. Saves attempted in that
    window come from default values and would overwrite the stored goal, so
    they are dropped.
    """

    def __init__(self, path):
        self._file = JsonFile(path)
        self.loading = True

    def load(self) -> Optional[GoalConfig]:
        try:
            raw = self._file.read(default=None)
            if raw is None:
                return None
            return GoalConfig(
                target=float(raw["target"]),
                period_days=int(raw["period_days"]),
                start_date=date.fromisoformat(raw["start_date"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("ignoring malformed goal settings: %s", e)
            return None
        finally:
            self.loading = False

    def save(self, goal: GoalConfig) -> bool:
        if self.loading:
            logger.debug("settings save suppressed while loading")
            return False
        self._file.write({
            "target": goal.target,
            "period_days": goal.period_days,
            "start_date": goal.start_date.isoformat(),
        })
        logger.info("goal saved: target=%s period=%s start=%s",
                    goal.target, goal.period_days, goal.start_date)
        return True


class CategoryStore:

    def __init__(self, path):
        self._file = JsonFile(path)

    def list(self) -> CategorySet:
        return normalize_categories(self._file.read(default=[]))

    def save(self, cats: CategorySet) -> None:
        self._file.write(list(cats))
