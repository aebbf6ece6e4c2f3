import logging
from datetime import date
from typing import Optional

from core.activity import activity_counts, month_activity
from core.aggregation import (
    available_months,
    category_totals,
    monthly_totals,
    spending_percentage,
    spent_on,
    summarize,
    total_expense,
)
from core.categories import add_category, remove_category, rename_category
from core.chat import build_chat_context
from core.colors import progress_color
from core.dates import resolve_date
from core.domain import GoalConfig, Transaction, default_goal
from core.events import (
    CATEGORY_RENAMED,
    GOAL_UPDATED,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    EventBus,
    event_bus,
)
from core.functional import Either, Right, failure, validate_goal, validate_transaction
from core.period import days_elapsed, days_remaining, goal_window, month_view
from core.storage import CategoryStore, SettingsStore, TransactionStore

logger = logging.getLogger(__name__)


class FinanceService:
    """Facade the UI talks to: owns the stores and publishes events.

    Reads go to the stores each time, so the service holds no derived state;
    analytics are recomputed from the stored transactions on every call.
    """

    def __init__(
        self,
        transactions: TransactionStore,
        settings: SettingsStore,
        categories: CategoryStore,
        bus: EventBus = event_bus,
    ):
        self.transactions = transactions
        self.settings = settings
        self.categories = categories
        self.bus = bus

    # --- goal

    def load_goal(self, today: date) -> GoalConfig:
        return self.settings.load() or default_goal(today)

    def update_goal(self, goal: GoalConfig) -> Either[dict, GoalConfig]:
        checked = validate_goal(goal)
        if checked.is_left():
            logger.info("goal rejected: %s", checked.get_error()["message"])
            return checked
        if not self.settings.save(goal):
            return failure("settings_loading", "Settings are still loading, try again")
        expense = total_expense(self.transactions.list())
        self.bus.publish(GOAL_UPDATED, {"percentage": spending_percentage(expense, goal.target)})
        return Right(goal)

    # --- transactions

    def add_transaction(self, t: Transaction, today: date) -> Either[dict, dict]:
        checked = validate_transaction(t, self.categories.list())
        if checked.is_left():
            return checked
        self.transactions.append(t)

        trans = self.transactions.list()
        goal = self.load_goal(today)
        day = resolve_date(t, today)
        summary = summarize(trans, goal, today)
        payload = {
            "id": t.id,
            "kind": t.kind,
            "amount": t.amount,
            "day": day.isoformat() if day else None,
            "day_spent": spent_on(trans, today, day) if day else 0.0,
            "daily_goal": summary["daily_goal"],
            "percentage": summary["percentage"],
        }
        results = self.bus.publish(TRANSACTION_ADDED, payload)
        alerts = [r["alert"] for r in results if r.get("alert")]
        return Right({"transaction": t, "alerts": alerts})

    def delete_transaction(self, tid: str) -> Either[dict, str]:
        if not self.transactions.delete(tid):
            return failure("transaction_not_found", f"Transaction {tid} does not exist", id=tid)
        self.bus.publish(TRANSACTION_DELETED, {"id": tid})
        return Right(tid)

    # --- categories

    def add_category(self, name: str) -> Either:
        result = add_category(self.categories.list(), name)
        if result.is_right():
            self.categories.save(result.get_or_else(()))
        return result

    def remove_category(self, name: str) -> Either:
        result = remove_category(self.categories.list(), name)
        if result.is_right():
            self.categories.save(result.get_or_else(()))
        return result

    def rename_category(self, old: str, new: str) -> Either:
        previous = self.transactions.list()
        result = rename_category(self.categories.list(), previous, old, new)
        if result.is_left():
            return result
        cats, trans = result.get_or_else(None)
        self.transactions.replace_all(trans)
        try:
            self.categories.save(cats)
        except OSError as e:
            # restore the old labels
            self.transactions.replace_all(previous)
            logger.warning("rename %r -> %r rolled back: %s", old, new, e)
            return failure("write_failed", "Could not save the renamed category", category=old)
        self.bus.publish(CATEGORY_RENAMED, {"old": old, "new": new})
        return Right(cats)

    # --- views

    def analytics(self, today: date, year: Optional[int] = None, month: Optional[int] = None) -> dict:
        year = year or today.year
        month = month or today.month
        trans = self.transactions.list()
        goal = self.load_goal(today)
        summary = summarize(trans, goal, today)
        activity = month_activity(trans, goal, today, year, month)
        window = goal_window(goal)
        return {
            "summary": summary,
            "rgb": progress_color(summary["percentage"]),
            "goal": goal,
            "window": window,
            "days_elapsed": days_elapsed(goal, today),
            "days_remaining": days_remaining(goal, today),
            "month": month_view(year, month),
            "activity": activity,
            "activity_counts": activity_counts(activity),
            "month_categories": category_totals(trans, today, year, month),
            "monthly_totals": monthly_totals(trans, today),
            "available_months": available_months(trans, today),
        }

    def chat_context(self, today: date, limit: int = 10) -> dict:
        return build_chat_context(self.transactions.list(), self.load_goal(today), today, limit)
