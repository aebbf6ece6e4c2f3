from typing import Callable, Dict, List, NamedTuple
from datetime import datetime

from core.colors import status_tier

__all__ = [
    'event_bus', 'Event', 'EventBus',
    'TRANSACTION_ADDED', 'TRANSACTION_DELETED', 'GOAL_UPDATED', 'CATEGORY_RENAMED',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event, dict], dict]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []
        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in handlers]

    def unsubscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
GOAL_UPDATED = "GOAL_UPDATED"
CATEGORY_RENAMED = "CATEGORY_RENAMED"

event_bus = EventBus()


def daily_goal_handler(event: Event, payload: dict) -> dict:
    """Alert when the day an expense lands on goes over the daily goal."""
    if payload.get("kind") != "expense":
        return {}
    day_spent = payload.get("day_spent", 0)
    limit = payload.get("daily_goal", 0)
    if limit > 0 and day_spent > limit:
        return {
            "alert": f"Daily goal exceeded on {payload.get('day') or 'this day'}: {day_spent:,.2f} / {limit:,}",
            "day_spent": day_spent,
            "daily_goal": limit,
        }
    return {"day_spent": day_spent}


def goal_progress_handler(event: Event, payload: dict) -> dict:
    percentage = payload.get("percentage", 0)
    tier = status_tier(percentage)
    if tier in ("warning", "over budget"):
        return {
            "alert": f"You have used {percentage}% of your target ({tier})",
            "percentage": percentage,
            "status": tier,
        }
    return {}


def register_default_handlers(bus: EventBus = event_bus) -> None:
    bus.subscribe(TRANSACTION_ADDED, daily_goal_handler)
    bus.subscribe(TRANSACTION_ADDED, goal_progress_handler)
    bus.subscribe(GOAL_UPDATED, goal_progress_handler)


register_default_handlers()
