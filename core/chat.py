"""Talk to Catty: build the spending summary, send it to Gemini, never fail loudly.

The reply from the model is opaque free text. It is shown as-is; any failure on
the way (network, HTTP status, timeout, unexpected payload) turns into
``FALLBACK_MESSAGE`` instead of surfacing in the transcript.
"""
import asyncio
import json
import logging
from datetime import date
from typing import Iterable, Optional

import httpx

from core.aggregation import summarize
from core.dates import format_short, resolve_date
from core.domain import GoalConfig, Transaction
from core.lazy import recent_transactions

logger = logging.getLogger(__name__)

GREETING = (
    "Hey there! I'm Catty, your AI finance friend! 😺 I'm here to help you manage "
    "your spending and build healthy money habits. How can I help you today?"
)
FALLBACK_MESSAGE = "I'm having trouble connecting right now. Please try again! 😿"

PERSONA = (
    "You are Catty, a friendly and empathetic AI finance assistant. Your role is to "
    "help users manage their spending through supportive conversations. Be warm, "
    "understanding, and provide practical financial advice. Keep responses concise "
    "and friendly. Use the spending summary below when it is relevant."
)

MIN_RECENT = 10
MAX_RECENT = 15


class MalformedReply(ValueError):
    pass


def build_chat_context(
    trans: Iterable[Transaction],
    goal: GoalConfig,
    today: date,
    limit: int = MIN_RECENT,
) -> dict:
    trans = tuple(trans)
    summary = summarize(trans, goal, today)
    limit = min(MAX_RECENT, max(MIN_RECENT, limit))

    recent = [
        {
            "date": format_short(resolve_date(t, today)),
            "amount": t.amount,
            "kind": t.kind,
            "category": t.category,
            "mood": t.mood,
        }
        for t in recent_transactions(trans, today, limit)
    ]

    return {
        "balance": summary["balance"],
        "total_income": summary["total_income"],
        "total_expense": summary["total_expense"],
        "category_totals": summary["category_totals"],
        "mood_totals": {m: v["total"] for m, v in summary["mood_totals"].items()},
        "recent": recent,
        "goal": {
            "target": goal.target,
            "period_days": goal.period_days,
            "percentage": summary["percentage"],
            "status": summary["status"],
        },
    }


def build_prompt(context: dict, user_message: str) -> str:
    return (
        f"{PERSONA}\n\n"
        f"Spending summary: {json.dumps(context, sort_keys=True)}\n\n"
        f"User message: {user_message}"
    )


def extract_reply(data) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedReply(f"no candidate text in response: {e}") from e
    if not isinstance(text, str) or not text.strip():
        raise MalformedReply("empty candidate text")
    return text


class GeminiClient:

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-pro",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta/models",
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    async def generate(self, prompt: str) -> str:
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.url, params={"key": self.api_key}, json=payload)
            response.raise_for_status()
            return extract_reply(response.json())


async def ask_catty(client: Optional[GeminiClient], prompt: str, timeout: float = 20.0) -> str:
    if client is None:
        logger.info("no Gemini API key configured, answering with fallback")
        return FALLBACK_MESSAGE
    try:
        return await asyncio.wait_for(client.generate(prompt), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Gemini request timed out after %ss", timeout)
    except httpx.HTTPError as e:
        logger.warning("Gemini request failed: %s", e)
    except ValueError as e:
        # MalformedReply, or a body that is not JSON at all
        logger.warning("Gemini reply unusable: %s", e)
    return FALLBACK_MESSAGE
