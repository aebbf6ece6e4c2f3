"""Turn the free-text dates typed on transactions into calendar dates.

Accepted shapes, tried in order:

* anything else with a 4-digit year ("2024-11-04", "Nov 4, 2024"), handed to
  dateutil;
* "<MonthName> <day>" ("Nov 4", "november 4");
* "M/D", "M/D/YY" or "M/D/YYYY", always month first with the month
  checked to be 1..12.

When the year is missing it is inferred from ``today``: a month later in the
year than today's month is taken to be last year's. Entries older than a year
are therefore placed in the wrong year; that is accepted.
"""
import re
from datetime import date, datetime
from functools import lru_cache
from typing import Optional

from dateutil import parser as dateutil_parser

from core.domain import Transaction
from core.functional import Maybe, Nothing, Some

MONTHS = ("jan", "feb", "mar", "apr", "may", "jun",
          "jul", "aug", "sep", "oct", "nov", "dec")

_FOUR_DIGIT_YEAR = re.compile(r"(?<!\d)\d{4}(?!\d)")
_MONTH_DAY = re.compile(r"^([A-Za-z]{3,})\.?\s+(\d{1,2})(?:st|nd|rd|th)?$")
_SLASHED = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{4}|\d{2}))?$")


def infer_year(month: int, today: date) -> int:
    return today.year - 1 if month > today.month else today.year


def expand_two_digit_year(yy: int) -> int:
    return 1900 + yy if yy >= 70 else 2000 + yy


def _safe_date(year: int, month: int, day: int) -> Maybe[date]:
    try:
        return Some(date(year, month, day))
    except ValueError:
        return Nothing()


def _parse_with_year(text: str) -> Maybe[date]:
    year = int(_FOUR_DIGIT_YEAR.search(text).group())
    if year < 1:
        return Nothing()
    try:
        return Some(dateutil_parser.parse(text, default=datetime(year, 1, 1)).date())
    except (ValueError, OverflowError, TypeError):
        return Nothing()


def _parse_month_day(text: str, today: date) -> Maybe[date]:
    m = _MONTH_DAY.match(text)
    if not m:
        return Nothing()
    prefix = m.group(1)[:3].lower()
    if prefix not in MONTHS:
        return Nothing()
    month = MONTHS.index(prefix) + 1
    return _safe_date(infer_year(month, today), month, int(m.group(2)))


def _parse_slashed(text: str, today: date) -> Maybe[date]:
    m = _SLASHED.match(text)
    if not m:
        return Nothing()
    month, day, year_text = int(m.group(1)), int(m.group(2)), m.group(3)
    if year_text is None:
        year = infer_year(month, today) if 1 <= month <= 12 else today.year
    elif len(year_text) == 2:
        year = expand_two_digit_year(int(year_text))
    else:
        year = int(year_text)
    return _safe_date(year, month, day)


@lru_cache(maxsize=4096)
def parse_date(text: Optional[str], today: date) -> Maybe[date]:
    if not text or not isinstance(text, str):
        return Nothing()
    text = text.strip()

    if _FOUR_DIGIT_YEAR.search(text) and not _SLASHED.match(text):
        parsed = _parse_with_year(text)
        if parsed.is_some():
            return parsed

    for attempt in (_parse_month_day, _parse_slashed):
        parsed = attempt(text, today)
        if parsed.is_some():
            return parsed

    return Nothing()


def resolve_date(t: Transaction, today: date) -> Optional[date]:
    return parse_date(t.occurred_on, today).get_or_else(None)


def format_short(d: Optional[date]) -> str:
    if d is None:
        return "-"
    return f"{MONTHS[d.month - 1].title()} {d.day}"
