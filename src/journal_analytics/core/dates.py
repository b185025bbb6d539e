"""UTC date-only helpers.

Every date the engine keys on is a bare UTC calendar date. Stored
timestamps are converted through UTC, so a bare date stored as
midnight (or midday) UTC never shifts to a neighbouring day under a
local-timezone interpretation.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any


def to_utc_date(value: Any) -> date | None:
    """Coerce a stored date value to its UTC calendar date.

    Accepts ``date``, ``datetime`` (naive values are taken as UTC) and
    ISO-8601 strings. Returns None for anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(timezone.utc).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            return to_utc_date(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def month_start(d: date) -> date:
    return d.replace(day=1)


def week_start(d: date) -> date:
    """Monday of the ISO week containing ``d``."""
    return d - timedelta(days=d.weekday())
