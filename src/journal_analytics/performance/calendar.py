"""Calendar month view over the daily series."""

from __future__ import annotations

import calendar as _calendar
from datetime import date
from typing import Optional, Sequence

from ..core.dates import to_utc_date
from ..core.models import (
    CalendarDay,
    CalendarMonth,
    DailyPnlPoint,
    JournalEntry,
    MonthlyRollup,
)
from .series import monthly_from_daily
from .stats import streaks


def build_calendar_month(
    daily: Sequence[DailyPnlPoint],
    journal: Sequence[JournalEntry],
    year: int,
    month: int,
    monthly: Optional[Sequence[MonthlyRollup]] = None,
) -> CalendarMonth:
    """One entry per day of the month plus the month's rollup and streaks.

    Uses the stored rollup for the month when one is given, otherwise
    derives it from the month's daily points.
    """
    in_month = [
        p for p in daily if p.date.year == year and p.date.month == month
    ]
    by_date = {p.date: p for p in in_month}
    journal_dates = {
        d for d in (to_utc_date(e.date) for e in journal) if d is not None
    }

    days: list[CalendarDay] = []
    for day in range(1, _calendar.monthrange(year, month)[1] + 1):
        current = date(year, month, day)
        point = by_date.get(current)
        days.append(CalendarDay(
            date=current,
            day=day,
            net_pnl=point.net_pnl if point else 0.0,
            trade_count=point.trade_count if point else 0,
            has_trades=bool(point and point.trade_count > 0),
            has_journal=current in journal_dates,
        ))

    rollup = next(
        (m for m in monthly or () if m.year == year and m.month == month),
        None,
    )
    if rollup is None and in_month:
        rollup = monthly_from_daily(in_month)[0]

    return CalendarMonth(
        year=year,
        month=month,
        days=days,
        rollup=rollup,
        streaks=streaks(in_month),
    )
