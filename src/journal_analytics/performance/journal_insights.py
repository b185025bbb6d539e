"""Journal-performance correlator.

Joins journal entries to the daily series by exact UTC date and groups
each tracked categorical answer (sleep quality, revenge trading, ...)
with the P&L of the days it was logged on. Entries without a matching
trading day, with an unset answer or with an unparseable date are
skipped; journaling and trading days routinely don't overlap.

Groups are ordered by sample size, then by average P&L, so the best
supported answers come first. The output is correlational only.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Sequence

from ..core.dates import to_utc_date
from ..core.models import (
    DailyPnlPoint,
    JournalEntry,
    JournalInsightGroup,
    JournalInsights,
)

logger = logging.getLogger(__name__)


@dataclass
class _Bucket:
    n: int = 0
    total: float = 0.0
    green: int = 0


def group_answers(
    label: str,
    pairs: Sequence[tuple[str, float]],
) -> list[JournalInsightGroup]:
    """Group ``(answer, net_pnl)`` pairs by answer."""
    buckets: OrderedDict[str, _Bucket] = OrderedDict()
    for value, pnl in pairs:
        bucket = buckets.setdefault(value, _Bucket())
        bucket.n += 1
        bucket.total += pnl
        if pnl > 0:
            bucket.green += 1

    groups = [
        JournalInsightGroup(
            label=label,
            value=value,
            n=b.n,
            avg_pnl=b.total / b.n,
            green_rate=b.green / b.n,
        )
        for value, b in buckets.items()
    ]
    groups.sort(key=lambda g: (-g.n, -g.avg_pnl))
    return groups


class JournalCorrelator:
    """Correlate categorical journal answers with daily P&L.

    Parameters
    ----------
    tracked_fields : mapping of str to str
        Journal field name -> display label, in output order.
    """

    def __init__(self, tracked_fields: Mapping[str, str]) -> None:
        self._fields = dict(tracked_fields)

    def correlate(
        self,
        entries: Sequence[JournalEntry],
        daily: Sequence[DailyPnlPoint],
    ) -> JournalInsights:
        pnl_by_date: dict[date, float] = {p.date: p.net_pnl for p in daily}

        joined: list[tuple[JournalEntry, float]] = []
        bad_dates = 0
        for entry in entries:
            day = to_utc_date(entry.date)
            if day is None:
                bad_dates += 1
                continue
            pnl = pnl_by_date.get(day)
            if pnl is not None:
                joined.append((entry, pnl))

        if bad_dates:
            logger.warning("Skipped %d journal entries with unparseable dates", bad_dates)

        insights: dict[str, list[JournalInsightGroup]] = {}
        for field_name, label in self._fields.items():
            pairs: list[tuple[str, float]] = []
            for entry, pnl in joined:
                answer = entry.answer(field_name)
                if answer is not None:
                    pairs.append((answer, pnl))
            insights[field_name] = group_answers(label, pairs)

        return JournalInsights(insights=insights)
