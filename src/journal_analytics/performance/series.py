"""Series normalization: canonical daily and monthly P&L series.

Turns whatever the storage collaborator holds into two date-ascending
series keyed by UTC calendar date. Each series is resolved through an
explicit chain of tiers; the first tier that yields rows wins and its
``SeriesOrigin`` is recorded on the result:

daily    precomputed aggregates -> derived from closed trades
monthly  precomputed rollups    -> derived from the daily series

Stored daily rows that land on the same UTC date are merged, so the
daily series holds at most one point per date.

Derived monthly win/loss counts are summed from daily aggregates rather
than recomputed from raw trades, so they can differ slightly from a
from-trades computation (e.g. same-day partial fills).

Usage::

    resolver = SeriesResolver()
    series = resolver.resolve(store, "user_1")
    series.daily[-1].net_pnl
    series.daily_origin   # SeriesOrigin.PRECOMPUTED
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, Sequence, TypeVar

from ..core.dates import to_utc_date
from ..core.enums import SeriesOrigin
from ..core.errors import StorageUnavailableError
from ..core.interfaces import IPerformanceStore
from ..core.models import ClosedTrade, DailyPnlPoint, MonthlyRollup

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fetch(
    operation: str,
    user_id: str,
    call: Callable[..., T],
    *args: Any,
) -> T:
    """Invoke a store operation, turning any failure into a fatal error.

    Analytics over an incomplete series would be misleading, so there
    is no retry and no partial result.
    """
    try:
        return call(user_id, *args)
    except Exception as exc:
        logger.error("Store call %s failed for %s: %s", operation, user_id, exc)
        raise StorageUnavailableError(operation, user_id) from exc


# ---------------------------------------------------------------------------
# Pure derivations
# ---------------------------------------------------------------------------

def daily_from_trades(
    trades: Sequence[ClosedTrade],
) -> tuple[list[DailyPnlPoint], int]:
    """Group closed trades by UTC trade date.

    Returns the ascending daily series and the number of trades dropped
    for an unparseable date.
    """
    buckets: dict[Any, dict[str, float]] = {}
    dropped = 0
    for trade in trades:
        day = to_utc_date(trade.trade_date)
        if day is None:
            dropped += 1
            continue
        bucket = buckets.setdefault(day, {
            "net_pnl": 0.0, "trade_count": 0, "win_count": 0,
            "loss_count": 0, "total_volume": 0.0,
        })
        pnl = trade.realized_pnl or 0.0
        bucket["net_pnl"] += pnl
        bucket["trade_count"] += 1
        if pnl > 0:
            bucket["win_count"] += 1
        elif pnl < 0:
            bucket["loss_count"] += 1
        bucket["total_volume"] += abs(trade.total_invested or 0.0)

    points = [
        DailyPnlPoint(
            date=day,
            net_pnl=b["net_pnl"],
            trade_count=int(b["trade_count"]),
            win_count=int(b["win_count"]),
            loss_count=int(b["loss_count"]),
            total_volume=b["total_volume"],
        )
        for day, b in sorted(buckets.items())
    ]
    return points, dropped


def merge_same_day(
    points: Sequence[DailyPnlPoint],
) -> tuple[list[DailyPnlPoint], int]:
    """Collapse points that share a UTC date into one point per day.

    P&L, counts and volume are summed. Returns the ascending series and
    the number of rows merged away.
    """
    merged: dict[Any, DailyPnlPoint] = {}
    for point in sorted(points, key=lambda p: p.date):
        prev = merged.get(point.date)
        if prev is None:
            merged[point.date] = point
            continue
        merged[point.date] = DailyPnlPoint(
            date=point.date,
            net_pnl=prev.net_pnl + point.net_pnl,
            trade_count=prev.trade_count + point.trade_count,
            win_count=prev.win_count + point.win_count,
            loss_count=prev.loss_count + point.loss_count,
            total_volume=prev.total_volume + point.total_volume,
        )
    return list(merged.values()), len(points) - len(merged)


def monthly_from_daily(daily: Sequence[DailyPnlPoint]) -> list[MonthlyRollup]:
    """Roll daily points up into UTC calendar months."""
    months: OrderedDict[tuple[int, int], MonthlyRollup] = OrderedDict()
    for point in sorted(daily, key=lambda p: p.date):
        key = (point.date.year, point.date.month)
        rollup = months.get(key)
        if rollup is None:
            rollup = MonthlyRollup(year=key[0], month=key[1])
            months[key] = rollup
        pnl = point.net_pnl
        rollup.net_pnl += pnl
        rollup.trade_count += point.trade_count
        rollup.win_count += point.win_count
        rollup.loss_count += point.loss_count
        if pnl > 0:
            rollup.green_days += 1
        elif pnl < 0:
            rollup.red_days += 1
        rollup.best_day = pnl if rollup.best_day is None else max(rollup.best_day, pnl)
        rollup.worst_day = pnl if rollup.worst_day is None else min(rollup.worst_day, pnl)
    return list(months.values())


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

class DailyTier(Protocol):
    origin: SeriesOrigin

    def load(
        self,
        store: IPerformanceStore,
        user_id: str,
        series: NormalizedSeries,
    ) -> list[DailyPnlPoint]: ...


class MonthlyTier(Protocol):
    origin: SeriesOrigin

    def load(
        self,
        store: IPerformanceStore,
        user_id: str,
        daily: Sequence[DailyPnlPoint],
    ) -> list[MonthlyRollup]: ...


class PrecomputedDaily:
    origin = SeriesOrigin.PRECOMPUTED

    def load(
        self,
        store: IPerformanceStore,
        user_id: str,
        series: NormalizedSeries,
    ) -> list[DailyPnlPoint]:
        rows = fetch("fetch_daily_performance", user_id, store.fetch_daily_performance)
        points, merged = merge_same_day(rows)
        if merged:
            logger.warning(
                "Merged %d daily rows sharing a UTC date for %s", merged, user_id
            )
        return points


class TradeDerivedDaily:
    origin = SeriesOrigin.DERIVED_FROM_TRADES

    def load(
        self,
        store: IPerformanceStore,
        user_id: str,
        series: NormalizedSeries,
    ) -> list[DailyPnlPoint]:
        trades = fetch("fetch_closed_trades", user_id, store.fetch_closed_trades)
        series.closed_trades = trades
        points, dropped = daily_from_trades(trades)
        if dropped:
            logger.warning(
                "Dropped %d closed trades with unparseable dates for %s",
                dropped, user_id,
            )
        return points


class PrecomputedMonthly:
    origin = SeriesOrigin.PRECOMPUTED

    def load(
        self,
        store: IPerformanceStore,
        user_id: str,
        daily: Sequence[DailyPnlPoint],
    ) -> list[MonthlyRollup]:
        rows = fetch(
            "fetch_monthly_performance", user_id, store.fetch_monthly_performance
        )
        return sorted(rows, key=lambda m: (m.year, m.month))


class DailyDerivedMonthly:
    origin = SeriesOrigin.DERIVED_FROM_DAILY

    def load(
        self,
        store: IPerformanceStore,
        user_id: str,
        daily: Sequence[DailyPnlPoint],
    ) -> list[MonthlyRollup]:
        return monthly_from_daily(daily)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

@dataclass
class NormalizedSeries:
    """Canonical series for one request, treated as an immutable snapshot."""

    daily: list[DailyPnlPoint] = field(default_factory=list)
    monthly: list[MonthlyRollup] = field(default_factory=list)
    daily_origin: SeriesOrigin = SeriesOrigin.EMPTY
    monthly_origin: SeriesOrigin = SeriesOrigin.EMPTY
    # Set when a tier read closed trades; None means not read this request
    closed_trades: Optional[list[ClosedTrade]] = None

    @property
    def is_empty(self) -> bool:
        return not self.daily

    @property
    def pnl_values(self) -> list[float]:
        return [p.net_pnl for p in self.daily]


class SeriesResolver:
    """Resolve daily and monthly series through ordered fallback tiers.

    Parameters
    ----------
    daily_tiers : sequence of DailyTier | None
        Tried in order; default precomputed, then trade-derived.
    monthly_tiers : sequence of MonthlyTier | None
        Tried in order; default precomputed, then daily-derived.
    """

    def __init__(
        self,
        *,
        daily_tiers: Optional[Sequence[DailyTier]] = None,
        monthly_tiers: Optional[Sequence[MonthlyTier]] = None,
    ) -> None:
        self._daily_tiers = list(
            daily_tiers or (PrecomputedDaily(), TradeDerivedDaily())
        )
        self._monthly_tiers = list(
            monthly_tiers or (PrecomputedMonthly(), DailyDerivedMonthly())
        )

    def resolve(self, store: IPerformanceStore, user_id: str) -> NormalizedSeries:
        series = NormalizedSeries()

        for tier in self._daily_tiers:
            daily = tier.load(store, user_id, series)
            if daily:
                series.daily = daily
                series.daily_origin = tier.origin
                break

        # No daily series means no data; a lone monthly table is not reported
        if series.daily:
            for monthly_tier in self._monthly_tiers:
                monthly = monthly_tier.load(store, user_id, series.daily)
                if monthly:
                    series.monthly = monthly
                    series.monthly_origin = monthly_tier.origin
                    break

        logger.debug(
            "Resolved series for %s: %d daily (%s), %d monthly (%s)",
            user_id,
            len(series.daily),
            series.daily_origin.value,
            len(series.monthly),
            series.monthly_origin.value,
        )
        return series
