"""Protocol interfaces for the analytics engine.

The storage collaborator is the only boundary: the engine reads plain
rows through ``IPerformanceStore`` and takes no dependency on any
database, billing or AI client. Implementations are constructed
explicitly and injected.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence, runtime_checkable

from .models import (
    AggregateTradeStats,
    ClosedTrade,
    DailyPnlPoint,
    Goal,
    JournalEntry,
    MonthlyRollup,
)


@runtime_checkable
class IPerformanceStore(Protocol):
    """Read-only access to one user's persisted trading data."""

    def fetch_daily_performance(self, user_id: str) -> Sequence[DailyPnlPoint]:
        """Precomputed daily aggregates, ascending by date."""
        ...

    def fetch_monthly_performance(self, user_id: str) -> Sequence[MonthlyRollup]:
        """Precomputed monthly rollups, ascending by (year, month)."""
        ...

    def fetch_aggregate_trade_stats(
        self, user_id: str
    ) -> Optional[AggregateTradeStats]:
        """Trade-level aggregates, or None when never computed."""
        ...

    def fetch_closed_trades(self, user_id: str) -> Sequence[ClosedTrade]:
        """Closed trades; used only when daily aggregates are missing."""
        ...

    def fetch_journal_entries(
        self,
        user_id: str,
        date_range: Optional[tuple[date, date]] = None,
    ) -> Sequence[JournalEntry]:
        """Journal entries, optionally restricted to an inclusive range."""
        ...

    def fetch_goals(self, user_id: str) -> Sequence[Goal]:
        """The user's goals."""
        ...
