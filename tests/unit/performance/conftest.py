"""Shared fixtures for performance engine tests."""

from datetime import date, datetime, timedelta, timezone
from typing import Sequence

import pytest

from journal_analytics.core.models import (
    AggregateTradeStats,
    ClosedTrade,
    DailyPnlPoint,
    Goal,
    JournalEntry,
)
from journal_analytics.storage.memory_store import (
    InMemoryPerformanceStore,
    UserSnapshot,
)


def make_daily(
    pnls: Sequence[float],
    start: date = date(2024, 6, 1),
    trades_per_day: int = 2,
) -> list[DailyPnlPoint]:
    """Consecutive daily points starting at ``start``, one per P&L value."""
    points = []
    for i, pnl in enumerate(pnls):
        points.append(DailyPnlPoint(
            date=start + timedelta(days=i),
            net_pnl=pnl,
            trade_count=trades_per_day,
            win_count=trades_per_day if pnl > 0 else 0,
            loss_count=trades_per_day if pnl < 0 else 0,
            total_volume=1000.0 * trades_per_day,
        ))
    return points


@pytest.fixture
def scenario_daily():
    """Five consecutive days from 2024-06-01: +100, -50, +200, -300, +50."""
    return make_daily([100.0, -50.0, 200.0, -300.0, 50.0])


@pytest.fixture
def stats():
    return AggregateTradeStats(
        total_pnl=0.0,
        total_trades=10,
        win_rate=60.0,
        avg_win=100.0,
        avg_loss=50.0,
    )


@pytest.fixture
def trades():
    return [
        ClosedTrade(trade_date="2024-06-03", realized_pnl=120.0, total_invested=1000.0),
        ClosedTrade(trade_date="2024-06-03", realized_pnl=-20.0, total_invested=500.0),
        # 23:30 in New York on the 3rd is the 4th in UTC
        ClosedTrade(
            trade_date=datetime(2024, 6, 4, 3, 30, tzinfo=timezone.utc),
            realized_pnl=-40.0,
            total_invested=800.0,
        ),
        ClosedTrade(trade_date="2024-06-04T10:00:00Z", realized_pnl=0.0),
        ClosedTrade(trade_date="not a date", realized_pnl=999.0),
    ]


@pytest.fixture
def journal_entries():
    return [
        JournalEntry(date=date(2024, 6, 2), revenge_trading="Yes", sleep_quality="Poor"),
        JournalEntry(date="2024-06-04", revenge_trading="Yes", sleep_quality="Good"),
        JournalEntry(date="2024-06-05", revenge_trading="No", sleep_quality=""),
    ]


@pytest.fixture
def populated_store(scenario_daily, stats, journal_entries):
    store = InMemoryPerformanceStore()
    store.put("user_1", UserSnapshot(
        daily=scenario_daily,
        stats=stats,
        journal=journal_entries,
        goals=[
            Goal(id="g1", type="max_daily_loss", target_value=500.0),
            Goal(id="g2", type="monthly_profit", target_value=1000.0),
            Goal(id="g3", type="win_rate", target_value=50.0, is_active=False),
        ],
    ))
    return store


class FailingStore(InMemoryPerformanceStore):
    """Store whose daily fetch raises, simulating an outage."""

    def fetch_daily_performance(self, user_id):
        raise ConnectionError("database unreachable")


@pytest.fixture
def failing_store():
    return FailingStore()

