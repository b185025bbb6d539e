"""Velocity and edge statistics over the daily series.

Distributional summaries use the sample (``n - 1``) convention and
fall back to 0 wherever a denominator would be 0. Sharpe-like and
Sortino-like ratios are same-unit ratios of daily P&L: no
annualization and no risk-free rate.

Edge figures (expectancy, breakeven win rate) consume the trade-level
aggregates maintained by the stats pipeline; they are not recomputed
from the daily series.
"""

from __future__ import annotations

import math
import statistics
from datetime import date
from typing import Sequence

from ..core.models import (
    AggregateTradeStats,
    ClosedTrade,
    DailyPnlPoint,
    EdgeSummary,
    StreakSummary,
    VelocitySummary,
)


# ---------------------------------------------------------------------- #
# Primitives                                                               #
# ---------------------------------------------------------------------- #

def mean(values: Sequence[float]) -> float:
    return statistics.fmean(values) if values else 0.0


def median(values: Sequence[float]) -> float:
    return statistics.median(values) if values else 0.0


def sample_std(values: Sequence[float]) -> float:
    """Standard deviation with ``n - 1`` divisor; 0 for fewer than 2 values."""
    return statistics.stdev(values) if len(values) > 1 else 0.0


def downside_deviation(values: Sequence[float]) -> float:
    """Root of summed squared losses over ``n - 1`` losing days.

    Only strictly negative days contribute, measured from zero.
    """
    losses = [v for v in values if v < 0]
    if len(losses) < 2:
        return 0.0
    return math.sqrt(sum(v * v for v in losses) / (len(losses) - 1))


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


# ---------------------------------------------------------------------- #
# Streaks                                                                  #
# ---------------------------------------------------------------------- #

def streaks(daily: Sequence[DailyPnlPoint]) -> StreakSummary:
    """Consecutive green/red day streaks; a flat day resets both."""
    summary = StreakSummary()
    win = loss = 0
    for point in daily:
        if point.net_pnl > 0:
            win += 1
            loss = 0
            summary.max_win_streak = max(summary.max_win_streak, win)
        elif point.net_pnl < 0:
            loss += 1
            win = 0
            summary.max_loss_streak = max(summary.max_loss_streak, loss)
        else:
            win = loss = 0
    summary.current_win_streak = win
    summary.current_loss_streak = loss
    return summary


# ---------------------------------------------------------------------- #
# Summaries                                                                #
# ---------------------------------------------------------------------- #

def velocity_summary(
    daily: Sequence[DailyPnlPoint],
    today: date,
) -> VelocitySummary:
    """Daily P&L velocity with month- and year-to-date sums.

    MTD/YTD filter the already-loaded series to the UTC month/year of
    ``today``.
    """
    if not daily:
        return VelocitySummary()

    pnl = [p.net_pnl for p in daily]
    n = len(pnl)
    green = sum(1 for x in pnl if x > 0)
    red = sum(1 for x in pnl if x < 0)

    return VelocitySummary(
        avg_daily=mean(pnl),
        median_daily=median(pnl),
        green_days=green,
        red_days=red,
        flat_days=n - green - red,
        green_rate=green / n,
        avg_trades_per_day=mean([p.trade_count for p in daily]),
        best_day=max(pnl),
        worst_day=min(pnl),
        mtd=sum(
            p.net_pnl for p in daily
            if p.date.year == today.year and p.date.month == today.month
        ),
        ytd=sum(p.net_pnl for p in daily if p.date.year == today.year),
        streaks=streaks(daily),
    )


def edge_summary(
    pnl: Sequence[float],
    stats: AggregateTradeStats | None,
) -> EdgeSummary:
    """Expectancy, breakeven win rate and same-unit risk ratios."""
    stats = stats or AggregateTradeStats()
    win_rate = stats.win_rate / 100.0
    avg_win = stats.avg_win
    avg_loss = stats.avg_loss

    avg = mean(pnl)
    daily_std = sample_std(pnl)
    downside = downside_deviation(pnl)

    return EdgeSummary(
        expectancy=win_rate * avg_win - (1.0 - win_rate) * avg_loss,
        break_even_win_rate=safe_ratio(avg_loss, avg_win + avg_loss),
        daily_std=daily_std,
        downside_dev=downside,
        sharpe_like=safe_ratio(avg, daily_std),
        sortino_like=safe_ratio(avg, downside),
    )


def aggregate_stats_from_trades(
    trades: Sequence[ClosedTrade],
) -> AggregateTradeStats:
    """Recompute trade-level aggregates from closed trades.

    Used when the stats pipeline has not produced aggregates yet.
    """
    if not trades:
        return AggregateTradeStats()

    pnl = [t.realized_pnl or 0.0 for t in trades]
    wins = [x for x in pnl if x > 0]
    losses = [x for x in pnl if x < 0]
    avg_win = mean(wins)
    avg_loss = abs(mean(losses))

    return AggregateTradeStats(
        total_pnl=sum(pnl),
        total_trades=len(pnl),
        win_rate=len(wins) / len(pnl) * 100.0,
        avg_win=avg_win,
        avg_loss=avg_loss,
        profit_factor=safe_ratio(sum(wins), abs(sum(losses))),
        largest_win=max(wins) if wins else None,
        largest_loss=abs(min(losses)) if losses else None,
    )
