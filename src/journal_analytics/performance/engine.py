"""Performance engine: one analytics report per request.

Wires the stages together over a single read of the storage
collaborator:

    series -> equity/drawdown -> velocity/edge -> projections -> journal

The engine holds no state between requests. Its inputs are treated as
an immutable snapshot for the duration of one computation; a failing
store call aborts the whole request with ``StorageUnavailableError``.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.clock import IClock, WallClock
from ..core.config import Settings
from ..core.interfaces import IPerformanceStore
from ..core.models import (
    AggregateTradeStats,
    CalendarMonth,
    EvaluatedGoal,
    JournalInsights,
    PerformanceReport,
)
from ..observability.logger import new_trace_id
from .calendar import build_calendar_month
from .equity import build_equity_and_drawdown
from .goals import GoalEvaluator
from .journal_insights import JournalCorrelator
from .projection import MonteCarloProjector, build_projections
from .random_source import SeededRandomSource
from .series import NormalizedSeries, SeriesResolver, fetch
from .stats import aggregate_stats_from_trades, edge_summary, velocity_summary

logger = logging.getLogger(__name__)


class PerformanceEngine:
    """Compute performance reports and goal evaluations for a user.

    Parameters
    ----------
    store : IPerformanceStore
        Storage collaborator, constructed by the caller.
    settings : Settings | None
        Analytics settings.  Defaults to ``Settings()``.
    clock : IClock | None
        Source of "today" for MTD/YTD and goal windows.
    resolver : SeriesResolver | None
        Series fallback chain.  Defaults to the standard tiers.
    """

    def __init__(
        self,
        store: IPerformanceStore,
        *,
        settings: Optional[Settings] = None,
        clock: Optional[IClock] = None,
        resolver: Optional[SeriesResolver] = None,
    ) -> None:
        self._store = store
        self._settings = settings or Settings()
        self._clock = clock or WallClock()
        self._resolver = resolver or SeriesResolver()
        self._projector = MonteCarloProjector(
            n_simulations=self._settings.projection.n_simulations
        )
        self._correlator = JournalCorrelator(self._settings.journal.tracked_fields)
        self._goal_evaluator = GoalEvaluator(self._settings.goals)

    # ------------------------------------------------------------------ #
    # Report                                                               #
    # ------------------------------------------------------------------ #

    def build_report(self, user_id: str) -> PerformanceReport:
        """Compute the full report.

        A user without any daily data gets ``has_data=False`` and
        zero-valued summaries rather than an error.
        """
        new_trace_id()
        series = self._resolver.resolve(self._store, user_id)

        if series.is_empty:
            logger.info("No performance data for %s", user_id)
            return self._empty_report(user_id)

        stats = self._aggregate_stats(user_id, series)
        today = self._clock.today()
        pnl = series.pnl_values

        equity = build_equity_and_drawdown(
            series.daily, total_pnl=stats.total_pnl if stats else None
        )
        velocity = velocity_summary(series.daily, today)
        edge = edge_summary(pnl, stats)

        last = series.daily[-1].date
        rng = SeededRandomSource.for_series(user_id, last, len(series.daily))
        projections = build_projections(pnl, velocity.avg_daily, self._projector, rng)

        entries = fetch(
            "fetch_journal_entries",
            user_id,
            self._store.fetch_journal_entries,
            (series.daily[0].date, last),
        )
        journal = self._correlator.correlate(entries, series.daily)

        logger.info(
            "Built report for %s: %d days (%s), max drawdown %.2f",
            user_id,
            len(series.daily),
            series.daily_origin.value,
            equity.drawdown.max_drawdown_abs,
        )
        return PerformanceReport(
            user_id=user_id,
            has_data=True,
            generated_at=self._clock.now(),
            daily_origin=series.daily_origin,
            monthly_origin=series.monthly_origin,
            daily=series.daily,
            monthly=series.monthly,
            equity_curve=equity.curve,
            drawdown_meta=equity.drawdown,
            velocity=velocity,
            edge=edge,
            projections=projections,
            journal=journal,
        )

    # ------------------------------------------------------------------ #
    # Goals & calendar                                                     #
    # ------------------------------------------------------------------ #

    def evaluate_goals(self, user_id: str) -> list[EvaluatedGoal]:
        """Annotate the user's active goals with current value and status."""
        new_trace_id()
        goals = fetch("fetch_goals", user_id, self._store.fetch_goals)
        series = self._resolver.resolve(self._store, user_id)
        return self._goal_evaluator.evaluate_all(
            goals, series.daily, self._clock.today()
        )

    def calendar_month(self, user_id: str, year: int, month: int) -> CalendarMonth:
        new_trace_id()
        series = self._resolver.resolve(self._store, user_id)
        entries = fetch(
            "fetch_journal_entries",
            user_id,
            self._store.fetch_journal_entries,
            None,
        )
        return build_calendar_month(
            series.daily, entries, year, month, monthly=series.monthly
        )

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _aggregate_stats(
        self, user_id: str, series: NormalizedSeries
    ) -> Optional[AggregateTradeStats]:
        stats = fetch(
            "fetch_aggregate_trade_stats",
            user_id,
            self._store.fetch_aggregate_trade_stats,
        )
        if stats is not None:
            return stats

        trades = series.closed_trades
        if trades is None:
            trades = fetch(
                "fetch_closed_trades", user_id, self._store.fetch_closed_trades
            )
        if not trades:
            return None
        logger.info(
            "No aggregate stats for %s; recomputing from %d trades",
            user_id, len(trades),
        )
        return aggregate_stats_from_trades(trades)

    def _empty_report(self, user_id: str) -> PerformanceReport:
        projections = build_projections(
            [], 0.0, self._projector, SeededRandomSource.for_series(user_id, None, 0)
        )
        return PerformanceReport(
            user_id=user_id,
            has_data=False,
            generated_at=self._clock.now(),
            projections=projections,
            journal=JournalInsights(
                insights={name: [] for name in self._settings.journal.tracked_fields}
            ),
        )
