"""Property tests: equity curve, drawdown and projection invariants.

Uses hypothesis to check, for arbitrary daily P&L series, that the
equity curve is the running sum of daily P&L at every point, drawdown never goes positive,
the reported maximum matches the curve, and Monte Carlo quantiles are
ordered.
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings, strategies as st

from journal_analytics.core.models import DailyPnlPoint
from journal_analytics.performance.equity import build_equity_and_drawdown
from journal_analytics.performance.projection import MonteCarloProjector
from journal_analytics.performance.random_source import SeededRandomSource
from journal_analytics.performance.stats import downside_deviation, streaks

pnl_values = st.lists(
    st.floats(min_value=-10_000, max_value=10_000, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=60,
)


def to_daily(values):
    start = date(2024, 1, 1)
    return [
        DailyPnlPoint(date=start + timedelta(days=i), net_pnl=v, trade_count=1)
        for i, v in enumerate(values)
    ]


@given(values=pnl_values)
@settings(max_examples=200)
def test_equity_is_running_sum(values):
    result = build_equity_and_drawdown(to_daily(values))
    assert len(result.curve) == len(values)
    for i, point in enumerate(result.curve):
        assert point.equity == pytest.approx(sum(values[: i + 1]), abs=1e-6)


@given(values=pnl_values)
@settings(max_examples=200)
def test_drawdown_never_positive(values):
    result = build_equity_and_drawdown(to_daily(values))
    assert all(p.drawdown <= 0 for p in result.curve)


@given(values=pnl_values)
@settings(max_examples=200)
def test_max_drawdown_matches_curve(values):
    daily = to_daily(values)
    result = build_equity_and_drawdown(daily)
    dd = result.drawdown

    assert dd.max_drawdown_abs == pytest.approx(-min(p.drawdown for p in result.curve))
    assert dd.max_drawdown_abs >= 0
    assert dd.max_drawdown_window.start <= dd.max_drawdown_window.end
    assert 0 <= dd.max_drawdown_duration_days <= len(daily) - 1
    if dd.max_drawdown_abs == 0:
        assert dd.recovery_factor == 0.0


@given(values=pnl_values)
@settings(max_examples=200)
def test_streaks_bounded(values):
    summary = streaks(to_daily(values))
    assert summary.max_win_streak <= sum(1 for v in values if v > 0)
    assert summary.max_loss_streak <= sum(1 for v in values if v < 0)
    assert summary.current_win_streak == 0 or summary.current_loss_streak == 0


@given(values=pnl_values)
def test_downside_deviation_non_negative(values):
    assert downside_deviation(values) >= 0.0


@given(
    values=pnl_values,
    seed=st.integers(min_value=0, max_value=2**32),
)
@settings(max_examples=25, deadline=None)
def test_projection_quantiles_ordered(values, seed):
    projector = MonteCarloProjector(n_simulations=40)
    result = projector.project(values, 30, SeededRandomSource(seed))

    summary = result.summary
    assert summary.p10 <= summary.median <= summary.p90
    assert 0.0 <= summary.prob_profit <= 1.0
    assert len(result.band) == 30
    for point in result.band:
        assert point.p10 <= point.p50 <= point.p90
