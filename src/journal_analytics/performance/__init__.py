"""Performance analytics engine.

Turns a user's stored daily P&L (or, failing that, closed trades) into
equity and drawdown curves, distribution and edge statistics, seeded
Monte Carlo projections, journal correlations and goal evaluations.
Every output is computed on demand and never persisted.

Key components
--------------
SeriesResolver        Daily/monthly series through explicit fallback tiers
build_equity_and_drawdown  Equity curve, drawdown magnitude and duration
velocity_summary      Daily P&L distribution, MTD/YTD, streaks
edge_summary          Expectancy, breakeven win rate, Sharpe/Sortino-like ratios
MonteCarloProjector   Bootstrap projection with per-day percentile band
SeededRandomSource    Reproducible randomness keyed on the user's series
JournalCorrelator     Categorical journal answers vs. daily P&L
GoalEvaluator         Goal current value, status and progress
build_calendar_month  Month grid with streaks
PerformanceEngine     One report per request over an injected store
"""

from .calendar import build_calendar_month
from .engine import PerformanceEngine
from .equity import build_equity_and_drawdown
from .goals import GoalEvaluator
from .journal_insights import JournalCorrelator
from .projection import MonteCarloProjector
from .random_source import SeededRandomSource
from .series import SeriesResolver
from .stats import edge_summary, velocity_summary

__all__ = [
    "build_calendar_month",
    "PerformanceEngine",
    "build_equity_and_drawdown",
    "GoalEvaluator",
    "JournalCorrelator",
    "MonteCarloProjector",
    "SeededRandomSource",
    "SeriesResolver",
    "edge_summary",
    "velocity_summary",
]
