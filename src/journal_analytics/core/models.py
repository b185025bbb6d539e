"""Core domain models used across the analytics engine.

Input rows (what the storage collaborator hands over) and every derived
summary the engine produces. Derived models are computed per request
and never persisted.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .dates import to_utc_date
from .enums import GoalStatus, GoalTimeframe, GoalType, SeriesOrigin

# Raw stored date values (bare dates, timestamps or ISO strings)
DateLike = Union[datetime, date, str, None]


# ---------------------------------------------------------------------------
# Canonical series
# ---------------------------------------------------------------------------

class DailyPnlPoint(BaseModel):
    """One UTC calendar day's aggregate trading outcome."""

    date: date
    net_pnl: float = 0.0
    trade_count: int = Field(default=0, ge=0)
    win_count: int = Field(default=0, ge=0)
    loss_count: int = Field(default=0, ge=0)
    total_volume: float = Field(default=0.0, ge=0.0)

    @field_validator("date", mode="before")
    @classmethod
    def _utc_date_only(cls, v: object) -> object:
        parsed = to_utc_date(v)
        return parsed if parsed is not None else v

    @model_validator(mode="after")
    def _counts_consistent(self) -> "DailyPnlPoint":
        # Flat trades count toward neither wins nor losses
        if self.win_count + self.loss_count > self.trade_count:
            raise ValueError(
                f"win_count + loss_count exceeds trade_count on {self.date}"
            )
        return self


class MonthlyRollup(BaseModel):
    """One calendar month's aggregate."""

    year: int
    month: int = Field(ge=1, le=12)
    net_pnl: float = 0.0
    trade_count: int = 0
    win_count: int = 0
    loss_count: int = 0
    green_days: int = 0
    red_days: int = 0
    best_day: Optional[float] = None
    worst_day: Optional[float] = None


# ---------------------------------------------------------------------------
# Storage-side input rows
# ---------------------------------------------------------------------------

class ClosedTrade(BaseModel):
    """A closed trade as stored. Dates stay raw until normalization."""

    trade_date: DateLike = None
    realized_pnl: Optional[float] = None
    total_invested: Optional[float] = None
    ticker: str = ""


class AggregateTradeStats(BaseModel):
    """Trade-level aggregates maintained by the stats recomputation pipeline.

    ``win_rate`` is a percentage (0-100). ``avg_loss`` is a positive
    magnitude.
    """

    total_pnl: float = 0.0
    total_trades: int = 0
    win_rate: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    profit_factor: float = 0.0
    largest_win: Optional[float] = None
    largest_loss: Optional[float] = None


class JournalEntry(BaseModel):
    """A daily journal entry with categorical self-assessment answers."""

    model_config = {"extra": "allow"}

    date: DateLike = None
    sleep_duration: Optional[str] = None
    sleep_quality: Optional[str] = None
    caffeine: Optional[str] = None
    trading_quality: Optional[str] = None
    revenge_trading: Optional[str] = None
    overtrading: Optional[str] = None
    distractions: Optional[str] = None

    def answer(self, field_name: str) -> Optional[str]:
        """Return a categorical answer, or None when unset or empty."""
        value = getattr(self, field_name, None)
        if value is None:
            value = (self.model_extra or {}).get(field_name)
        if value is None or value == "":
            return None
        return str(value)


class Goal(BaseModel):
    """A user-owned goal. Read-only to the engine."""

    id: str = ""
    name: str = ""
    type: GoalType
    target_value: float = Field(ge=0.0)
    timeframe: GoalTimeframe = GoalTimeframe.MONTHLY
    is_active: bool = True


class EvaluatedGoal(Goal):
    """A goal annotated with its request-time evaluation."""

    current_value: float = 0.0
    status: GoalStatus = GoalStatus.ON_TRACK
    progress_pct: float = 0.0


# ---------------------------------------------------------------------------
# Derived summaries
# ---------------------------------------------------------------------------

class EquityCurvePoint(BaseModel):
    date: date
    equity: float
    drawdown: float  # equity - running peak, always <= 0


class DateWindow(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None


class DrawdownSummary(BaseModel):
    max_drawdown_abs: float = 0.0
    max_drawdown_window: DateWindow = Field(default_factory=DateWindow)
    max_drawdown_duration_days: int = 0
    max_drawdown_duration_window: DateWindow = Field(default_factory=DateWindow)
    recovery_factor: float = 0.0


class StreakSummary(BaseModel):
    current_win_streak: int = 0
    current_loss_streak: int = 0
    max_win_streak: int = 0
    max_loss_streak: int = 0


class VelocitySummary(BaseModel):
    avg_daily: float = 0.0
    median_daily: float = 0.0
    green_days: int = 0
    red_days: int = 0
    flat_days: int = 0
    green_rate: float = 0.0
    avg_trades_per_day: float = 0.0
    best_day: float = 0.0
    worst_day: float = 0.0
    mtd: float = 0.0
    ytd: float = 0.0
    streaks: StreakSummary = Field(default_factory=StreakSummary)


class EdgeSummary(BaseModel):
    """Per-trade edge and same-unit (non-annualized) risk ratios."""

    expectancy: float = 0.0
    break_even_win_rate: float = 0.0
    daily_std: float = 0.0
    downside_dev: float = 0.0
    sharpe_like: float = 0.0
    sortino_like: float = 0.0


class ProjectionSummary(BaseModel):
    horizon_days: int
    expected: float = 0.0
    median: float = 0.0
    p10: float = 0.0
    p90: float = 0.0
    prob_profit: float = 0.0  # 0..1


class ProjectionBandPoint(BaseModel):
    day: int  # 1-based
    p10: float = 0.0
    p50: float = 0.0
    p90: float = 0.0


class SimpleProjections(BaseModel):
    d30: float = 0.0
    d90: float = 0.0
    d252: float = 0.0


class MonteCarloProjections(BaseModel):
    d30: ProjectionSummary
    d90: ProjectionSummary
    d252: ProjectionSummary
    band30: list[ProjectionBandPoint] = Field(default_factory=list)


class Projections(BaseModel):
    simple: SimpleProjections
    monte_carlo: MonteCarloProjections


class JournalInsightGroup(BaseModel):
    """Statistics of days on which one categorical answer was logged.

    Correlational only.
    """

    label: str
    value: str
    n: int
    avg_pnl: float
    green_rate: float


class JournalInsights(BaseModel):
    # field name -> groups, in tracked-field order
    insights: dict[str, list[JournalInsightGroup]] = Field(default_factory=dict)


class CalendarDay(BaseModel):
    date: date
    day: int
    net_pnl: float = 0.0
    trade_count: int = 0
    has_trades: bool = False
    has_journal: bool = False


class CalendarMonth(BaseModel):
    year: int
    month: int
    days: list[CalendarDay] = Field(default_factory=list)
    rollup: Optional[MonthlyRollup] = None
    streaks: StreakSummary = Field(default_factory=StreakSummary)


# ---------------------------------------------------------------------------
# Aggregate result
# ---------------------------------------------------------------------------

class PerformanceReport(BaseModel):
    """One complete, internally consistent analytics result.

    ``has_data`` False is the explicit no-data signal; every summary is
    then zero-valued or empty.
    """

    user_id: str
    has_data: bool
    generated_at: datetime
    daily_origin: SeriesOrigin = SeriesOrigin.EMPTY
    monthly_origin: SeriesOrigin = SeriesOrigin.EMPTY
    daily: list[DailyPnlPoint] = Field(default_factory=list)
    monthly: list[MonthlyRollup] = Field(default_factory=list)
    equity_curve: list[EquityCurvePoint] = Field(default_factory=list)
    drawdown_meta: DrawdownSummary = Field(default_factory=DrawdownSummary)
    velocity: VelocitySummary = Field(default_factory=VelocitySummary)
    edge: EdgeSummary = Field(default_factory=EdgeSummary)
    projections: Projections
    journal: JournalInsights = Field(default_factory=JournalInsights)
