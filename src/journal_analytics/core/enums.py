"""Enumerations used across the analytics engine."""

from enum import Enum


class GoalType(str, Enum):
    MONTHLY_PROFIT = "monthly_profit"
    WIN_RATE = "win_rate"
    CONSISTENCY = "consistency"  # % green days
    MAX_DAILY_LOSS = "max_daily_loss"
    MAX_TRADES_PER_DAY = "max_trades_per_day"

    @property
    def higher_is_better(self) -> bool:
        return self not in (GoalType.MAX_DAILY_LOSS, GoalType.MAX_TRADES_PER_DAY)


class GoalStatus(str, Enum):
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    BROKEN = "broken"


class GoalTimeframe(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class SeriesOrigin(str, Enum):
    """Which tier of the fallback chain produced a series."""

    PRECOMPUTED = "precomputed"
    DERIVED_FROM_DAILY = "derived_from_daily"
    DERIVED_FROM_TRADES = "derived_from_trades"
    EMPTY = "empty"
