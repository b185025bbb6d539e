"""Goal evaluator.

Annotates each goal with its current value, status and display
progress, computed at read time from the normalized daily series.
Nothing is persisted; the status is a pure function of the data in the
goal's timeframe window (UTC today, ISO week-to-date or month-to-date).

Polarity comes from the goal type. Higher-is-better goals (profit, win
rate, consistency) are on track at ``target * on_track_ratio`` and up,
broken below ``target * broken_ratio``. Lower-is-better goals (max
daily loss, max trades per day) are on track below
``target * on_track_ratio`` and broken from ``target * broken_ratio``
up. The ratios are configuration (``GoalConfig``).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..core.config import GoalConfig, GoalThresholds
from ..core.dates import month_start, week_start
from ..core.enums import GoalStatus, GoalTimeframe, GoalType
from ..core.models import DailyPnlPoint, EvaluatedGoal, Goal

logger = logging.getLogger(__name__)


def goal_window(
    daily: Sequence[DailyPnlPoint],
    timeframe: GoalTimeframe,
    today: date,
) -> list[DailyPnlPoint]:
    """Daily points inside the timeframe window ending ``today``."""
    if timeframe == GoalTimeframe.DAILY:
        start = today
    elif timeframe == GoalTimeframe.WEEKLY:
        start = week_start(today)
    else:
        start = month_start(today)
    return [p for p in daily if start <= p.date <= today]


def current_value(goal_type: GoalType, window: Sequence[DailyPnlPoint]) -> float:
    if goal_type == GoalType.MONTHLY_PROFIT:
        return sum(p.net_pnl for p in window)
    if goal_type == GoalType.MAX_DAILY_LOSS:
        worst = min((p.net_pnl for p in window), default=0.0)
        return -worst if worst < 0 else 0.0
    if goal_type == GoalType.MAX_TRADES_PER_DAY:
        return float(max((p.trade_count for p in window), default=0))
    if goal_type == GoalType.WIN_RATE:
        trades = sum(p.trade_count for p in window)
        wins = sum(p.win_count for p in window)
        return wins / trades * 100.0 if trades > 0 else 0.0
    if goal_type == GoalType.CONSISTENCY:
        if not window:
            return 0.0
        green = sum(1 for p in window if p.net_pnl > 0)
        return green / len(window) * 100.0
    raise ValueError(f"Unknown goal type: {goal_type}")


def classify(
    goal_type: GoalType,
    current: float,
    target: float,
    thresholds: GoalThresholds,
) -> GoalStatus:
    if goal_type.higher_is_better:
        if current >= target * thresholds.on_track_ratio:
            return GoalStatus.ON_TRACK
        if current < target * thresholds.broken_ratio:
            return GoalStatus.BROKEN
        return GoalStatus.AT_RISK

    if current >= target * thresholds.broken_ratio:
        return GoalStatus.BROKEN
    if current < target * thresholds.on_track_ratio:
        return GoalStatus.ON_TRACK
    return GoalStatus.AT_RISK


def progress_pct(goal_type: GoalType, current: float, target: float) -> float:
    """Display progress in percent; 0 whenever the target is 0."""
    if target <= 0:
        return 0.0
    if goal_type.higher_is_better:
        return min(current / target, 1.0) * 100.0
    if current >= target:
        return 0.0
    return (target - current) / target * 100.0


class GoalEvaluator:
    """Evaluate goals against the daily series.

    Parameters
    ----------
    config : GoalConfig
        Per-type status thresholds.
    """

    def __init__(self, config: GoalConfig | None = None) -> None:
        self._config = config or GoalConfig()

    def evaluate(
        self,
        goal: Goal,
        daily: Sequence[DailyPnlPoint],
        today: date,
    ) -> EvaluatedGoal:
        window = goal_window(daily, goal.timeframe, today)
        current = current_value(goal.type, window)
        status = classify(
            goal.type, current, goal.target_value, self._config.for_type(goal.type)
        )
        return EvaluatedGoal(
            **goal.model_dump(),
            current_value=current,
            status=status,
            progress_pct=progress_pct(goal.type, current, goal.target_value),
        )

    def evaluate_all(
        self,
        goals: Sequence[Goal],
        daily: Sequence[DailyPnlPoint],
        today: date,
    ) -> list[EvaluatedGoal]:
        """Evaluate active goals, preserving input order."""
        evaluated = [
            self.evaluate(goal, daily, today) for goal in goals if goal.is_active
        ]
        logger.debug(
            "Evaluated %d goals: %s",
            len(evaluated),
            {g.id or g.type.value: g.status.value for g in evaluated},
        )
        return evaluated
