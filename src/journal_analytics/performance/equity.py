"""Equity curve and drawdown builder.

One forward pass over the daily series yields the running equity
curve, the drawdown-from-peak curve and two independent maxima:

* magnitude: the most negative ``equity - peak`` and the window from
  the day that peak was set (the first day, when the peak is the
  starting zero) to the day the trough is reached;
* duration: the longest stretch (in series steps) spent at or below
  the running peak, measured from episode start to the recovery day
  (or to the last point if the series ends underwater).

The two frequently fall in different periods. Peak starts at 0, so a
series that opens with losses is underwater from day one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..core.models import (
    DailyPnlPoint,
    DateWindow,
    DrawdownSummary,
    EquityCurvePoint,
)


@dataclass
class EquityResult:
    curve: list[EquityCurvePoint] = field(default_factory=list)
    drawdown: DrawdownSummary = field(default_factory=DrawdownSummary)


def build_equity_and_drawdown(
    daily: Sequence[DailyPnlPoint],
    total_pnl: float | None = None,
) -> EquityResult:
    """Build the equity curve and drawdown summary.

    Parameters
    ----------
    daily : sequence of DailyPnlPoint
        Date-ascending daily series.
    total_pnl : float | None
        Numerator of the recovery factor. Defaults to the final equity.
    """
    if not daily:
        return EquityResult()

    equity = 0.0
    peak = 0.0
    peak_idx = -1  # -1: peak is the starting zero
    curve: list[EquityCurvePoint] = []

    max_dd = 0.0
    max_dd_start = 0
    max_dd_end = 0

    in_drawdown = False
    episode_start = 0
    max_duration = 0
    duration_start = 0
    duration_end = 0

    for idx, point in enumerate(daily):
        equity += point.net_pnl

        if equity > peak:
            peak = equity
            peak_idx = idx
            if in_drawdown:
                duration = idx - episode_start
                if duration > max_duration:
                    max_duration = duration
                    duration_start = episode_start
                    duration_end = idx
                in_drawdown = False
        elif not in_drawdown:
            in_drawdown = True
            episode_start = idx

        drawdown = equity - peak
        if drawdown < max_dd:
            max_dd = drawdown
            max_dd_start = max(peak_idx, 0)
            max_dd_end = idx

        curve.append(
            EquityCurvePoint(date=point.date, equity=equity, drawdown=drawdown)
        )

    if in_drawdown:
        last = len(daily) - 1
        duration = last - episode_start
        if duration > max_duration:
            max_duration = duration
            duration_start = episode_start
            duration_end = last

    max_dd_abs = abs(max_dd)
    numerator = equity if total_pnl is None else total_pnl
    summary = DrawdownSummary(
        max_drawdown_abs=max_dd_abs,
        max_drawdown_window=DateWindow(
            start=daily[max_dd_start].date, end=daily[max_dd_end].date
        ),
        max_drawdown_duration_days=max_duration,
        max_drawdown_duration_window=DateWindow(
            start=daily[duration_start].date, end=daily[duration_end].date
        ),
        recovery_factor=numerator / max_dd_abs if max_dd_abs > 0 else 0.0,
    )
    return EquityResult(curve=curve, drawdown=summary)
