"""Forward projections of cumulative P&L.

Two projections are produced for 30, 90 and 252 trading days:

* linear: average daily P&L times the horizon;
* bootstrap Monte Carlo: each run draws ``horizon`` daily outcomes
  uniformly, with replacement, from the historical daily P&L series and
  accumulates them. Terminal outcomes give expected value, median,
  10th/90th percentiles and probability of profit; per-day percentiles
  across all paths give the projection band.

This is a historical-resampling heuristic, not a calibrated model:
days are assumed independent and identically distributed.

Horizons are simulated in ascending order from a single random source,
so the 90-day runs consume the draws after the 30-day runs. Changing
that order changes every result.

Usage::

    projector = MonteCarloProjector(n_simulations=3000)
    rng = SeededRandomSource.for_series("user_1", last_date, len(pnl))
    result = projector.project(pnl, horizon_days=30, rng=rng)
    result.summary.p10, result.band[-1].p90
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ..core.models import (
    MonteCarloProjections,
    ProjectionBandPoint,
    ProjectionSummary,
    Projections,
    SimpleProjections,
)
from .random_source import RandomSource

logger = logging.getLogger(__name__)

HORIZONS: tuple[int, ...] = (30, 90, 252)
BAND_HORIZON = 30

_QUANTILES = [0.1, 0.5, 0.9]


@dataclass
class ProjectionResult:
    summary: ProjectionSummary
    band: list[ProjectionBandPoint] = field(default_factory=list)


def linear_projection(avg_daily: float) -> SimpleProjections:
    return SimpleProjections(
        d30=avg_daily * 30,
        d90=avg_daily * 90,
        d252=avg_daily * 252,
    )


class MonteCarloProjector:
    """Bootstrap Monte Carlo over historical daily P&L.

    Parameters
    ----------
    n_simulations : int
        Number of simulated paths per horizon.  Default 3000.
    """

    def __init__(self, *, n_simulations: int = 3000) -> None:
        if n_simulations < 1:
            raise ValueError("n_simulations must be positive")
        self._n_sims = n_simulations

    @property
    def n_simulations(self) -> int:
        return self._n_sims

    # ------------------------------------------------------------------ #
    # Projection                                                           #
    # ------------------------------------------------------------------ #

    def project(
        self,
        pnl_series: Sequence[float],
        horizon_days: int,
        rng: RandomSource,
    ) -> ProjectionResult:
        """Simulate one horizon.

        An empty history yields an all-zero summary and a zero-filled
        band without consuming any random draws.
        """
        if not pnl_series:
            return ProjectionResult(
                summary=ProjectionSummary(horizon_days=horizon_days),
                band=[ProjectionBandPoint(day=d + 1) for d in range(horizon_days)],
            )

        source = np.asarray(pnl_series, dtype=float)
        n = len(source)

        # Path-major draw order: run 0 day 0..h-1, then run 1, ...
        picks = np.fromiter(
            (rng.index(n) for _ in range(self._n_sims * horizon_days)),
            dtype=np.int64,
            count=self._n_sims * horizon_days,
        ).reshape(self._n_sims, horizon_days)
        paths = np.cumsum(source[picks], axis=1)
        finals = paths[:, -1]

        p10, med, p90 = np.quantile(finals, _QUANTILES)
        summary = ProjectionSummary(
            horizon_days=horizon_days,
            expected=float(finals.mean()),
            median=float(med),
            p10=float(p10),
            p90=float(p90),
            prob_profit=float(np.count_nonzero(finals > 0) / self._n_sims),
        )

        day_q = np.quantile(paths, _QUANTILES, axis=0)
        band = [
            ProjectionBandPoint(
                day=d + 1,
                p10=float(day_q[0, d]),
                p50=float(day_q[1, d]),
                p90=float(day_q[2, d]),
            )
            for d in range(horizon_days)
        ]
        return ProjectionResult(summary=summary, band=band)

    def project_all(
        self,
        pnl_series: Sequence[float],
        rng: RandomSource,
    ) -> MonteCarloProjections:
        """Simulate every standard horizon in ascending order."""
        results = {h: self.project(pnl_series, h, rng) for h in HORIZONS}
        logger.debug(
            "Monte Carlo: %d sims x %s days over %d historical days",
            self._n_sims, list(HORIZONS), len(pnl_series),
        )
        return MonteCarloProjections(
            d30=results[30].summary,
            d90=results[90].summary,
            d252=results[252].summary,
            band30=results[BAND_HORIZON].band,
        )


def build_projections(
    pnl_series: Sequence[float],
    avg_daily: float,
    projector: MonteCarloProjector,
    rng: RandomSource,
) -> Projections:
    return Projections(
        simple=linear_projection(avg_daily),
        monte_carlo=projector.project_all(pnl_series, rng),
    )
