"""Shared fixtures for the journal-analytics test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from journal_analytics.core.clock import SimClock
from journal_analytics.core.config import Settings


@pytest.fixture
def sim_clock() -> SimClock:
    """Return a SimClock at 2024-06-15 12:00 UTC."""
    return SimClock(start=datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with a small simulation count to keep tests quick."""
    return Settings(projection={"n_simulations": 200})
