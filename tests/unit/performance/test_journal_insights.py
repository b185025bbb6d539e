"""Tests for JournalCorrelator: journal answers vs. daily P&L."""

from datetime import date, datetime, timezone

import pytest

from journal_analytics.core.config import JournalConfig
from journal_analytics.core.models import JournalEntry
from journal_analytics.performance.journal_insights import (
    JournalCorrelator,
    group_answers,
)

from .conftest import make_daily


@pytest.fixture
def correlator():
    return JournalCorrelator(JournalConfig().tracked_fields)


class TestRevengeTradingScenario:
    def test_groups(self, correlator):
        daily = make_daily([-40.0, -60.0, 80.0])
        entries = [
            JournalEntry(date=date(2024, 6, 1), revenge_trading="Yes"),
            JournalEntry(date=date(2024, 6, 2), revenge_trading="Yes"),
            JournalEntry(date=date(2024, 6, 3), revenge_trading="No"),
        ]
        groups = correlator.correlate(entries, daily).insights["revenge_trading"]

        yes, no = groups
        assert (yes.label, yes.value, yes.n) == ("Revenge Trading", "Yes", 2)
        assert yes.avg_pnl == pytest.approx(-50.0)
        assert yes.green_rate == 0.0
        assert (no.value, no.n, no.avg_pnl, no.green_rate) == ("No", 1, 80.0, 1.0)


class TestJoin:
    def test_unmatched_and_unset_rows_dropped(self, correlator, scenario_daily, journal_entries):
        insights = correlator.correlate(journal_entries, scenario_daily).insights
        revenge = insights["revenge_trading"]
        assert [(g.value, g.n) for g in revenge] == [("Yes", 2), ("No", 1)]
        # Empty answer on 2024-06-05 is skipped
        sleep = insights["sleep_quality"]
        assert sum(g.n for g in sleep) == 2

    def test_entries_without_trading_day(self, correlator):
        daily = make_daily([10.0])
        entries = [JournalEntry(date="2024-07-01", caffeine="High")]
        assert correlator.correlate(entries, daily).insights["caffeine"] == []

    def test_unparseable_dates_skipped(self, correlator):
        daily = make_daily([10.0])
        entries = [
            JournalEntry(date="yesterday", caffeine="High"),
            JournalEntry(date=None, caffeine="High"),
            JournalEntry(date="2024-06-01", caffeine="Low"),
        ]
        groups = correlator.correlate(entries, daily).insights["caffeine"]
        assert [(g.value, g.n) for g in groups] == [("Low", 1)]

    def test_timestamp_dates_use_utc_day(self, correlator):
        daily = make_daily([25.0])
        entries = [
            JournalEntry(
                date=datetime(2024, 6, 1, 0, 0, tzinfo=timezone.utc),
                overtrading="No",
            )
        ]
        groups = correlator.correlate(entries, daily).insights["overtrading"]
        assert groups[0].avg_pnl == 25.0

    def test_all_tracked_fields_present_in_order(self, correlator):
        insights = correlator.correlate([], make_daily([1.0])).insights
        assert list(insights) == [
            "trading_quality",
            "revenge_trading",
            "overtrading",
            "sleep_quality",
            "caffeine",
        ]

    def test_extra_fields_can_be_tracked(self):
        correlator = JournalCorrelator({"distractions": "Distractions"})
        entries = [JournalEntry(date="2024-06-01", distractions="Phone")]
        groups = correlator.correlate(entries, make_daily([5.0])).insights["distractions"]
        assert groups[0].label == "Distractions"


class TestGroupOrdering:
    def test_sorted_by_n_then_avg_pnl(self):
        pairs = [
            ("Good", 10.0),
            ("Poor", -10.0),
            ("Poor", -30.0),
            ("Fair", 50.0),
        ]
        groups = group_answers("Sleep Quality", pairs)
        assert [g.value for g in groups] == ["Poor", "Fair", "Good"]
        assert groups[0].avg_pnl == -20.0
