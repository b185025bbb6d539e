"""Test model validation for stored rows and goals."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from journal_analytics.core.enums import GoalType
from journal_analytics.core.models import DailyPnlPoint, JournalEntry


class TestDailyPnlPoint:
    def test_timestamp_normalized_to_utc_date(self):
        point = DailyPnlPoint(date="2024-06-01T23:00:00-02:00", net_pnl=1.0)
        assert point.date == date(2024, 6, 2)

    def test_datetime_input(self):
        point = DailyPnlPoint(date=datetime(2024, 6, 1, 12, tzinfo=timezone.utc))
        assert point.date == date(2024, 6, 1)

    def test_counts_must_fit_trade_count(self):
        with pytest.raises(ValidationError, match="exceeds trade_count"):
            DailyPnlPoint(date="2024-06-01", trade_count=1, win_count=1, loss_count=1)

    def test_flat_trades_allowed(self):
        point = DailyPnlPoint(date="2024-06-01", trade_count=3, win_count=1, loss_count=1)
        assert point.trade_count == 3

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            DailyPnlPoint(date="2024-06-01", trade_count=-1)

    def test_bad_date_rejected(self):
        with pytest.raises(ValidationError):
            DailyPnlPoint(date="not a date")


class TestJournalEntry:
    def test_answer_ignores_empty(self):
        entry = JournalEntry(date="2024-06-01", sleep_quality="", caffeine="High")
        assert entry.answer("sleep_quality") is None
        assert entry.answer("caffeine") == "High"

    def test_answer_reads_extra_fields(self):
        entry = JournalEntry(date="2024-06-01", mood="Calm")
        assert entry.answer("mood") == "Calm"
        assert entry.answer("unknown") is None


class TestGoalType:
    def test_polarity(self):
        assert GoalType.MONTHLY_PROFIT.higher_is_better
        assert GoalType.CONSISTENCY.higher_is_better
        assert not GoalType.MAX_DAILY_LOSS.higher_is_better
        assert not GoalType.MAX_TRADES_PER_DAY.higher_is_better
