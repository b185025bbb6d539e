"""Tests for the in-memory store and JSON snapshot loading."""

import json
from datetime import date

import pytest

from journal_analytics.core.errors import SnapshotFormatError
from journal_analytics.core.interfaces import IPerformanceStore
from journal_analytics.core.models import JournalEntry
from journal_analytics.storage.memory_store import (
    InMemoryPerformanceStore,
    UserSnapshot,
)

SNAPSHOT = {
    "users": {
        "user_1": {
            "daily": [
                {"date": "2024-06-02", "net_pnl": -50, "trade_count": 1, "loss_count": 1},
                {"date": "2024-06-01", "net_pnl": 100, "trade_count": 2, "win_count": 2},
            ],
            "stats": {"total_pnl": 50, "total_trades": 3, "win_rate": 66.7},
            "journal": [{"date": "2024-06-01", "revenge_trading": "No"}],
            "goals": [{"id": "g", "type": "win_rate", "target_value": 60}],
        }
    }
}


def write_json(tmp_path, payload):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(payload))
    return path


class TestInMemoryStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryPerformanceStore(), IPerformanceStore)

    def test_unknown_user_is_empty(self):
        store = InMemoryPerformanceStore()
        assert store.fetch_daily_performance("x") == []
        assert store.fetch_aggregate_trade_stats("x") is None
        assert store.fetch_goals("x") == []

    def test_journal_range_filter(self):
        store = InMemoryPerformanceStore()
        store.put("u", UserSnapshot(journal=[
            JournalEntry(date="2024-05-31"),
            JournalEntry(date="2024-06-01T22:00:00Z"),
            JournalEntry(date="2024-06-05"),
            JournalEntry(date="not a date"),
        ]))
        entries = store.fetch_journal_entries(
            "u", (date(2024, 6, 1), date(2024, 6, 4))
        )
        assert [e.date for e in entries] == ["2024-06-01T22:00:00Z", "not a date"]
        assert len(store.fetch_journal_entries("u")) == 4


class TestSnapshotFile:
    def test_load(self, tmp_path):
        store = InMemoryPerformanceStore.from_snapshot_file(write_json(tmp_path, SNAPSHOT))
        daily = store.fetch_daily_performance("user_1")
        assert [p.date for p in daily] == [date(2024, 6, 1), date(2024, 6, 2)]
        assert store.fetch_aggregate_trade_stats("user_1").win_rate == 66.7
        assert store.fetch_goals("user_1")[0].id == "g"

    def test_missing_users_key(self, tmp_path):
        with pytest.raises(SnapshotFormatError, match="users"):
            InMemoryPerformanceStore.from_snapshot_file(write_json(tmp_path, {"x": 1}))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotFormatError):
            InMemoryPerformanceStore.from_snapshot_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotFormatError):
            InMemoryPerformanceStore.from_snapshot_file(tmp_path / "absent.json")

    def test_invalid_user_data(self, tmp_path):
        payload = {"users": {"u": {"daily": [{"date": "2024-06-01", "trade_count": -1}]}}}
        with pytest.raises(SnapshotFormatError, match="user u"):
            InMemoryPerformanceStore.from_snapshot_file(write_json(tmp_path, payload))
