"""In-memory performance store.

Reference implementation of ``IPerformanceStore`` for the CLI and
tests. Data is loaded per user, either programmatically or from a JSON
snapshot file shaped as::

    {
      "users": {
        "<user_id>": {
          "daily": [...], "monthly": [...], "stats": {...} | null,
          "trades": [...], "journal": [...], "goals": [...]
        }
      }
    }
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from journal_analytics.core.dates import to_utc_date
from journal_analytics.core.errors import SnapshotFormatError
from journal_analytics.core.models import (
    AggregateTradeStats,
    ClosedTrade,
    DailyPnlPoint,
    Goal,
    JournalEntry,
    MonthlyRollup,
)

logger = logging.getLogger(__name__)


class UserSnapshot(BaseModel):
    """Everything stored for one user."""

    daily: list[DailyPnlPoint] = Field(default_factory=list)
    monthly: list[MonthlyRollup] = Field(default_factory=list)
    stats: Optional[AggregateTradeStats] = None
    trades: list[ClosedTrade] = Field(default_factory=list)
    journal: list[JournalEntry] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)


class InMemoryPerformanceStore:
    """Dict-backed store keyed by user id. Unknown users read as empty."""

    def __init__(self, users: dict[str, UserSnapshot] | None = None) -> None:
        self._users: dict[str, UserSnapshot] = dict(users or {})

    def put(self, user_id: str, snapshot: UserSnapshot) -> None:
        self._users[user_id] = snapshot

    def _get(self, user_id: str) -> UserSnapshot:
        return self._users.get(user_id) or UserSnapshot()

    # -- IPerformanceStore ---------------------------------------------

    def fetch_daily_performance(self, user_id: str) -> list[DailyPnlPoint]:
        return sorted(self._get(user_id).daily, key=lambda p: p.date)

    def fetch_monthly_performance(self, user_id: str) -> list[MonthlyRollup]:
        return sorted(self._get(user_id).monthly, key=lambda m: (m.year, m.month))

    def fetch_aggregate_trade_stats(
        self, user_id: str
    ) -> Optional[AggregateTradeStats]:
        return self._get(user_id).stats

    def fetch_closed_trades(self, user_id: str) -> list[ClosedTrade]:
        return list(self._get(user_id).trades)

    def fetch_journal_entries(
        self,
        user_id: str,
        date_range: Optional[tuple[date, date]] = None,
    ) -> list[JournalEntry]:
        entries = self._get(user_id).journal
        if date_range is None:
            return list(entries)
        start, end = date_range
        result = []
        for entry in entries:
            day = to_utc_date(entry.date)
            # Unparseable dates are passed through; the correlator drops them
            if day is None or start <= day <= end:
                result.append(entry)
        return result

    def fetch_goals(self, user_id: str) -> list[Goal]:
        return list(self._get(user_id).goals)

    # -- Loading -------------------------------------------------------

    @classmethod
    def from_snapshot_file(cls, path: str | Path) -> "InMemoryPerformanceStore":
        """Load a JSON snapshot file.

        Raises:
            SnapshotFormatError: if the file is not valid JSON or does
                not match the snapshot shape.
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise SnapshotFormatError(f"Cannot read snapshot {path}: {exc}") from exc

        if not isinstance(raw, dict) or not isinstance(raw.get("users"), dict):
            raise SnapshotFormatError(f"Snapshot {path} has no 'users' mapping")

        users: dict[str, UserSnapshot] = {}
        for user_id, data in raw["users"].items():
            try:
                users[user_id] = UserSnapshot.model_validate(data)
            except ValidationError as exc:
                raise SnapshotFormatError(
                    f"Invalid data for user {user_id} in {path}: {exc}"
                ) from exc

        logger.info("Loaded snapshot %s with %d users", path, len(users))
        return cls(users)
