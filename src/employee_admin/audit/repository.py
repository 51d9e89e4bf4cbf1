from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence, Tuple

from .model import ActivityFilter, ActivityLogEntry, ActivityStat, NewActivity


class ActivityLogRepository(Protocol):
    """Append-only store: entries are never updated or deleted."""

    def insert(self, entry: NewActivity) -> int:
        raise NotImplementedError

    def query(self, flt: ActivityFilter, *, limit: int, offset: int) -> Tuple[Sequence[ActivityLogEntry], int]:
        """Return (page newest-first, total rows matching flt)."""

        raise NotImplementedError

    def stats_since(self, since: datetime) -> Sequence[ActivityStat]:
        """Counts per (action, calendar day), day desc then count desc."""

        raise NotImplementedError
