from __future__ import annotations

import logging
from concurrent.futures import Executor
from datetime import date, timedelta
from typing import Optional, Protocol

from ..common.datetime_utils import now_local
from ..core.constants import ANONYMOUS_USERNAME, DEFAULT_LOG_LIMIT, DEFAULT_STATS_DAYS, MAX_LOG_LIMIT, MAX_STATS_DAYS
from ..core.exceptions import ValidationError
from .model import ActivityFilter, ActivityPage, ActivityStat, Actor, NewActivity
from .repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class AuditWriter(Protocol):
    """Best-effort side effect: never raises, never blocks the caller's result."""

    def record(
        self,
        user_id: Optional[int],
        username: Optional[str],
        user_type: Optional[str],
        action: str,
        description: str,
        ip_address: Optional[str] = None,
    ) -> None:
        raise NotImplementedError


class AuditLog(AuditWriter):
    """Fire-and-forget activity writer.

    With an executor the insert runs on a worker thread and the caller returns immediately.
    Without one the insert runs inline, still swallowing failures. Either way a failed write
    is reported to the operational log only.
    """

    def __init__(self, activity: ActivityLogRepository, *, executor: Optional[Executor] = None):
        self._activity = activity
        self._executor = executor

    def record(
        self,
        user_id: Optional[int],
        username: Optional[str],
        user_type: Optional[str],
        action: str,
        description: str,
        ip_address: Optional[str] = None,
    ) -> None:
        entry = NewActivity(
            user_id=user_id,
            username=username or ANONYMOUS_USERNAME,
            user_type=user_type or "employee",
            action=action,
            description=description,
            ip_address=ip_address,
        )
        self._dispatch(entry)

    def record_for(self, actor: Optional[Actor], action: str, description: str, *, fallback_user_type: str = "employee") -> None:
        self._dispatch(NewActivity.from_actor(actor, action, description, fallback_user_type=fallback_user_type))

    def _dispatch(self, entry: NewActivity) -> None:
        if self._executor is None:
            self._write(entry)
            return
        try:
            self._executor.submit(self._write, entry)
        except RuntimeError:
            # executor already shut down
            logger.exception("Could not queue activity log entry %s", entry.action)

    def _write(self, entry: NewActivity) -> None:
        try:
            self._activity.insert(entry)
        except Exception:
            logger.exception("Failed to write activity log entry %s for user %s", entry.action, entry.username)


class ActivityLogService:
    """Read side of the audit trail (admin reporting)."""

    def __init__(self, activity: ActivityLogRepository):
        self._activity = activity

    def query(
        self,
        *,
        user_id: Optional[int] = None,
        action: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = DEFAULT_LOG_LIMIT,
        offset: int = 0,
    ) -> ActivityPage:
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        limit = min(limit, MAX_LOG_LIMIT)
        if offset < 0:
            raise ValidationError("offset must not be negative")
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date must not be after end_date")

        flt = ActivityFilter(
            user_id=user_id,
            action=(action or "").strip() or None,
            start_date=start_date,
            end_date=end_date,
        )
        rows, total = self._activity.query(flt, limit=limit, offset=offset)
        return ActivityPage(rows=list(rows), total=int(total), limit=limit, offset=offset)

    def stats(self, window_days: int = DEFAULT_STATS_DAYS) -> list[ActivityStat]:
        if window_days < 1 or window_days > MAX_STATS_DAYS:
            raise ValidationError(f"days must be between 1 and {MAX_STATS_DAYS}")
        since = now_local() - timedelta(days=int(window_days))
        return list(self._activity.stats_since(since))
