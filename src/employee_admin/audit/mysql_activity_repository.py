from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence, Tuple

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ActivityFilter, ActivityLogEntry, ActivityStat, NewActivity
from .repository import ActivityLogRepository


def _where(flt: ActivityFilter) -> Tuple[str, list]:
    clauses = ["1=1"]
    params: list[object] = []

    if flt.user_id is not None:
        clauses.append("user_id=%s")
        params.append(int(flt.user_id))
    if flt.action:
        clauses.append("action=%s")
        params.append(flt.action)
    if flt.start_date is not None:
        clauses.append("created_at >= %s")
        params.append(datetime.combine(flt.start_date, datetime.min.time()))
    if flt.end_date is not None:
        # end_date is inclusive
        clauses.append("created_at < %s")
        params.append(datetime.combine(flt.end_date + timedelta(days=1), datetime.min.time()))

    return " AND ".join(clauses), params


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, entry: NewActivity) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_logs(user_id, username, user_type, action, description, ip_address)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (entry.user_id, entry.username, entry.user_type, entry.action, entry.description, entry.ip_address),
            )
            return int(cur.lastrowid)

    def query(self, flt: ActivityFilter, *, limit: int, offset: int) -> Tuple[Sequence[ActivityLogEntry], int]:
        where, params = _where(flt)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, user_id, username, user_type, action, description, ip_address, created_at
                FROM activity_logs
                WHERE {where}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            rows = [
                ActivityLogEntry(
                    log_id=int(r["id"]),
                    user_id=r.get("user_id"),
                    username=r.get("username"),
                    user_type=r.get("user_type"),
                    action=r["action"],
                    description=r.get("description"),
                    ip_address=r.get("ip_address"),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

            cur.execute(f"SELECT COUNT(*) AS total FROM activity_logs WHERE {where}", tuple(params))
            row = fetchone(cur)
            total = int(row["total"]) if row else 0

        return rows, total

    def stats_since(self, since: datetime) -> Sequence[ActivityStat]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT action, DATE(created_at) AS day, COUNT(*) AS count
                FROM activity_logs
                WHERE created_at >= %s
                GROUP BY action, DATE(created_at)
                ORDER BY day DESC, count DESC
                """,
                (since,),
            )
            return [ActivityStat(action=r["action"], day=r["day"], count=int(r["count"])) for r in fetchall(cur)]
