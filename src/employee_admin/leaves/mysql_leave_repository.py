from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveApplication
from .repository import LeaveRepository

_SELECT = """
    SELECT l.id, l.employee_id, l.leave_type, l.start_date, l.end_date, l.reason,
           l.status, l.created_at, l.updated_at, u.username
    FROM leave_applications l
    JOIN users u ON l.employee_id = u.id
"""


def _row_to_leave(r: dict) -> LeaveApplication:
    return LeaveApplication(
        leave_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        leave_type=r["leave_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        username=r.get("username"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, leave_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.id=%s", (int(leave_id),))
            row = fetchone(cur)
            return _row_to_leave(row) if row else None

    def list_all(self) -> Sequence[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY l.created_at DESC, l.id DESC")
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.employee_id=%s ORDER BY l.created_at DESC, l.id DESC", (int(employee_id),))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def create(self, *, employee_id: int, leave_type: str, start_date: date, end_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_applications(employee_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), leave_type, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def update(self, *, leave_id: int, leave_type: str, start_date: date, end_date: date, reason: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_applications
                SET leave_type=%s, start_date=%s, end_date=%s, reason=%s
                WHERE id=%s
                """,
                (leave_type, start_date, end_date, reason, int(leave_id)),
            )
            return cur.rowcount > 0

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_applications WHERE id=%s", (int(leave_id),))
            return cur.rowcount > 0

    def set_status(self, *, leave_id: int, status: LeaveStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE leave_applications SET status=%s WHERE id=%s", (status.value, int(leave_id)))
            return cur.rowcount > 0
