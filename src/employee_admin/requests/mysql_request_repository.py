from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import GrievanceStatus, ResignationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Grievance, Resignation
from .repository import RequestRepository

_GRIEVANCE_SELECT = """
    SELECT g.id, g.employee_id, g.subject, g.description, g.status, g.admin_response,
           g.created_at, g.updated_at, u.username
    FROM grievances g
    JOIN users u ON g.employee_id = u.id
"""

_RESIGNATION_SELECT = """
    SELECT r.id, r.employee_id, r.reason, r.last_working_day, r.status, r.admin_notes,
           r.created_at, r.updated_at, u.username
    FROM resignations r
    JOIN users u ON r.employee_id = u.id
"""


def _row_to_grievance(r: dict) -> Grievance:
    return Grievance(
        grievance_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        subject=r["subject"],
        description=r["description"],
        status=GrievanceStatus(r["status"]),
        admin_response=r.get("admin_response"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        username=r.get("username"),
    )


def _row_to_resignation(r: dict) -> Resignation:
    return Resignation(
        resignation_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        reason=r["reason"],
        last_working_day=r["last_working_day"],
        status=ResignationStatus(r["status"]),
        admin_notes=r.get("admin_notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        username=r.get("username"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Grievances --------
    def get_grievance(self, grievance_id: int) -> Optional[Grievance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_GRIEVANCE_SELECT + " WHERE g.id=%s", (int(grievance_id),))
            row = fetchone(cur)
            return _row_to_grievance(row) if row else None

    def list_grievances(self, *, employee_id: Optional[int] = None) -> Sequence[Grievance]:
        with db_cursor(self._conn_factory) as (_, cur):
            if employee_id is None:
                cur.execute(_GRIEVANCE_SELECT + " ORDER BY g.created_at DESC, g.id DESC")
            else:
                cur.execute(
                    _GRIEVANCE_SELECT + " WHERE g.employee_id=%s ORDER BY g.created_at DESC, g.id DESC",
                    (int(employee_id),),
                )
            return [_row_to_grievance(r) for r in fetchall(cur)]

    def create_grievance(self, *, employee_id: int, subject: str, description: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO grievances(employee_id, subject, description, status) VALUES(%s,%s,%s,%s)",
                (int(employee_id), subject, description, GrievanceStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def decide_grievance(self, *, grievance_id: int, status: GrievanceStatus, admin_response: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE grievances SET status=%s, admin_response=%s, updated_at=NOW() WHERE id=%s",
                (status.value, admin_response, int(grievance_id)),
            )
            return cur.rowcount > 0

    def delete_grievance(self, grievance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM grievances WHERE id=%s", (int(grievance_id),))
            return cur.rowcount > 0

    # -------- Resignations --------
    def get_resignation(self, resignation_id: int) -> Optional[Resignation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_RESIGNATION_SELECT + " WHERE r.id=%s", (int(resignation_id),))
            row = fetchone(cur)
            return _row_to_resignation(row) if row else None

    def list_resignations(self, *, employee_id: Optional[int] = None) -> Sequence[Resignation]:
        with db_cursor(self._conn_factory) as (_, cur):
            if employee_id is None:
                cur.execute(_RESIGNATION_SELECT + " ORDER BY r.created_at DESC, r.id DESC")
            else:
                cur.execute(
                    _RESIGNATION_SELECT + " WHERE r.employee_id=%s ORDER BY r.created_at DESC, r.id DESC",
                    (int(employee_id),),
                )
            return [_row_to_resignation(r) for r in fetchall(cur)]

    def create_resignation(self, *, employee_id: int, reason: str, last_working_day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO resignations(employee_id, reason, last_working_day, status) VALUES(%s,%s,%s,%s)",
                (int(employee_id), reason, last_working_day, ResignationStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def decide_resignation(self, *, resignation_id: int, status: ResignationStatus, admin_notes: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE resignations SET status=%s, admin_notes=%s, updated_at=NOW() WHERE id=%s",
                (status.value, admin_notes, int(resignation_id)),
            )
            return cur.rowcount > 0

    def delete_resignation(self, resignation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM resignations WHERE id=%s", (int(resignation_id),))
            return cur.rowcount > 0
