from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository

_SELECT = """
    SELECT id, holiday_name, holiday_date, description, year, created_at, updated_at
    FROM company_holidays
"""


def _row_to_holiday(r: dict) -> Holiday:
    return Holiday(
        holiday_id=int(r["id"]),
        holiday_name=r["holiday_name"],
        holiday_date=r["holiday_date"],
        description=r.get("description") or "",
        year=int(r["year"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (int(holiday_id),))
            row = fetchone(cur)
            return _row_to_holiday(row) if row else None

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY holiday_date DESC")
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def list_for_year(self, year: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE year=%s ORDER BY holiday_date", (int(year),))
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def create(self, *, holiday_name: str, holiday_date: date, description: str, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO company_holidays(holiday_name, holiday_date, description, year)
                VALUES(%s,%s,%s,%s)
                """,
                (holiday_name, holiday_date, description, int(year)),
            )
            return int(cur.lastrowid)

    def update(self, *, holiday_id: int, holiday_name: str, holiday_date: date, description: str, year: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE company_holidays
                SET holiday_name=%s, holiday_date=%s, description=%s, year=%s
                WHERE id=%s
                """,
                (holiday_name, holiday_date, description, int(year), int(holiday_id)),
            )
            return cur.rowcount > 0

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM company_holidays WHERE id=%s", (int(holiday_id),))
            return cur.rowcount > 0
