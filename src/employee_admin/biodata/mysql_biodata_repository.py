from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Gender
from ..core.exceptions import DuplicateNameError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Biodata, BiodataFields
from .repository import BiodataRepository

_SELECT = """
    SELECT b.id, b.employee_id, b.full_name, b.email, b.phone, b.address, b.date_of_birth,
           b.gender, b.position, b.department, b.joining_date, b.created_at, b.updated_at,
           u.username
    FROM biodata b
    JOIN users u ON b.employee_id = u.id
"""


def _row_to_biodata(r: dict) -> Biodata:
    return Biodata(
        biodata_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        fields=BiodataFields(
            full_name=r["full_name"],
            email=r["email"],
            phone=r["phone"],
            address=r["address"],
            date_of_birth=r["date_of_birth"],
            gender=Gender(r["gender"]),
            position=r["position"],
            department=r["department"],
            joining_date=r["joining_date"],
        ),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        username=r.get("username"),
    )


def _params(fields: BiodataFields) -> tuple:
    return (
        fields.full_name,
        fields.email,
        fields.phone,
        fields.address,
        fields.date_of_birth,
        fields.gender.value,
        fields.position,
        fields.department,
        fields.joining_date,
    )


class MySQLBiodataRepository(BiodataRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, biodata_id: int) -> Optional[Biodata]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE b.id=%s", (int(biodata_id),))
            row = fetchone(cur)
            return _row_to_biodata(row) if row else None

    def get_for_employee(self, employee_id: int) -> Optional[Biodata]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE b.employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_biodata(row) if row else None

    def list_all(self) -> Sequence[Biodata]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY b.created_at DESC, b.id DESC")
            return [_row_to_biodata(r) for r in fetchall(cur)]

    def create(self, *, employee_id: int, fields: BiodataFields) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO biodata(employee_id, full_name, email, phone, address, date_of_birth,
                                        gender, position, department, joining_date)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id),) + _params(fields),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateNameError("Biodata already exists for this employee")
            raise

    def update(self, *, biodata_id: int, fields: BiodataFields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE biodata
                SET full_name=%s, email=%s, phone=%s, address=%s, date_of_birth=%s,
                    gender=%s, position=%s, department=%s, joining_date=%s
                WHERE id=%s
                """,
                _params(fields) + (int(biodata_id),),
            )
            return cur.rowcount > 0

    def delete(self, biodata_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM biodata WHERE id=%s", (int(biodata_id),))
            return cur.rowcount > 0
