from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Salary, SalaryFields
from .repository import SalaryRepository

_SELECT = """
    SELECT s.id, s.employee_id, s.basic_salary, s.allowances, s.deductions, s.net_salary,
           s.payment_date, s.month, s.year, s.created_at, s.updated_at, u.username
    FROM salaries s
    JOIN users u ON s.employee_id = u.id
"""


def _row_to_salary(r: dict) -> Salary:
    return Salary(
        salary_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        fields=SalaryFields(
            basic_salary=Decimal(r["basic_salary"]),
            allowances=Decimal(r.get("allowances") or 0),
            deductions=Decimal(r.get("deductions") or 0),
            net_salary=Decimal(r["net_salary"]),
            month=r["month"],
            year=int(r["year"]),
        ),
        payment_date=r["payment_date"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        username=r.get("username"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, salary_id: int) -> Optional[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.id=%s", (int(salary_id),))
            row = fetchone(cur)
            return _row_to_salary(row) if row else None

    def list_all(self) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY s.payment_date DESC, s.id DESC")
            return [_row_to_salary(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.employee_id=%s ORDER BY s.payment_date DESC, s.id DESC", (int(employee_id),))
            return [_row_to_salary(r) for r in fetchall(cur)]

    def create(self, *, employee_id: int, fields: SalaryFields, payment_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries(employee_id, basic_salary, allowances, deductions, net_salary,
                                     month, year, payment_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    fields.basic_salary,
                    fields.allowances,
                    fields.deductions,
                    fields.net_salary,
                    fields.month,
                    fields.year,
                    payment_date,
                ),
            )
            return int(cur.lastrowid)

    def update(self, *, salary_id: int, fields: SalaryFields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salaries
                SET basic_salary=%s, allowances=%s, deductions=%s, net_salary=%s, month=%s, year=%s
                WHERE id=%s
                """,
                (
                    fields.basic_salary,
                    fields.allowances,
                    fields.deductions,
                    fields.net_salary,
                    fields.month,
                    fields.year,
                    int(salary_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salaries WHERE id=%s", (int(salary_id),))
            return cur.rowcount > 0
