from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class SalaryFields:
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    month: str
    year: int


@dataclass(frozen=True)
class Salary:
    salary_id: int
    employee_id: int
    fields: SalaryFields
    payment_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    username: Optional[str] = None

    def to_dict(self) -> dict:
        f = self.fields
        return {
            "id": self.salary_id,
            "employee_id": self.employee_id,
            "username": self.username,
            "basic_salary": f.basic_salary,
            "allowances": f.allowances,
            "deductions": f.deductions,
            "net_salary": f.net_salary,
            "month": f.month,
            "year": f.year,
            "payment_date": self.payment_date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
