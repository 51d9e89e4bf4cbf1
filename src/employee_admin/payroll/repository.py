from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Salary, SalaryFields


class SalaryRepository(Protocol):
    def get(self, salary_id: int) -> Optional[Salary]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Salary]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Salary]:
        raise NotImplementedError

    def create(self, *, employee_id: int, fields: SalaryFields, payment_date: date) -> int:
        raise NotImplementedError

    def update(self, *, salary_id: int, fields: SalaryFields) -> bool:
        raise NotImplementedError

    def delete(self, salary_id: int) -> bool:
        raise NotImplementedError
