from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from ..audit import actions
from ..audit.model import Actor
from ..audit.service import AuditLog
from ..common.access import ensure_admin, ensure_owner_or_admin
from ..common.datetime_utils import today_local
from ..common.validators import require_decimal, require_int
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import Salary, SalaryFields
from .repository import SalaryRepository

_ZERO = Decimal("0")


class SalaryService:
    """Use case: salary records (admin-managed, employees read their own)."""

    def __init__(
        self,
        salaries: SalaryRepository,
        users: UserRepository,
        audit: AuditLog,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._salaries = salaries
        self._users = users
        self._audit = audit
        self._calculator = calculator or StandardPayrollCalculator()

    def _parse(self, payload: Mapping[str, Any]) -> SalaryFields:
        if any(payload.get(k) in (None, "") for k in ("basic_salary", "month", "year")):
            raise ValidationError("Missing required fields")

        basic = require_decimal(payload.get("basic_salary"), "basic_salary")
        allowances = require_decimal(payload.get("allowances"), "allowances", default=_ZERO)
        deductions = require_decimal(payload.get("deductions"), "deductions", default=_ZERO)
        if basic <= 0:
            raise ValidationError("basic_salary must be greater than 0")
        if allowances < 0 or deductions < 0:
            raise ValidationError("allowances and deductions must not be negative")

        return SalaryFields(
            basic_salary=basic,
            allowances=allowances,
            deductions=deductions,
            net_salary=self._calculator.net_salary(basic, allowances, deductions),
            month=str(payload["month"]).strip(),
            year=require_int(payload["year"], "year"),
        )

    def get(self, salary_id: int) -> Salary:
        salary = self._salaries.get(int(salary_id))
        if not salary:
            raise NotFoundError("Salary record not found")
        return salary

    def list_all(self) -> list[Salary]:
        return list(self._salaries.list_all())

    def list_for_employee(self, employee_id: int, *, actor: Optional[Actor] = None) -> list[Salary]:
        ensure_owner_or_admin(actor, employee_id)
        return list(self._salaries.list_for_employee(int(employee_id)))

    def create(self, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> int:
        if payload.get("employee_id") in (None, ""):
            raise ValidationError("Missing required fields")
        employee_id = require_int(payload.get("employee_id"), "employee_id")
        fields = self._parse(payload)
        ensure_admin(actor)

        employee = self._users.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        salary_id = self._salaries.create(employee_id=employee_id, fields=fields, payment_date=today_local())
        self._audit.record_for(
            actor,
            actions.SALARY_CREATED,
            f"Added salary for {employee.username}: {fields.month} {fields.year}, net {fields.net_salary}",
            fallback_user_type="admin",
        )
        return salary_id

    def update(self, salary_id: int, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> SalaryFields:
        fields = self._parse(payload)
        ensure_admin(actor)
        salary = self.get(salary_id)

        self._salaries.update(salary_id=salary.salary_id, fields=fields)
        self._audit.record_for(
            actor,
            actions.SALARY_UPDATED,
            f"Updated salary #{salary.salary_id}: {fields.month} {fields.year}, net {fields.net_salary}",
            fallback_user_type="admin",
        )
        return fields

    def delete(self, salary_id: int, *, actor: Optional[Actor] = None) -> None:
        ensure_admin(actor)
        salary = self.get(salary_id)

        self._salaries.delete(salary.salary_id)
        self._audit.record_for(
            actor,
            actions.SALARY_DELETED,
            f"Deleted salary #{salary.salary_id} ({salary.fields.month} {salary.fields.year})",
            fallback_user_type="admin",
        )
