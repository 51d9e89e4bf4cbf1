from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .base import PayrollCalculator

_CENTS = Decimal("0.01")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: basic + allowances - deductions, rounded to cents."""

    def net_salary(self, basic_salary: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        return (basic_salary + allowances - deductions).quantize(_CENTS, rounding=ROUND_HALF_UP)
