from decimal import Decimal

from employee_admin.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_standard_calculator_adds_allowances_and_subtracts_deductions():
    calc = StandardPayrollCalculator()
    assert calc.net_salary(Decimal("5000"), Decimal("750.50"), Decimal("320.25")) == Decimal("5430.25")


def test_standard_calculator_rounds_to_cents():
    calc = StandardPayrollCalculator()
    assert calc.net_salary(Decimal("1000.005"), Decimal("0"), Decimal("0")) == Decimal("1000.01")
