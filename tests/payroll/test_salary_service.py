from __future__ import annotations

from decimal import Decimal

import pytest

from employee_admin.common.datetime_utils import today_local
from employee_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from fakes import audit_actions


def _payload(employee_id, **overrides):
    data = {
        "employee_id": employee_id,
        "basic_salary": "5000",
        "allowances": "750.50",
        "deductions": 320.25,
        "month": "January",
        "year": 2024,
    }
    data.update(overrides)
    return data


def test_create_salary_computes_net_and_payment_date(container, admin, alice):
    salary_id = container.salary_service.create(_payload(alice.user_id), actor=admin)
    salary = container.salary_service.get(salary_id)

    assert salary.fields.net_salary == Decimal("5430.25")
    assert salary.payment_date == today_local()
    assert audit_actions(container) == ["SALARY_CREATED"]


def test_allowances_and_deductions_default_to_zero(container, admin, alice):
    salary_id = container.salary_service.create(
        _payload(alice.user_id, allowances=None, deductions=""), actor=admin
    )

    assert container.salary_service.get(salary_id).fields.net_salary == Decimal("5000.00")


@pytest.mark.parametrize("missing", ["employee_id", "basic_salary", "month", "year"])
def test_missing_required_fields(container, admin, alice, missing):
    payload = _payload(alice.user_id)
    payload[missing] = ""

    with pytest.raises(ValidationError, match="Missing required fields"):
        container.salary_service.create(payload, actor=admin)


def test_amount_validation(container, admin, alice):
    with pytest.raises(ValidationError, match="greater than 0"):
        container.salary_service.create(_payload(alice.user_id, basic_salary="0"), actor=admin)
    with pytest.raises(ValidationError, match="must not be negative"):
        container.salary_service.create(_payload(alice.user_id, deductions="-1"), actor=admin)
    with pytest.raises(ValidationError, match="must be a number"):
        container.salary_service.create(_payload(alice.user_id, allowances="lots"), actor=admin)


@pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity", "sNaN"])
def test_non_finite_amounts_are_rejected(container, admin, alice, amount):
    with pytest.raises(ValidationError, match="basic_salary must be a number"):
        container.salary_service.create(_payload(alice.user_id, basic_salary=amount), actor=admin)
    assert container.salaries_repo.salaries == {}


def test_salary_is_admin_managed(container, alice):
    with pytest.raises(AuthorizationError):
        container.salary_service.create(_payload(alice.user_id), actor=alice)


def test_unknown_employee(container, admin):
    with pytest.raises(NotFoundError, match="Employee not found"):
        container.salary_service.create(_payload(404), actor=admin)


def test_update_recomputes_net_and_delete(container, admin, alice, bob):
    salary_id = container.salary_service.create(_payload(alice.user_id), actor=admin)

    fields = container.salary_service.update(salary_id, _payload(alice.user_id, deductions="0"), actor=admin)
    assert fields.net_salary == Decimal("5750.50")
    assert container.salary_service.get(salary_id).fields.net_salary == Decimal("5750.50")

    assert len(container.salary_service.list_for_employee(alice.user_id, actor=alice)) == 1
    with pytest.raises(AuthorizationError):
        container.salary_service.list_for_employee(alice.user_id, actor=bob)

    container.salary_service.delete(salary_id, actor=admin)
    assert container.salary_service.list_all() == []
    assert audit_actions(container) == ["SALARY_CREATED", "SALARY_UPDATED", "SALARY_DELETED"]
