from __future__ import annotations

from datetime import date

import pytest

from employee_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from fakes import audit_actions


def _payload(**overrides):
    data = {"holiday_name": "New Year", "holiday_date": "2025-01-01", "description": "", "year": "2025"}
    data.update(overrides)
    return data


def test_listing_orders(container, admin):
    service = container.holiday_service
    service.create(_payload(), actor=admin)
    service.create(_payload(holiday_name="Christmas", holiday_date="2025-12-25"), actor=admin)
    service.create(_payload(holiday_name="Old Year", holiday_date="2024-12-31", year=2024), actor=admin)

    assert [h.holiday_date for h in service.list_all()] == [date(2025, 12, 25), date(2025, 1, 1), date(2024, 12, 31)]
    assert [h.holiday_name for h in service.list_for_year(2025)] == ["New Year", "Christmas"]


@pytest.mark.parametrize("missing", ["holiday_name", "holiday_date", "year"])
def test_required_fields(container, admin, missing):
    with pytest.raises(ValidationError, match="Missing required fields"):
        container.holiday_service.create(_payload(**{missing: None}), actor=admin)


def test_holidays_are_admin_managed(container, alice):
    with pytest.raises(AuthorizationError):
        container.holiday_service.create(_payload(), actor=alice)


def test_update_and_delete(container, admin):
    service = container.holiday_service
    holiday_id = service.create(_payload(), actor=admin)

    service.update(holiday_id, _payload(holiday_name="New Year's Day"), actor=admin)
    assert service.get(holiday_id).holiday_name == "New Year's Day"

    service.delete(holiday_id, actor=admin)
    with pytest.raises(NotFoundError):
        service.delete(holiday_id, actor=admin)
    assert audit_actions(container) == ["HOLIDAY_CREATED", "HOLIDAY_UPDATED", "HOLIDAY_DELETED"]
