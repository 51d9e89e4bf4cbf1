from __future__ import annotations

from datetime import date

import pytest

from employee_admin.core.enums import LeaveStatus
from employee_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from fakes import audit_actions


def _apply(container, actor, **overrides):
    data = dict(leave_type="sick", start_date="2024-01-01", end_date="2024-01-03", reason="flu", actor=actor)
    data.update(overrides)
    return container.leave_service.create_leave(**data)


def test_create_leave_for_self_is_pending_and_audited(container, alice):
    leave_id = _apply(container, alice)
    leave = container.leave_service.get_leave(leave_id, actor=alice)

    assert leave.employee_id == alice.user_id
    assert leave.status == LeaveStatus.PENDING
    assert leave.start_date == date(2024, 1, 1)

    entry = container.activity_repo.entries[-1]
    assert entry.action == "LEAVE_CREATED"
    assert entry.description == "Created leave: sick from 2024-01-01 to 2024-01-03"
    assert entry.user_id == alice.user_id


@pytest.mark.parametrize("field", ["leave_type", "start_date", "end_date", "reason"])
def test_create_leave_requires_every_field(container, alice, field):
    with pytest.raises(ValidationError, match="All fields are required"):
        _apply(container, alice, **{field: ""})
    assert container.leaves_repo.leaves == {}


def test_create_leave_rejects_inverted_range_and_bad_dates(container, alice):
    with pytest.raises(ValidationError, match="End date"):
        _apply(container, alice, start_date="2024-02-10", end_date="2024-02-01")
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        _apply(container, alice, start_date="10/02/2024")


def test_cannot_file_leave_for_someone_else(container, alice, bob):
    with pytest.raises(AuthorizationError):
        _apply(container, alice, employee_id=bob.user_id)


def test_only_owner_updates_owner_or_admin_deletes(container, admin, alice, bob):
    leave_id = _apply(container, alice)

    with pytest.raises(AuthorizationError):
        container.leave_service.update_leave(
            leave_id=leave_id, leave_type="casual", start_date="2024-01-01", end_date="2024-01-01", reason="x", actor=bob
        )
    with pytest.raises(AuthorizationError):
        container.leave_service.delete_leave(leave_id=leave_id, actor=bob)

    container.leave_service.update_leave(
        leave_id=leave_id, leave_type="casual", start_date="2024-01-01", end_date="2024-01-01", reason="x", actor=alice
    )
    assert container.leaves_repo.get(leave_id).leave_type == "casual"

    container.leave_service.delete_leave(leave_id=leave_id, actor=admin)
    assert container.leaves_repo.get(leave_id) is None
    assert audit_actions(container)[-2:] == ["LEAVE_UPDATED", "LEAVE_DELETED"]


def test_list_for_employee_is_scoped(container, admin, alice, bob):
    _apply(container, alice)
    _apply(container, bob)

    assert [x.employee_id for x in container.leave_service.list_for_employee(alice.user_id, actor=alice)] == [
        alice.user_id
    ]
    assert len(container.leave_service.list_all()) == 2
    with pytest.raises(AuthorizationError):
        container.leave_service.list_for_employee(bob.user_id, actor=alice)


@pytest.mark.parametrize(
    "status,action",
    [("approved", "LEAVE_APPROVED"), ("REJECTED", "LEAVE_REJECTED"), ("pending", "LEAVE_STATUS_UPDATED")],
)
def test_admin_sets_status(container, admin, alice, status, action):
    leave_id = _apply(container, alice)

    new_status = container.leave_service.set_status(leave_id=leave_id, status=status, actor=admin)

    assert container.leaves_repo.get(leave_id).status == new_status
    assert new_status.value == status.lower()
    assert audit_actions(container)[-1] == action


def test_status_transition_rules(container, alice):
    leave_id = _apply(container, alice)

    with pytest.raises(AuthorizationError):
        container.leave_service.set_status(leave_id=leave_id, status="approved", actor=alice)
    with pytest.raises(ValidationError):
        container.leave_service.set_status(leave_id=leave_id, status="maybe", actor=None)
    with pytest.raises(ValidationError):
        container.leave_service.set_status(leave_id=leave_id, status="", actor=None)
    with pytest.raises(NotFoundError):
        container.leave_service.set_status(leave_id=999, status="approved", actor=None)
