from __future__ import annotations

from datetime import date

import pytest

from employee_admin.core.enums import GrievanceStatus, ResignationStatus
from employee_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from fakes import audit_actions


def test_submit_and_resolve_grievance(container, admin, alice):
    requests = container.request_service
    grievance_id = requests.submit_grievance(subject="Noise", description="Open office is loud", actor=alice)

    assert requests.get_grievance(grievance_id, actor=alice).status == GrievanceStatus.PENDING

    status = requests.decide_grievance(
        grievance_id=grievance_id, status="under_review", admin_response="Looking into it", actor=admin
    )
    grievance = requests.get_grievance(grievance_id, actor=admin)

    assert status == GrievanceStatus.UNDER_REVIEW
    assert grievance.admin_response == "Looking into it"
    assert audit_actions(container) == ["GRIEVANCE_CREATED", "GRIEVANCE_UPDATED"]


def test_grievance_validation_and_ownership(container, admin, alice, bob):
    requests = container.request_service
    with pytest.raises(ValidationError, match="Missing required fields"):
        requests.submit_grievance(subject="", description="x", actor=alice)
    with pytest.raises(AuthorizationError):
        requests.submit_grievance(subject="s", description="d", employee_id=bob.user_id, actor=alice)

    grievance_id = requests.submit_grievance(subject="s", description="d", actor=alice)
    with pytest.raises(ValidationError, match="Status is required"):
        requests.decide_grievance(grievance_id=grievance_id, status="", actor=admin)
    with pytest.raises(ValidationError, match="Invalid status"):
        requests.decide_grievance(grievance_id=grievance_id, status="accepted", actor=admin)
    with pytest.raises(AuthorizationError):
        requests.decide_grievance(grievance_id=grievance_id, status="resolved", actor=alice)
    with pytest.raises(AuthorizationError):
        requests.delete_grievance(grievance_id=grievance_id, actor=bob)
    with pytest.raises(AuthorizationError):
        requests.list_grievances_for_employee(alice.user_id, actor=bob)

    requests.delete_grievance(grievance_id=grievance_id, actor=alice)
    assert requests.list_grievances() == []


def test_resignation_lifecycle(container, admin, alice):
    requests = container.request_service
    resignation_id = requests.submit_resignation(reason="Moving", last_working_day="2024-06-30", actor=alice)

    resignation = requests.get_resignation(resignation_id, actor=alice)
    assert resignation.last_working_day == date(2024, 6, 30)
    assert resignation.status == ResignationStatus.PENDING

    requests.decide_resignation(resignation_id=resignation_id, status="accepted", admin_notes="Good luck", actor=admin)
    assert requests.get_resignation(resignation_id, actor=admin).admin_notes == "Good luck"
    assert [r.resignation_id for r in requests.list_resignations_for_employee(alice.user_id, actor=alice)] == [
        resignation_id
    ]

    requests.delete_resignation(resignation_id=resignation_id, actor=admin)
    with pytest.raises(NotFoundError):
        requests.get_resignation(resignation_id, actor=admin)
    assert audit_actions(container) == ["RESIGNATION_CREATED", "RESIGNATION_UPDATED", "RESIGNATION_DELETED"]


def test_resignation_validation(container, admin, alice):
    requests = container.request_service
    with pytest.raises(ValidationError, match="Missing required fields"):
        requests.submit_resignation(reason="Moving", last_working_day="", actor=alice)
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        requests.submit_resignation(reason="Moving", last_working_day="next friday", actor=alice)

    resignation_id = requests.submit_resignation(reason="Moving", last_working_day="2024-06-30", actor=alice)
    with pytest.raises(ValidationError, match="Invalid status"):
        requests.decide_resignation(resignation_id=resignation_id, status="resolved", actor=admin)
