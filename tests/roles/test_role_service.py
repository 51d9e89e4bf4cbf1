from __future__ import annotations

import pytest

from employee_admin.core.exceptions import (
    DuplicateAssignmentError,
    DuplicateNameError,
    InvalidPermissionsError,
    NotFoundError,
    RoleInUseError,
)
from employee_admin.roles.defaults import DEFAULT_ROLES, SUPER_ADMIN
from employee_admin.roles.model import PERMISSION_KEYS
from fakes import add_user, audit_actions


def _users(container, n):
    return [add_user(container, f"user{i}") for i in range(1, n + 1)]


def test_has_permission_is_or_across_roles(container):
    (uid,) = _users(container, 1)
    roles = container.role_service
    viewer = roles.create_role(role_name="Viewer", permissions={"view_employees": True})
    approver = roles.create_role(role_name="Approver", permissions={"approve_leave": True, "view_employees": False})

    assert roles.has_permission(uid, "view_employees") is False

    roles.assign_role(user_id=uid, role_id=approver)
    assert roles.has_permission(uid, "approve_leave") is True
    assert roles.has_permission(uid, "view_employees") is False

    roles.assign_role(user_id=uid, role_id=viewer)
    assert roles.has_permission(uid, "view_employees") is True
    assert roles.has_permission(uid, "manage_roles") is False


def test_has_permission_false_for_unknown_key_or_missing_user(container):
    (uid,) = _users(container, 1)
    roles = container.role_service
    role_id = roles.create_role(role_name="Everything", permissions={k: True for k in PERMISSION_KEYS})
    roles.assign_role(user_id=uid, role_id=role_id)

    assert roles.has_permission(uid, "launch_rockets") is False
    assert roles.has_permission(None, "manage_roles") is False
    assert roles.has_permission(999, "manage_roles") is False


def test_effective_permissions_merge(container):
    (uid,) = _users(container, 1)
    roles = container.role_service
    a = roles.create_role(role_name="A", permissions={"view_leave": True})
    b = roles.create_role(role_name="B", permissions={"apply_leave": True})
    roles.assign_role(user_id=uid, role_id=a)
    roles.assign_role(user_id=uid, role_id=b)

    granted = {k for k, v in roles.effective_permissions(uid).to_dict().items() if v}
    assert granted == {"view_leave", "apply_leave"}


def test_duplicate_assignment_leaves_single_row(container):
    (uid,) = _users(container, 1)
    roles = container.role_service
    role_id = roles.create_role(role_name="Viewer", permissions={"view_employees": True})

    roles.assign_role(user_id=uid, role_id=role_id)
    with pytest.raises(DuplicateAssignmentError):
        roles.assign_role(user_id=uid, role_id=role_id)

    rows = [a for a in container.roles_repo.assignments if a["user_id"] == uid and a["role_id"] == role_id]
    assert len(rows) == 1


def test_repository_constraint_also_reports_duplicate_assignment(container):
    (uid,) = _users(container, 1)
    role_id = container.role_service.create_role(role_name="Viewer")
    container.roles_repo.assign(user_id=uid, role_id=role_id, assigned_by=None)

    with pytest.raises(DuplicateAssignmentError):
        container.roles_repo.assign(user_id=uid, role_id=role_id, assigned_by=None)


def test_assign_requires_existing_user_and_role(container):
    (uid,) = _users(container, 1)
    roles = container.role_service
    role_id = roles.create_role(role_name="Viewer")

    with pytest.raises(NotFoundError):
        roles.assign_role(user_id=404, role_id=role_id)
    with pytest.raises(NotFoundError):
        roles.assign_role(user_id=uid, role_id=404)


def test_delete_role_in_use_reports_holder_count(container):
    uids = _users(container, 3)
    roles = container.role_service
    role_id = roles.create_role(role_name="Shared")
    for uid in uids:
        roles.assign_role(user_id=uid, role_id=role_id)

    with pytest.raises(RoleInUseError) as exc:
        roles.delete_role(role_id=role_id)
    assert exc.value.holder_count == 3
    assert "3 user(s)" in str(exc.value)

    for uid in uids:
        roles.remove_role(user_id=uid, role_id=role_id)
    roles.delete_role(role_id=role_id)

    with pytest.raises(NotFoundError):
        roles.get_role(role_id)


def test_remove_missing_assignment_is_not_found(container):
    (uid,) = _users(container, 1)
    role_id = container.role_service.create_role(role_name="Viewer")

    with pytest.raises(NotFoundError):
        container.role_service.remove_role(user_id=uid, role_id=role_id)


def test_create_and_update_reject_duplicate_names(container):
    roles = container.role_service
    first = roles.create_role(role_name="Auditor")
    second = roles.create_role(role_name="Clerk")

    with pytest.raises(DuplicateNameError):
        roles.create_role(role_name="Auditor")
    with pytest.raises(DuplicateNameError):
        roles.update_role(role_id=second, role_name="Auditor")

    # renaming to its own name is fine
    roles.update_role(role_id=first, role_name="Auditor", description="reads logs")
    assert roles.get_role(first).description == "reads logs"


def test_update_missing_role_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.role_service.update_role(role_id=42, role_name="Ghost")


@pytest.mark.parametrize(
    "permissions",
    [
        ["view_employees"],
        "manage_roles",
        {"view_employees": "yes"},
        {"view_employees": 1},
        {"nested": {"view_employees": True}},
        {"fly": True},
    ],
)
def test_invalid_permission_maps_are_rejected(container, permissions):
    with pytest.raises(InvalidPermissionsError):
        container.role_service.create_role(role_name="Broken", permissions=permissions)
    assert container.roles_repo.roles == {}


def test_missing_permission_keys_default_to_false(container):
    role_id = container.role_service.create_role(role_name="Partial", permissions={"view_holidays": True})
    perms = container.role_service.get_role(role_id).permissions.to_dict()

    assert set(perms) == set(PERMISSION_KEYS)
    assert [k for k, v in perms.items() if v] == ["view_holidays"]


def test_seed_default_roles_is_idempotent(container):
    first = container.role_service.seed_default_roles()
    second = container.role_service.seed_default_roles()

    assert first == [t.role_name for t in DEFAULT_ROLES]
    assert second == []
    names = sorted(r.role_name for r in container.roles_repo.roles.values())
    assert names == sorted(["Super Admin", "HR Manager", "Department Manager", "Employee"])


def test_seed_leaves_existing_roles_untouched(container):
    container.role_service.create_role(role_name="Employee", description="custom", permissions={"view_leave": True})
    container.role_service.seed_default_roles()

    employee = container.roles_repo.get_by_name("Employee")
    assert employee.description == "custom"
    assert employee.permissions.granted("view_leave") is True
    assert employee.permissions.granted("apply_leave") is False


def test_default_role_permissions(container):
    container.role_service.seed_default_roles()
    repo = container.roles_repo

    assert all(repo.get_by_name(SUPER_ADMIN).permissions.to_dict().values())
    hr = repo.get_by_name("HR Manager").permissions
    assert hr.granted("manage_employees") and hr.granted("manage_resignations")
    assert not hr.granted("manage_roles")
    manager = repo.get_by_name("Department Manager").permissions
    assert manager.granted("approve_leave") and not manager.granted("manage_employees")
    employee = repo.get_by_name("Employee").permissions
    assert employee.granted("view_own_leave") and not employee.granted("view_leave")


def test_auditor_scenario(container):
    uids = _users(container, 7)
    assert uids[-1] == 7
    roles = container.role_service

    role_id = roles.create_role(role_name="Auditor", permissions={"view_activity_logs": True})
    assert isinstance(role_id, int)
    roles.assign_role(user_id=7, role_id=role_id)

    assert "Auditor" in [a.role.role_name for a in roles.list_roles_for_user(7)]
    assert roles.has_permission(7, "view_activity_logs") is True
    assert roles.has_permission(7, "manage_roles") is False


def test_list_roles_carries_user_counts(container):
    uids = _users(container, 2)
    roles = container.role_service
    busy = roles.create_role(role_name="Busy")
    roles.create_role(role_name="Idle")
    for uid in uids:
        roles.assign_role(user_id=uid, role_id=busy)

    counts = {s.role.role_name: s.user_count for s in roles.list_roles()}
    assert counts == {"Busy": 2, "Idle": 0}


def test_role_mutations_are_audited(container, admin):
    (uid,) = _users(container, 1)
    roles = container.role_service
    role_id = roles.create_role(role_name="Viewer", actor=admin)
    roles.update_role(role_id=role_id, role_name="Viewer", actor=admin)
    roles.assign_role(user_id=uid, role_id=role_id, assigned_by=admin.user_id, actor=admin)
    roles.remove_role(user_id=uid, role_id=role_id, actor=admin)
    roles.delete_role(role_id=role_id, actor=admin)

    assert audit_actions(container) == [
        "ROLE_CREATED",
        "ROLE_UPDATED",
        "ROLE_ASSIGNED",
        "ROLE_REMOVED",
        "ROLE_DELETED",
    ]
    assert {e.username for e in container.activity_repo.entries} == {"boss"}
