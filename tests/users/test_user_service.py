from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from employee_admin.core.exceptions import DuplicateNameError, NotFoundError, ValidationError
from fakes import audit_actions


def test_add_employee_is_pre_verified_and_audited(container, admin):
    user_id = container.user_service.add_employee(
        username="frank", password="secret1", email="Frank@Example.com", actor=admin
    )
    user = container.users_repo.get_by_id(user_id)

    assert user.email_verified is True
    assert user.email == "frank@example.com"
    assert check_password_hash(user.password_hash, "secret1")
    assert audit_actions(container) == ["EMPLOYEE_CREATED"]
    assert container.activity_repo.entries[0].description == "Added employee: frank"


def test_add_employee_with_role_assigns_it(container, admin):
    role_id = container.role_service.create_role(role_name="Employee", permissions={"apply_leave": True})

    user_id = container.user_service.add_employee(username="gina", password="secret1", role_id=role_id, actor=admin)

    assigned = container.role_service.list_roles_for_user(user_id)
    assert [a.role.role_name for a in assigned] == ["Employee"]
    assert assigned[0].assigned_by == admin.user_id
    assert audit_actions(container)[-2:] == ["EMPLOYEE_CREATED", "ROLE_ASSIGNED"]


def test_add_employee_with_unknown_role_creates_nothing(container, admin):
    with pytest.raises(NotFoundError):
        container.user_service.add_employee(username="hank", password="secret1", role_id=99, actor=admin)
    assert container.users_repo.get_by_username("hank") is None


def test_add_employee_validation(container, admin):
    with pytest.raises(ValidationError, match="Username and password are required"):
        container.user_service.add_employee(username=" ", password="secret1", actor=admin)
    container.user_service.add_employee(username="ivy", password="secret1", actor=admin)
    with pytest.raises(DuplicateNameError, match="Username already exists"):
        container.user_service.add_employee(username="ivy", password="secret1", actor=admin)


def test_update_employee_changes_username_and_optional_password(container, admin, alice):
    old_hash = container.users_repo.get_by_id(alice.user_id).password_hash

    container.user_service.update_employee(user_id=alice.user_id, username="alice2", actor=admin)
    user = container.users_repo.get_by_id(alice.user_id)
    assert user.username == "alice2"
    assert user.password_hash == old_hash

    container.user_service.update_employee(user_id=alice.user_id, username="alice2", password="newpass1", actor=admin)
    assert check_password_hash(container.users_repo.get_by_id(alice.user_id).password_hash, "newpass1")


def test_update_employee_rejects_taken_username(container, admin, alice, bob):
    with pytest.raises(DuplicateNameError):
        container.user_service.update_employee(user_id=alice.user_id, username="bob", actor=admin)


def test_delete_employee_cascades_and_keeps_audit_trail(container, admin, alice):
    role_id = container.role_service.create_role(role_name="Employee")
    container.role_service.assign_role(user_id=alice.user_id, role_id=role_id)
    container.auth_service.logout(alice)

    container.user_service.delete_employee(user_id=alice.user_id, actor=admin)

    assert container.users_repo.get_by_id(alice.user_id) is None
    assert container.users_repo.cascaded == [alice.user_id]
    assert container.role_service.list_roles_for_user(alice.user_id) == []
    # history written by the deleted user survives
    assert any(e.username == "alice" for e in container.activity_repo.entries)
    assert audit_actions(container)[-1] == "EMPLOYEE_DELETED"


def test_delete_refuses_admins_and_unknown_ids(container, admin):
    with pytest.raises(NotFoundError, match="Employee not found"):
        container.user_service.delete_employee(user_id=admin.user_id, actor=admin)
    with pytest.raises(NotFoundError):
        container.user_service.delete_employee(user_id=777, actor=admin)
