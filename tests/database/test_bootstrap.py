from __future__ import annotations

from werkzeug.security import check_password_hash

from employee_admin.core.enums import UserType
from employee_admin.database.bootstrap import (
    SCHEMA_PATH,
    _iter_sql_statements,
    _strip_create_db_and_use,
    seed_defaults,
)
from employee_admin.roles.defaults import SUPER_ADMIN


def test_schema_splits_into_table_statements():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 10
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert any("UNIQUE KEY uq_user_role" in s for s in statements)


def test_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = "-- leading; comment\nINSERT INTO t VALUES ('a;b');\nSELECT \"x;y\";"

    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;y"']


def test_seed_defaults_twice_is_idempotent(container):
    for _ in range(2):
        seed_defaults(container, admin_username="admin", admin_password="admin123", admin_email="admin@example.com")

    assert sorted(r.role_name for r in container.roles_repo.roles.values()) == sorted(
        ["Super Admin", "HR Manager", "Department Manager", "Employee"]
    )
    admin = container.users_repo.get_by_username("admin")
    assert admin.user_type == UserType.ADMIN
    assert admin.email_verified is True
    assert check_password_hash(admin.password_hash, "admin123")
    assert [a.role.role_name for a in container.role_service.list_roles_for_user(admin.user_id)] == [SUPER_ADMIN]
    assert container.role_service.has_permission(admin.user_id, "manage_roles") is True


def test_seed_keeps_existing_admin_password(container):
    seed_defaults(container, admin_username="admin", admin_password="admin123")
    seed_defaults(container, admin_username="admin", admin_password="changed!")

    admin = container.users_repo.get_by_username("admin")
    assert check_password_hash(admin.password_hash, "admin123")
