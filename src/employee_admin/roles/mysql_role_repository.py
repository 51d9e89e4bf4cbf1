from __future__ import annotations

import json
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateAssignmentError, DuplicateNameError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, load_json_column
from .model import AssignedRole, Permissions, Role, RoleSummary
from .repository import RoleRepository


def _row_to_role(row: dict) -> Role:
    return Role(
        role_id=int(row["id"]),
        role_name=row["role_name"],
        description=row.get("description") or "",
        permissions=Permissions.from_stored(load_json_column(row.get("permissions"))),
        created_at=row.get("created_at"),
    )


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, role_id: int) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, role_name, description, permissions, created_at FROM roles WHERE id=%s",
                (int(role_id),),
            )
            row = fetchone(cur)
            return _row_to_role(row) if row else None

    def get_by_name(self, role_name: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, role_name, description, permissions, created_at FROM roles WHERE role_name=%s",
                (role_name,),
            )
            row = fetchone(cur)
            return _row_to_role(row) if row else None

    def create(self, *, role_name: str, description: str, permissions: Permissions) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO roles(role_name, description, permissions) VALUES(%s,%s,%s)",
                    (role_name, description, json.dumps(permissions.to_dict())),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateNameError("Role name already exists")
            raise

    def update(self, *, role_id: int, role_name: str, description: str, permissions: Permissions) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE roles
                    SET role_name=%s, description=%s, permissions=%s
                    WHERE id=%s
                    """,
                    (role_name, description, json.dumps(permissions.to_dict()), int(role_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateNameError("Role name already exists")
            raise

    def delete(self, role_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM roles WHERE id=%s", (int(role_id),))
            return cur.rowcount > 0

    def count_holders(self, role_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM user_roles WHERE role_id=%s", (int(role_id),))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_with_counts(self) -> Sequence[RoleSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.id, r.role_name, r.description, r.permissions, r.created_at,
                       COUNT(ur.id) AS user_count
                FROM roles r
                LEFT JOIN user_roles ur ON ur.role_id = r.id
                GROUP BY r.id, r.role_name, r.description, r.permissions, r.created_at
                ORDER BY r.id
                """
            )
            return [RoleSummary(role=_row_to_role(r), user_count=int(r["user_count"])) for r in fetchall(cur)]

    def assignment_exists(self, *, user_id: int, role_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM user_roles WHERE user_id=%s AND role_id=%s",
                (int(user_id), int(role_id)),
            )
            return fetchone(cur) is not None

    def assign(self, *, user_id: int, role_id: int, assigned_by: Optional[int]) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO user_roles(user_id, role_id, assigned_by) VALUES(%s,%s,%s)",
                    (int(user_id), int(role_id), assigned_by),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_user_role lost a race against a concurrent assignment
            if is_duplicate_key(e):
                raise DuplicateAssignmentError("Role is already assigned to this user")
            raise

    def unassign(self, *, user_id: int, role_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM user_roles WHERE user_id=%s AND role_id=%s",
                (int(user_id), int(role_id)),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int) -> Sequence[AssignedRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.id, r.role_name, r.description, r.permissions, r.created_at,
                       ur.assigned_at, ur.assigned_by
                FROM user_roles ur
                JOIN roles r ON r.id = ur.role_id
                WHERE ur.user_id=%s
                ORDER BY ur.assigned_at DESC, ur.id DESC
                """,
                (int(user_id),),
            )
            return [
                AssignedRole(role=_row_to_role(r), assigned_at=r.get("assigned_at"), assigned_by=r.get("assigned_by"))
                for r in fetchall(cur)
            ]
