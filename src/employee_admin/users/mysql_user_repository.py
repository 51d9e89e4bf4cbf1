from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import UserType
from ..core.exceptions import DuplicateNameError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    id, username, email, phone, password, user_type, email_verified,
    verification_token, verification_expires, created_at
"""

# Owned tables, children first. Removed in the same transaction as the user row.
_OWNED_TABLES = (
    ("biodata", "employee_id"),
    ("leave_applications", "employee_id"),
    ("salaries", "employee_id"),
    ("grievances", "employee_id"),
    ("resignations", "employee_id"),
    ("user_roles", "user_id"),
)


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        username=row["username"],
        password_hash=row["password"],
        user_type=UserType(row["user_type"]),
        email=row.get("email"),
        phone=row.get("phone"),
        email_verified=bool(row.get("email_verified")),
        verification_token=row.get("verification_token"),
        verification_expires=row.get("verification_expires"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: object) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_by_phone(self, phone: str) -> Optional[User]:
        return self._get_one("phone", phone)

    def get_by_verification_token(self, token: str) -> Optional[User]:
        return self._get_one("verification_token", token)

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        user_type: UserType,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        email_verified: bool = False,
        verification_token: Optional[str] = None,
        verification_expires: Optional[datetime] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(username, email, phone, password, user_type,
                                      email_verified, verification_token, verification_expires)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        username,
                        email,
                        phone,
                        password_hash,
                        user_type.value,
                        1 if email_verified else 0,
                        verification_token,
                        verification_expires,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateNameError("Username, email or phone already exists")
            raise

    def update_credentials(self, *, user_id: int, username: str, password_hash: Optional[str] = None) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if password_hash:
                    cur.execute(
                        "UPDATE users SET username=%s, password=%s WHERE id=%s",
                        (username, password_hash, int(user_id)),
                    )
                else:
                    cur.execute("UPDATE users SET username=%s WHERE id=%s", (username, int(user_id)))
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateNameError("Username already exists")
            raise

    def mark_email_verified(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET email_verified=1, verification_token=NULL, verification_expires=NULL
                WHERE id=%s
                """,
                (int(user_id),),
            )
            return cur.rowcount > 0

    def delete_employee_cascade(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM users WHERE id=%s AND user_type=%s FOR UPDATE",
                (int(user_id), UserType.EMPLOYEE.value),
            )
            if fetchone(cur) is None:
                return False

            for table, column in _OWNED_TABLES:
                cur.execute(f"DELETE FROM {table} WHERE {column}=%s", (int(user_id),))
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return True

    def list_employees(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.username, u.email AS account_email, u.user_type, u.email_verified, u.created_at,
                       b.full_name, b.email, b.phone, b.position, b.department
                FROM users u
                LEFT JOIN biodata b ON u.id = b.employee_id
                WHERE u.user_type = 'employee'
                ORDER BY u.created_at DESC
                """
            )
            out: list[dict] = []
            for r in fetchall(cur):
                out.append(
                    {
                        "id": int(r["id"]),
                        "username": r["username"],
                        "user_type": r["user_type"],
                        "email_verified": bool(r.get("email_verified")),
                        "created_at": r.get("created_at"),
                        "full_name": r.get("full_name"),
                        "email": r.get("email") or r.get("account_email"),
                        "phone": r.get("phone"),
                        "position": r.get("position"),
                        "department": r.get("department"),
                    }
                )
            return out
