from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import UserType
from ..roles.defaults import SUPER_ADMIN
from .connection import DBConfig

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must not pin the database name
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split on ';' outside quoted strings. Line comments are dropped."""
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for line in sql.splitlines(keepends=True):
        if not in_single and not in_double and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if escape:
                buf.append(ch)
                escape = False
            elif ch == "\\":
                buf.append(ch)
                escape = True
            elif ch == "'" and not in_double:
                in_single = not in_single
                buf.append(ch)
            elif ch == '"' and not in_single:
                in_double = not in_double
                buf.append(ch)
            elif ch == ";" and not in_single and not in_double:
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
            else:
                buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    """Create the database and every table. Safe to run repeatedly."""
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def ensure_default_admin(container: "Container", *, username: str, password: str, email: Optional[str] = None) -> int:
    """Create the bootstrap admin if missing and make sure it holds Super Admin."""
    users = container.users_repo
    admin = users.get_by_username(username)
    if admin is None:
        admin_id = users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            user_type=UserType.ADMIN,
            email=email or None,
            email_verified=True,
        )
        logger.info("Created default admin account %r", username)
    else:
        admin_id = admin.user_id

    super_admin = container.roles_repo.get_by_name(SUPER_ADMIN)
    if super_admin and not container.roles_repo.assignment_exists(user_id=admin_id, role_id=super_admin.role_id):
        container.roles_repo.assign(user_id=admin_id, role_id=super_admin.role_id, assigned_by=None)
        logger.info("Granted %s to %r", SUPER_ADMIN, username)
    return admin_id


def seed_defaults(container: "Container", *, admin_username: str, admin_password: str, admin_email: Optional[str] = None) -> None:
    container.role_service.seed_default_roles()
    ensure_default_admin(container, username=admin_username, password=admin_password, email=admin_email)
