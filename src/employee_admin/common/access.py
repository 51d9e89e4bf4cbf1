"""Ownership rules shared by the record services.

An actor of None means a trusted internal caller (scripts, bootstrap) and skips the checks.
"""

from __future__ import annotations

from typing import Optional

from ..audit.model import Actor
from ..core.exceptions import AuthorizationError
from .validators import require_int


def ensure_admin(actor: Optional[Actor]) -> None:
    if actor is not None and not actor.is_admin:
        raise AuthorizationError("Admin access required")


def ensure_owner(actor: Optional[Actor], employee_id: int) -> None:
    if actor is not None and actor.user_id != int(employee_id):
        raise AuthorizationError("You can only modify your own records")


def ensure_owner_or_admin(actor: Optional[Actor], employee_id: int) -> None:
    if actor is not None and not actor.is_admin and actor.user_id != int(employee_id):
        raise AuthorizationError("You do not have access to this record")


def resolve_employee_id(actor: Optional[Actor], employee_id) -> Optional[int]:
    """Body employee_id if given, else the acting user's own id."""
    if employee_id not in (None, ""):
        return require_int(employee_id, "employee_id")
    return actor.user_id if actor is not None else None
