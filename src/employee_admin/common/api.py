"""Helpers shared by the JSON controllers: session actor, body parsing, guards, error envelope."""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any, Optional

import mysql.connector
from flask import jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..audit.model import Actor
from ..core.exceptions import AuthenticationError, AuthorizationError, DatabaseError, DomainError, ValidationError
from .validators import require_int

if TYPE_CHECKING:
    from ..roles.service import RoleService

logger = logging.getLogger(__name__)


def current_actor() -> Actor:
    """Identity of the logged-in user (or anonymous) plus the caller address."""
    if "user_id" not in session:
        return Actor.anonymous(ip_address=request.remote_addr)
    return Actor(
        user_id=int(session["user_id"]),
        username=session.get("username"),
        user_type=session.get("user_type"),
        ip_address=request.remote_addr,
    )


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return default
    return require_int(raw, name)


def ok(message: Optional[str] = None, status: int = 200, **payload: Any):
    body: dict = {"success": True}
    if message:
        body["message"] = message
    body.update(payload)
    return jsonify(body), status


def api_view(view):
    """Map domain and driver errors to the `{success, message}` envelope."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except HTTPException:
            raise
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), e.status_code
        except mysql.connector.Error:
            logger.exception("Database error in %s %s", request.method, request.path)
            err = DatabaseError()
            return jsonify({"success": False, "message": str(err)}), err.status_code
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Login required")
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Login required")
        if session.get("user_type") != "admin":
            raise AuthorizationError("Admin access required")
        return view(*args, **kwargs)

    return wrapper


def permission_required(roles: "RoleService", permission_key: str):
    """Require that one of the caller's roles grants `permission_key`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Login required")
            if not roles.has_permission(int(session["user_id"]), permission_key):
                raise AuthorizationError(f"Permission denied: {permission_key}")
            return view(*args, **kwargs)

        return wrapper

    return decorator
