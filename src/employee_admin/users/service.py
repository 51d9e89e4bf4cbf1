from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..audit import actions
from ..audit.model import Actor
from ..audit.service import AuditLog
from ..common.datetime_utils import now_local
from ..common.validators import require_choice, require_fields, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, VERIFICATION_TOKEN_HOURS
from ..core.enums import UserType
from ..core.exceptions import AuthenticationError, DuplicateNameError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

if TYPE_CHECKING:
    from ..roles.service import RoleService


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    user_type: UserType
    email: Optional[str]
    permissions: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "user_type": self.user_type.value,
            "email": self.email,
            "permissions": dict(self.permissions),
        }


def _ensure_unique(users: UserRepository, *, username: str, email: Optional[str], phone: Optional[str]) -> None:
    if users.get_by_username(username):
        raise DuplicateNameError("Username already exists")
    if email and users.get_by_email(email):
        raise DuplicateNameError("Email already registered")
    if phone and users.get_by_phone(phone):
        raise DuplicateNameError("Phone number already registered")


class AuthService:
    """Use case: signup, email verification, login."""

    def __init__(
        self,
        users: UserRepository,
        roles: "RoleService",
        audit: AuditLog,
        *,
        require_email_verification: bool = False,
    ):
        self._users = users
        self._roles = roles
        self._audit = audit
        self._require_email_verification = require_email_verification

    def signup(
        self,
        *,
        username: str,
        email: str,
        phone: str,
        password: str,
        user_type: str,
        ip_address: Optional[str] = None,
    ) -> int:
        require_fields(
            {"username": username, "email": email, "phone": phone, "password": password, "user_type": user_type},
            ("username", "email", "phone", "password", "user_type"),
        )
        username = username.strip()
        email = email.strip().lower()
        phone = phone.strip()
        kind = require_choice(user_type, UserType, "user type")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        _ensure_unique(self._users, username=username, email=email, phone=phone)

        token = secrets.token_urlsafe(32)
        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            user_type=kind,
            email=email,
            phone=phone,
            email_verified=False,
            verification_token=token,
            verification_expires=now_local() + timedelta(hours=VERIFICATION_TOKEN_HOURS),
        )
        self._audit.record(user_id, username, kind.value, actions.SIGNUP, f"New {kind.value} account registered", ip_address)
        return user_id

    def verify_email(self, token: str, *, ip_address: Optional[str] = None) -> User:
        token = require_non_empty(token, "Verification token")
        user = self._users.get_by_verification_token(token)
        if not user:
            raise NotFoundError("Invalid verification link")
        if user.verification_expires and user.verification_expires < now_local():
            raise ValidationError("Verification link has expired")

        self._users.mark_email_verified(user.user_id)
        self._audit.record(
            user.user_id, user.username, user.user_type.value, actions.EMAIL_VERIFIED, "Email address verified", ip_address
        )
        return user

    def authenticate(self, username: str, password: str, user_type: str, *, ip_address: Optional[str] = None) -> SessionUser:
        require_fields({"username": username, "password": password, "user_type": user_type}, ("username", "password", "user_type"))
        kind = require_choice(user_type, UserType, "user type")

        user = self._users.get_by_username(username.strip())
        ok = False
        if user and user.user_type == kind:
            try:
                ok = check_password_hash(user.password_hash, password)
            except ValueError:
                # placeholder or corrupted hash
                ok = False

        if not ok:
            self._audit.record(
                user.user_id if user else None,
                username.strip(),
                kind.value,
                actions.LOGIN_FAILED,
                "Failed login attempt",
                ip_address,
            )
            raise AuthenticationError("Invalid credentials")

        if self._require_email_verification and not user.email_verified:
            raise AuthenticationError("Please verify your email before logging in")

        self._audit.record(user.user_id, user.username, user.user_type.value, actions.LOGIN, "User logged in", ip_address)

        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            user_type=user.user_type,
            email=user.email,
            permissions=self._roles.effective_permissions(user.user_id).to_dict(),
        )

    def logout(self, actor: Actor) -> None:
        if actor.is_authenticated:
            self._audit.record_for(actor, actions.LOGOUT, "User logged out")


class UserService:
    """Use case: manage employee accounts (admin)."""

    def __init__(self, users: UserRepository, roles: "RoleService", audit: AuditLog):
        self._users = users
        self._roles = roles
        self._audit = audit

    def list_employees(self) -> list[dict]:
        return list(self._users.list_employees())

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def add_employee(
        self,
        *,
        username: str,
        password: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        role_id: Optional[int] = None,
        actor: Optional[Actor] = None,
    ) -> int:
        if not (username or "").strip() or not password:
            raise ValidationError("Username and password are required")
        username = username.strip()
        email = (email or "").strip().lower() or None
        phone = (phone or "").strip() or None
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        _ensure_unique(self._users, username=username, email=email, phone=phone)
        if role_id is not None:
            self._roles.get_role(role_id)

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            user_type=UserType.EMPLOYEE,
            email=email,
            phone=phone,
            email_verified=True,
        )
        self._audit.record_for(actor, actions.EMPLOYEE_CREATED, f"Added employee: {username}", fallback_user_type="admin")

        if role_id is not None:
            self._roles.assign_role(
                user_id=user_id,
                role_id=role_id,
                assigned_by=actor.user_id if actor else None,
                actor=actor,
            )
        return user_id

    def update_employee(
        self,
        *,
        user_id: int,
        username: str,
        password: Optional[str] = None,
        actor: Optional[Actor] = None,
    ) -> None:
        username = require_non_empty(username, "Username")
        user = self.get_user(user_id)

        clash = self._users.get_by_username(username)
        if clash and clash.user_id != user.user_id:
            raise DuplicateNameError("Username already exists")

        password_hash = None
        if password and password.strip():
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        self._users.update_credentials(user_id=user.user_id, username=username, password_hash=password_hash)
        self._audit.record_for(actor, actions.EMPLOYEE_UPDATED, f"Updated employee: {username}", fallback_user_type="admin")

    def delete_employee(self, *, user_id: int, actor: Optional[Actor] = None) -> None:
        user = self._users.get_by_id(int(user_id))
        if not user or user.user_type != UserType.EMPLOYEE:
            raise NotFoundError("Employee not found")

        if not self._users.delete_employee_cascade(user.user_id):
            raise NotFoundError("Employee not found")
        self._audit.record_for(
            actor,
            actions.EMPLOYEE_DELETED,
            f"Deleted employee {user.username} and related data",
            fallback_user_type="admin",
        )
