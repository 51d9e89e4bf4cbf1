from __future__ import annotations

import logging
from typing import Any, Optional

from ..audit import actions
from ..audit.model import Actor
from ..audit.service import AuditLog
from ..common.validators import require_non_empty
from ..core.exceptions import DuplicateAssignmentError, DuplicateNameError, NotFoundError, RoleInUseError
from ..users.repository import UserRepository
from .defaults import DEFAULT_ROLES
from .model import PERMISSION_KEYS, AssignedRole, Permissions, Role, RoleSummary
from .repository import RoleRepository

logger = logging.getLogger(__name__)


class RoleService:
    """Use case: role definitions, user-role assignment and permission checks."""

    def __init__(self, roles: RoleRepository, users: UserRepository, audit: AuditLog):
        self._roles = roles
        self._users = users
        self._audit = audit

    # -------- Role definitions --------
    def list_roles(self) -> list[RoleSummary]:
        return list(self._roles.list_with_counts())

    def get_role(self, role_id: int) -> Role:
        role = self._roles.get_by_id(int(role_id))
        if not role:
            raise NotFoundError("Role not found")
        return role

    def create_role(
        self,
        *,
        role_name: str,
        description: Optional[str] = None,
        permissions: Any = None,
        actor: Optional[Actor] = None,
    ) -> int:
        role_name = require_non_empty(role_name, "Role name")
        perms = Permissions.from_mapping(permissions)

        if self._roles.get_by_name(role_name):
            raise DuplicateNameError("Role name already exists")

        role_id = self._roles.create(role_name=role_name, description=(description or "").strip(), permissions=perms)
        self._audit.record_for(actor, actions.ROLE_CREATED, f"Created role: {role_name}", fallback_user_type="admin")
        return role_id

    def update_role(
        self,
        *,
        role_id: int,
        role_name: str,
        description: Optional[str] = None,
        permissions: Any = None,
        actor: Optional[Actor] = None,
    ) -> None:
        role_name = require_non_empty(role_name, "Role name")
        perms = Permissions.from_mapping(permissions)

        self.get_role(role_id)
        clash = self._roles.get_by_name(role_name)
        if clash and clash.role_id != int(role_id):
            raise DuplicateNameError("Role name already exists")

        self._roles.update(
            role_id=int(role_id),
            role_name=role_name,
            description=(description or "").strip(),
            permissions=perms,
        )
        self._audit.record_for(actor, actions.ROLE_UPDATED, f"Updated role: {role_name}", fallback_user_type="admin")

    def delete_role(self, *, role_id: int, actor: Optional[Actor] = None) -> None:
        role = self.get_role(role_id)

        holders = self._roles.count_holders(role.role_id)
        if holders > 0:
            raise RoleInUseError(holders)

        if not self._roles.delete(role.role_id):
            raise NotFoundError("Role not found")
        self._audit.record_for(actor, actions.ROLE_DELETED, f"Deleted role: {role.role_name}", fallback_user_type="admin")

    # -------- Assignments --------
    def assign_role(
        self,
        *,
        user_id: int,
        role_id: int,
        assigned_by: Optional[int] = None,
        actor: Optional[Actor] = None,
    ) -> int:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        role = self.get_role(role_id)

        if self._roles.assignment_exists(user_id=user.user_id, role_id=role.role_id):
            raise DuplicateAssignmentError("Role is already assigned to this user")

        assignment_id = self._roles.assign(user_id=user.user_id, role_id=role.role_id, assigned_by=assigned_by)
        self._audit.record_for(
            actor,
            actions.ROLE_ASSIGNED,
            f"Assigned role {role.role_name} to {user.username}",
            fallback_user_type="admin",
        )
        return assignment_id

    def remove_role(self, *, user_id: int, role_id: int, actor: Optional[Actor] = None) -> None:
        if not self._roles.unassign(user_id=int(user_id), role_id=int(role_id)):
            raise NotFoundError("Role assignment not found")
        self._audit.record_for(
            actor,
            actions.ROLE_REMOVED,
            f"Removed role #{int(role_id)} from user #{int(user_id)}",
            fallback_user_type="admin",
        )

    def list_roles_for_user(self, user_id: int) -> list[AssignedRole]:
        return list(self._roles.list_for_user(int(user_id)))

    # -------- Permission checks --------
    def has_permission(self, user_id: Optional[int], permission_key: str) -> bool:
        if user_id is None or permission_key not in PERMISSION_KEYS:
            return False
        return any(a.role.permissions.granted(permission_key) for a in self._roles.list_for_user(int(user_id)))

    def effective_permissions(self, user_id: Optional[int]) -> Permissions:
        result = Permissions()
        if user_id is None:
            return result
        for assigned in self._roles.list_for_user(int(user_id)):
            result = result.merge(assigned.role.permissions)
        return result

    # -------- Seeding --------
    def seed_default_roles(self) -> list[str]:
        """Create missing baseline roles. Existing names are left untouched."""
        created: list[str] = []
        for template in DEFAULT_ROLES:
            if self._roles.get_by_name(template.role_name):
                continue
            try:
                self._roles.create(
                    role_name=template.role_name,
                    description=template.description,
                    permissions=template.permissions,
                )
            except DuplicateNameError:
                # another process seeded it first
                continue
            created.append(template.role_name)

        if created:
            logger.info("Seeded default roles: %s", ", ".join(created))
        return created
