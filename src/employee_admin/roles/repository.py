from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AssignedRole, Permissions, Role, RoleSummary


class RoleRepository(Protocol):
    """Repository interface for roles and user-role assignments.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, role_id: int) -> Optional[Role]:
        raise NotImplementedError

    def get_by_name(self, role_name: str) -> Optional[Role]:
        raise NotImplementedError

    def create(self, *, role_name: str, description: str, permissions: Permissions) -> int:
        raise NotImplementedError

    def update(self, *, role_id: int, role_name: str, description: str, permissions: Permissions) -> bool:
        raise NotImplementedError

    def delete(self, role_id: int) -> bool:
        raise NotImplementedError

    def count_holders(self, role_id: int) -> int:
        raise NotImplementedError

    def list_with_counts(self) -> Sequence[RoleSummary]:
        raise NotImplementedError

    def assignment_exists(self, *, user_id: int, role_id: int) -> bool:
        raise NotImplementedError

    def assign(self, *, user_id: int, role_id: int, assigned_by: Optional[int]) -> int:
        """Insert the assignment. Raises DuplicateAssignmentError when the pair already exists."""

        raise NotImplementedError

    def unassign(self, *, user_id: int, role_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[AssignedRole]:
        """Most recently assigned first."""

        raise NotImplementedError
