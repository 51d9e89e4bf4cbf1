from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..core.exceptions import InvalidPermissionsError


@dataclass(frozen=True)
class Permissions:
    """Fixed permission vocabulary. Every role carries the complete set; absent keys are False."""

    view_employees: bool = False
    manage_employees: bool = False
    view_leave: bool = False
    view_own_leave: bool = False
    apply_leave: bool = False
    approve_leave: bool = False
    view_biodata: bool = False
    manage_biodata: bool = False
    view_salaries: bool = False
    manage_salaries: bool = False
    view_holidays: bool = False
    manage_holidays: bool = False
    view_grievances: bool = False
    manage_grievances: bool = False
    view_resignations: bool = False
    manage_resignations: bool = False
    manage_roles: bool = False
    view_activity_logs: bool = False

    @classmethod
    def from_mapping(cls, value: Any) -> "Permissions":
        """Strict parse of caller input: a flat mapping of known keys to booleans."""
        if value is None:
            return cls()
        if not isinstance(value, Mapping):
            raise InvalidPermissionsError("Permissions must be an object of permission name to true/false")

        unknown = [k for k in value if k not in PERMISSION_KEYS]
        if unknown:
            raise InvalidPermissionsError(f"Unknown permission(s): {', '.join(sorted(map(str, unknown)))}")

        for key, flag in value.items():
            if not isinstance(flag, bool):
                raise InvalidPermissionsError(f"Permission '{key}' must be true or false")

        return cls(**dict(value))

    @classmethod
    def from_stored(cls, value: Any) -> "Permissions":
        """Lenient parse of a stored document: unknown keys dropped, non-True values read as False."""
        if not isinstance(value, Mapping):
            return cls()
        return cls(**{k: value.get(k) is True for k in PERMISSION_KEYS})

    @classmethod
    def all_granted(cls) -> "Permissions":
        return cls(**{k: True for k in PERMISSION_KEYS})

    @classmethod
    def only(cls, *keys: str) -> "Permissions":
        return cls.from_mapping({k: True for k in keys})

    def granted(self, key: str) -> bool:
        if key not in PERMISSION_KEYS:
            return False
        return getattr(self, key) is True

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    def merge(self, other: "Permissions") -> "Permissions":
        return Permissions(**{k: self.granted(k) or other.granted(k) for k in PERMISSION_KEYS})


PERMISSION_KEYS: tuple[str, ...] = tuple(f.name for f in fields(Permissions))


@dataclass(frozen=True)
class Role:
    role_id: int
    role_name: str
    description: str
    permissions: Permissions = field(default_factory=Permissions)
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.role_id,
            "role_name": self.role_name,
            "description": self.description,
            "permissions": self.permissions.to_dict(),
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class RoleSummary:
    """Role plus the number of users currently holding it."""

    role: Role
    user_count: int

    def to_dict(self) -> dict:
        out = self.role.to_dict()
        out["user_count"] = self.user_count
        return out


@dataclass(frozen=True)
class AssignedRole:
    role: Role
    assigned_at: Optional[datetime]
    assigned_by: Optional[int] = None

    def to_dict(self) -> dict:
        out = self.role.to_dict()
        out["assigned_at"] = self.assigned_at
        out["assigned_by"] = self.assigned_by
        return out
