"""Baseline roles created on first startup."""

from __future__ import annotations

from dataclasses import dataclass

from .model import Permissions


@dataclass(frozen=True)
class RoleTemplate:
    role_name: str
    description: str
    permissions: Permissions


SUPER_ADMIN = "Super Admin"

DEFAULT_ROLES: tuple[RoleTemplate, ...] = (
    RoleTemplate(
        role_name=SUPER_ADMIN,
        description="Full access to every feature, including role management",
        permissions=Permissions.all_granted(),
    ),
    RoleTemplate(
        role_name="HR Manager",
        description="Manages employees, leave, salaries, grievances and resignations",
        permissions=Permissions.only(
            "view_employees",
            "manage_employees",
            "view_leave",
            "approve_leave",
            "view_biodata",
            "manage_biodata",
            "view_salaries",
            "manage_salaries",
            "view_holidays",
            "manage_holidays",
            "view_grievances",
            "manage_grievances",
            "view_resignations",
            "manage_resignations",
        ),
    ),
    RoleTemplate(
        role_name="Department Manager",
        description="Views team data and approves leave",
        permissions=Permissions.only("view_employees", "view_leave", "approve_leave", "view_holidays"),
    ),
    RoleTemplate(
        role_name="Employee",
        description="Views own leave and company holidays",
        permissions=Permissions.only("view_own_leave", "apply_leave", "view_holidays"),
    ),
)
