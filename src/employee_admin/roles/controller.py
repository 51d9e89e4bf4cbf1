from __future__ import annotations

from flask import Flask, session

from ..common.api import admin_required, api_view, current_actor, json_body, login_required, ok, permission_required
from ..common.validators import require_int, require_non_empty
from ..container import Container
from .model import PERMISSION_KEYS


def register(app: Flask, container: Container) -> None:
    roles = container.role_service
    manage_roles = permission_required(roles, "manage_roles")

    @app.route("/api/permissions", methods=["GET"], endpoint="list_permissions")
    @api_view
    @login_required
    def list_permissions():
        return ok(permissions=list(PERMISSION_KEYS))

    @app.route("/api/roles", methods=["GET"], endpoint="list_roles")
    @api_view
    @admin_required
    def list_roles():
        return ok(roles=[r.to_dict() for r in roles.list_roles()])

    @app.route("/api/roles", methods=["POST"], endpoint="create_role")
    @api_view
    @manage_roles
    def create_role():
        data = json_body()
        role_id = roles.create_role(
            role_name=data.get("role_name") or "",
            description=data.get("description"),
            permissions=data.get("permissions"),
            actor=current_actor(),
        )
        return ok("Role created successfully", status=201, id=role_id)

    @app.route("/api/roles/<int:role_id>", methods=["PUT"], endpoint="update_role")
    @api_view
    @manage_roles
    def update_role(role_id: int):
        data = json_body()
        roles.update_role(
            role_id=role_id,
            role_name=data.get("role_name") or "",
            description=data.get("description"),
            permissions=data.get("permissions"),
            actor=current_actor(),
        )
        return ok("Role updated successfully")

    @app.route("/api/roles/<int:role_id>", methods=["DELETE"], endpoint="delete_role")
    @api_view
    @manage_roles
    def delete_role(role_id: int):
        roles.delete_role(role_id=role_id, actor=current_actor())
        return ok("Role deleted successfully")

    # -------- Assignments --------
    @app.route("/api/users/<int:user_id>/roles", methods=["GET"], endpoint="list_user_roles")
    @api_view
    @admin_required
    def list_user_roles(user_id: int):
        return ok(roles=[r.to_dict() for r in roles.list_roles_for_user(user_id)])

    @app.route("/api/users/<int:user_id>/roles", methods=["POST"], endpoint="assign_user_role")
    @api_view
    @manage_roles
    def assign_user_role(user_id: int):
        role_id = require_int(require_non_empty(json_body().get("role_id"), "role_id"), "role_id")
        roles.assign_role(
            user_id=user_id,
            role_id=role_id,
            assigned_by=int(session["user_id"]),
            actor=current_actor(),
        )
        return ok("Role assigned successfully", status=201)

    @app.route("/api/users/<int:user_id>/roles/<int:role_id>", methods=["DELETE"], endpoint="remove_user_role")
    @api_view
    @manage_roles
    def remove_user_role(user_id: int, role_id: int):
        roles.remove_role(user_id=user_id, role_id=role_id, actor=current_actor())
        return ok("Role removed successfully")

    @app.route("/api/users/<int:user_id>/permissions/<permission_key>", methods=["GET"], endpoint="check_permission")
    @api_view
    @admin_required
    def check_permission(user_id: int, permission_key: str):
        return ok(has_permission=roles.has_permission(user_id, permission_key))
