from __future__ import annotations

from flask import Flask, request

from ..common.api import admin_required, api_view, current_actor, json_body, login_required, ok, query_int
from ..common.access import ensure_admin
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_service

    @app.route("/api/leave", methods=["GET"], endpoint="get_leave")
    @api_view
    @login_required
    def get_leave():
        actor = current_actor()
        leave_id = query_int("id")
        employee_id = query_int("employee_id")

        if leave_id is not None:
            return ok(data=leaves.get_leave(leave_id, actor=actor).to_dict())
        if employee_id is not None:
            return ok(data=[leave.to_dict() for leave in leaves.list_for_employee(employee_id, actor=actor)])
        if request.args.get("all"):
            ensure_admin(actor)
            return ok(data=[leave.to_dict() for leave in leaves.list_all()])
        raise ValidationError("Provide id, employee_id or all")

    @app.route("/api/leave", methods=["POST"], endpoint="create_leave")
    @api_view
    @login_required
    def create_leave():
        data = json_body()
        leave_id = leaves.create_leave(
            leave_type=data.get("leave_type"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            reason=data.get("reason"),
            employee_id=data.get("employee_id"),
            actor=current_actor(),
        )
        return ok("Leave application submitted successfully", id=leave_id)

    @app.route("/api/leave/<int:leave_id>", methods=["PUT"], endpoint="update_leave")
    @api_view
    @login_required
    def update_leave(leave_id: int):
        data = json_body()
        leaves.update_leave(
            leave_id=leave_id,
            leave_type=data.get("leave_type"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            reason=data.get("reason"),
            actor=current_actor(),
        )
        return ok("Leave application updated successfully")

    @app.route("/api/leave/<int:leave_id>", methods=["DELETE"], endpoint="delete_leave")
    @api_view
    @login_required
    def delete_leave(leave_id: int):
        leaves.delete_leave(leave_id=leave_id, actor=current_actor())
        return ok("Leave application deleted successfully")

    @app.route("/api/leave/<int:leave_id>/status", methods=["PATCH"], endpoint="set_leave_status")
    @api_view
    @admin_required
    def set_leave_status(leave_id: int):
        status = leaves.set_status(leave_id=leave_id, status=json_body().get("status"), actor=current_actor())
        return ok(f"Leave application {status.value} successfully")
