from __future__ import annotations

from flask import Flask

from ..common.api import admin_required, api_view, current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    requests = container.request_service

    # -------- Grievances --------
    @app.route("/api/grievances", methods=["GET"], endpoint="list_grievances")
    @api_view
    @admin_required
    def list_grievances():
        return ok(grievances=[g.to_dict() for g in requests.list_grievances()])

    @app.route("/api/grievances/employee/<int:employee_id>", methods=["GET"], endpoint="employee_grievances")
    @api_view
    @login_required
    def employee_grievances(employee_id: int):
        rows = requests.list_grievances_for_employee(employee_id, actor=current_actor())
        return ok(grievances=[g.to_dict() for g in rows])

    @app.route("/api/grievances", methods=["POST"], endpoint="submit_grievance")
    @api_view
    @login_required
    def submit_grievance():
        data = json_body()
        grievance_id = requests.submit_grievance(
            subject=data.get("subject"),
            description=data.get("description"),
            employee_id=data.get("employee_id"),
            actor=current_actor(),
        )
        return ok("Grievance submitted successfully", id=grievance_id)

    @app.route("/api/grievances/<int:grievance_id>", methods=["PATCH"], endpoint="decide_grievance")
    @api_view
    @admin_required
    def decide_grievance(grievance_id: int):
        data = json_body()
        requests.decide_grievance(
            grievance_id=grievance_id,
            status=data.get("status"),
            admin_response=data.get("admin_response"),
            actor=current_actor(),
        )
        return ok("Grievance updated successfully")

    @app.route("/api/grievances/<int:grievance_id>", methods=["DELETE"], endpoint="delete_grievance")
    @api_view
    @login_required
    def delete_grievance(grievance_id: int):
        requests.delete_grievance(grievance_id=grievance_id, actor=current_actor())
        return ok("Grievance deleted successfully")

    # -------- Resignations --------
    @app.route("/api/resignations", methods=["GET"], endpoint="list_resignations")
    @api_view
    @admin_required
    def list_resignations():
        return ok(resignations=[r.to_dict() for r in requests.list_resignations()])

    @app.route("/api/resignations/employee/<int:employee_id>", methods=["GET"], endpoint="employee_resignations")
    @api_view
    @login_required
    def employee_resignations(employee_id: int):
        rows = requests.list_resignations_for_employee(employee_id, actor=current_actor())
        return ok(resignations=[r.to_dict() for r in rows])

    @app.route("/api/resignations", methods=["POST"], endpoint="submit_resignation")
    @api_view
    @login_required
    def submit_resignation():
        data = json_body()
        resignation_id = requests.submit_resignation(
            reason=data.get("reason"),
            last_working_day=data.get("last_working_day"),
            employee_id=data.get("employee_id"),
            actor=current_actor(),
        )
        return ok("Resignation submitted successfully", id=resignation_id)

    @app.route("/api/resignations/<int:resignation_id>", methods=["PATCH"], endpoint="decide_resignation")
    @api_view
    @admin_required
    def decide_resignation(resignation_id: int):
        data = json_body()
        requests.decide_resignation(
            resignation_id=resignation_id,
            status=data.get("status"),
            admin_notes=data.get("admin_notes"),
            actor=current_actor(),
        )
        return ok("Resignation updated successfully")

    @app.route("/api/resignations/<int:resignation_id>", methods=["DELETE"], endpoint="delete_resignation")
    @api_view
    @login_required
    def delete_resignation(resignation_id: int):
        requests.delete_resignation(resignation_id=resignation_id, actor=current_actor())
        return ok("Resignation deleted successfully")
