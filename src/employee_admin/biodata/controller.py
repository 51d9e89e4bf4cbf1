from __future__ import annotations

from flask import Flask, request

from ..common.api import api_view, current_actor, json_body, login_required, ok, query_int
from ..common.access import ensure_admin
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    biodata = container.biodata_service

    @app.route("/api/biodata", methods=["GET"], endpoint="get_biodata")
    @api_view
    @login_required
    def get_biodata():
        actor = current_actor()
        biodata_id = query_int("id")
        employee_id = query_int("employee_id")

        if biodata_id is not None:
            return ok(data=biodata.get(biodata_id, actor=actor).to_dict())
        if employee_id is not None:
            return ok(data=[b.to_dict() for b in biodata.list_for_employee(employee_id, actor=actor)])
        if request.args.get("all"):
            ensure_admin(actor)
            return ok(data=[b.to_dict() for b in biodata.list_all()])
        raise ValidationError("Provide id, employee_id or all")

    @app.route("/api/biodata", methods=["POST"], endpoint="create_biodata")
    @api_view
    @login_required
    def create_biodata():
        biodata_id = biodata.create(json_body(), actor=current_actor())
        return ok("Biodata added successfully", id=biodata_id)

    @app.route("/api/biodata/<int:biodata_id>", methods=["PUT"], endpoint="update_biodata")
    @api_view
    @login_required
    def update_biodata(biodata_id: int):
        biodata.update(biodata_id, json_body(), actor=current_actor())
        return ok("Biodata updated successfully")

    @app.route("/api/biodata/<int:biodata_id>", methods=["DELETE"], endpoint="delete_biodata")
    @api_view
    @login_required
    def delete_biodata(biodata_id: int):
        biodata.delete(biodata_id, actor=current_actor())
        return ok("Biodata deleted successfully")
