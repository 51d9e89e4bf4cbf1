from __future__ import annotations

from flask import Flask

from ..common.api import admin_required, api_view, current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    salaries = container.salary_service

    @app.route("/api/salaries", methods=["GET"], endpoint="list_salaries")
    @api_view
    @admin_required
    def list_salaries():
        return ok(salaries=[s.to_dict() for s in salaries.list_all()])

    @app.route("/api/salaries/employee/<int:employee_id>", methods=["GET"], endpoint="employee_salaries")
    @api_view
    @login_required
    def employee_salaries(employee_id: int):
        rows = salaries.list_for_employee(employee_id, actor=current_actor())
        return ok(salaries=[s.to_dict() for s in rows])

    @app.route("/api/salaries", methods=["POST"], endpoint="create_salary")
    @api_view
    @admin_required
    def create_salary():
        salary_id = salaries.create(json_body(), actor=current_actor())
        return ok("Salary record added successfully", id=salary_id)

    @app.route("/api/salaries/<int:salary_id>", methods=["PUT"], endpoint="update_salary")
    @api_view
    @admin_required
    def update_salary(salary_id: int):
        fields = salaries.update(salary_id, json_body(), actor=current_actor())
        return ok("Salary record updated successfully", net_salary=fields.net_salary)

    @app.route("/api/salaries/<int:salary_id>", methods=["DELETE"], endpoint="delete_salary")
    @api_view
    @admin_required
    def delete_salary(salary_id: int):
        salaries.delete(salary_id, actor=current_actor())
        return ok("Salary record deleted successfully")
