from __future__ import annotations

from flask import Flask

from ..common.api import admin_required, api_view, current_actor, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    holidays = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="list_holidays")
    @api_view
    def list_holidays():
        return ok(holidays=[h.to_dict() for h in holidays.list_all()])

    @app.route("/api/holidays/year/<int:year>", methods=["GET"], endpoint="holidays_for_year")
    @api_view
    def holidays_for_year(year: int):
        return ok(holidays=[h.to_dict() for h in holidays.list_for_year(year)])

    @app.route("/api/holidays", methods=["POST"], endpoint="create_holiday")
    @api_view
    @admin_required
    def create_holiday():
        holiday_id = holidays.create(json_body(), actor=current_actor())
        return ok("Holiday added successfully", id=holiday_id)

    @app.route("/api/holidays/<int:holiday_id>", methods=["PUT"], endpoint="update_holiday")
    @api_view
    @admin_required
    def update_holiday(holiday_id: int):
        holidays.update(holiday_id, json_body(), actor=current_actor())
        return ok("Holiday updated successfully")

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="delete_holiday")
    @api_view
    @admin_required
    def delete_holiday(holiday_id: int):
        holidays.delete(holiday_id, actor=current_actor())
        return ok("Holiday deleted successfully")
