from __future__ import annotations

from flask import Flask, request

from ..common.api import api_view, current_actor, ok, permission_required, query_int
from ..common.validators import optional_date
from ..container import Container
from ..core.constants import DEFAULT_LOG_LIMIT, DEFAULT_STATS_DAYS
from . import actions


def register(app: Flask, container: Container) -> None:
    view_logs = permission_required(container.role_service, "view_activity_logs")

    @app.route("/api/activity-logs", methods=["GET"], endpoint="activity_logs")
    @api_view
    @view_logs
    def activity_logs():
        page = container.activity_log_service.query(
            user_id=query_int("user_id"),
            action=request.args.get("action"),
            start_date=optional_date(request.args.get("start_date"), "start_date"),
            end_date=optional_date(request.args.get("end_date"), "end_date"),
            limit=query_int("limit", DEFAULT_LOG_LIMIT),
            offset=query_int("offset", 0),
        )
        container.audit_log.record_for(
            current_actor(),
            actions.ACTIVITY_LOGS_VIEWED,
            f"Viewed activity logs ({len(page.rows)} of {page.total})",
            fallback_user_type="admin",
        )
        return ok(
            logs=[row.to_dict() for row in page.rows],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        )

    @app.route("/api/activity-logs/stats", methods=["GET"], endpoint="activity_log_stats")
    @api_view
    @view_logs
    def activity_log_stats():
        days = query_int("days", DEFAULT_STATS_DAYS)
        stats = container.activity_log_service.stats(days)
        return ok(stats=[s.to_dict() for s in stats], days=days)
