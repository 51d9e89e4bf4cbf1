from __future__ import annotations

from typing import Any, Optional

from ..audit import actions
from ..audit.model import Actor
from ..audit.service import AuditLog
from ..common.access import ensure_admin, ensure_owner, ensure_owner_or_admin, resolve_employee_id
from ..common.validators import require_choice, require_date, require_fields
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import LeaveApplication
from .repository import LeaveRepository

_STATUS_ACTIONS = {
    LeaveStatus.APPROVED: actions.LEAVE_APPROVED,
    LeaveStatus.REJECTED: actions.LEAVE_REJECTED,
    LeaveStatus.PENDING: actions.LEAVE_STATUS_UPDATED,
}


class LeaveService:
    def __init__(self, leaves: LeaveRepository, audit: AuditLog):
        self._leaves = leaves
        self._audit = audit

    @staticmethod
    def _validate(leave_type: Any, start_date: Any, end_date: Any, reason: Any):
        require_fields(
            {"leave_type": leave_type, "start_date": start_date, "end_date": end_date, "reason": reason},
            ("leave_type", "start_date", "end_date", "reason"),
        )
        start = require_date(start_date, "start_date")
        end = require_date(end_date, "end_date")
        if end < start:
            raise ValidationError("End date cannot be before start date")
        return str(leave_type).strip(), start, end, str(reason).strip()

    def get_leave(self, leave_id: int, *, actor: Optional[Actor] = None) -> LeaveApplication:
        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise NotFoundError("Leave application not found")
        ensure_owner_or_admin(actor, leave.employee_id)
        return leave

    def list_all(self) -> list[LeaveApplication]:
        return list(self._leaves.list_all())

    def list_for_employee(self, employee_id: int, *, actor: Optional[Actor] = None) -> list[LeaveApplication]:
        ensure_owner_or_admin(actor, employee_id)
        return list(self._leaves.list_for_employee(int(employee_id)))

    def create_leave(
        self,
        *,
        leave_type: Any,
        start_date: Any,
        end_date: Any,
        reason: Any,
        employee_id: Any = None,
        actor: Optional[Actor] = None,
    ) -> int:
        owner_id = resolve_employee_id(actor, employee_id)
        if owner_id is None:
            raise ValidationError("All fields are required")
        leave_type, start, end, reason = self._validate(leave_type, start_date, end_date, reason)
        ensure_owner(actor, owner_id)

        leave_id = self._leaves.create(
            employee_id=owner_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            reason=reason,
        )
        self._audit.record_for(
            actor,
            actions.LEAVE_CREATED,
            f"Created leave: {leave_type} from {start.isoformat()} to {end.isoformat()}",
        )
        return leave_id

    def update_leave(
        self,
        *,
        leave_id: int,
        leave_type: Any,
        start_date: Any,
        end_date: Any,
        reason: Any,
        actor: Optional[Actor] = None,
    ) -> None:
        leave_type, start, end, reason = self._validate(leave_type, start_date, end_date, reason)
        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise NotFoundError("Leave application not found")
        ensure_owner(actor, leave.employee_id)

        self._leaves.update(leave_id=leave.leave_id, leave_type=leave_type, start_date=start, end_date=end, reason=reason)
        self._audit.record_for(
            actor,
            actions.LEAVE_UPDATED,
            f"Updated leave #{leave.leave_id}: {leave_type} from {start.isoformat()} to {end.isoformat()}",
        )

    def delete_leave(self, *, leave_id: int, actor: Optional[Actor] = None) -> None:
        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise NotFoundError("Leave application not found")
        ensure_owner_or_admin(actor, leave.employee_id)

        self._leaves.delete(leave.leave_id)
        self._audit.record_for(actor, actions.LEAVE_DELETED, f"Deleted leave #{leave.leave_id} ({leave.leave_type})")

    def set_status(self, *, leave_id: int, status: Any, actor: Optional[Actor] = None) -> LeaveStatus:
        if status in (None, ""):
            raise ValidationError("Invalid status. Must be approved, rejected, or pending")
        new_status = require_choice(status, LeaveStatus, "status")
        ensure_admin(actor)

        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise NotFoundError("Leave application not found")

        self._leaves.set_status(leave_id=leave.leave_id, status=new_status)
        self._audit.record_for(
            actor,
            _STATUS_ACTIONS[new_status],
            f"Leave #{leave.leave_id} of {leave.username or leave.employee_id} marked {new_status.value}",
            fallback_user_type="admin",
        )
        return new_status
