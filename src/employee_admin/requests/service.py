from __future__ import annotations

from typing import Any, Optional

from ..audit import actions
from ..audit.model import Actor
from ..audit.service import AuditLog
from ..common.access import ensure_admin, ensure_owner, ensure_owner_or_admin, resolve_employee_id
from ..common.validators import require_choice, require_date
from ..core.enums import GrievanceStatus, ResignationStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Grievance, Resignation
from .repository import RequestRepository


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class RequestService:
    """Grievances and resignations: submitted by an employee, decided by an admin."""

    def __init__(self, requests: RequestRepository, audit: AuditLog):
        self._requests = requests
        self._audit = audit

    @staticmethod
    def _parse_status(status: Any, enum_cls):
        if _blank(status):
            raise ValidationError("Status is required")
        return require_choice(status, enum_cls, "status")

    # -------- Grievances --------
    def get_grievance(self, grievance_id: int, *, actor: Optional[Actor] = None) -> Grievance:
        grievance = self._requests.get_grievance(int(grievance_id))
        if not grievance:
            raise NotFoundError("Grievance not found")
        ensure_owner_or_admin(actor, grievance.employee_id)
        return grievance

    def list_grievances(self) -> list[Grievance]:
        return list(self._requests.list_grievances())

    def list_grievances_for_employee(self, employee_id: int, *, actor: Optional[Actor] = None) -> list[Grievance]:
        ensure_owner_or_admin(actor, employee_id)
        return list(self._requests.list_grievances(employee_id=int(employee_id)))

    def submit_grievance(
        self,
        *,
        subject: Any,
        description: Any,
        employee_id: Any = None,
        actor: Optional[Actor] = None,
    ) -> int:
        owner_id = resolve_employee_id(actor, employee_id)
        if owner_id is None or _blank(subject) or _blank(description):
            raise ValidationError("Missing required fields")
        ensure_owner(actor, owner_id)

        subject = str(subject).strip()
        grievance_id = self._requests.create_grievance(
            employee_id=owner_id, subject=subject, description=str(description).strip()
        )
        self._audit.record_for(actor, actions.GRIEVANCE_CREATED, f"Submitted grievance: {subject}")
        return grievance_id

    def decide_grievance(
        self,
        *,
        grievance_id: int,
        status: Any,
        admin_response: Any = None,
        actor: Optional[Actor] = None,
    ) -> GrievanceStatus:
        new_status = self._parse_status(status, GrievanceStatus)
        ensure_admin(actor)
        grievance = self.get_grievance(grievance_id)

        self._requests.decide_grievance(
            grievance_id=grievance.grievance_id,
            status=new_status,
            admin_response=str(admin_response or "").strip(),
        )
        self._audit.record_for(
            actor,
            actions.GRIEVANCE_UPDATED,
            f"Grievance #{grievance.grievance_id} marked {new_status.value}",
            fallback_user_type="admin",
        )
        return new_status

    def delete_grievance(self, *, grievance_id: int, actor: Optional[Actor] = None) -> None:
        grievance = self.get_grievance(grievance_id, actor=actor)

        self._requests.delete_grievance(grievance.grievance_id)
        self._audit.record_for(
            actor, actions.GRIEVANCE_DELETED, f"Deleted grievance #{grievance.grievance_id} ({grievance.subject})"
        )

    # -------- Resignations --------
    def get_resignation(self, resignation_id: int, *, actor: Optional[Actor] = None) -> Resignation:
        resignation = self._requests.get_resignation(int(resignation_id))
        if not resignation:
            raise NotFoundError("Resignation not found")
        ensure_owner_or_admin(actor, resignation.employee_id)
        return resignation

    def list_resignations(self) -> list[Resignation]:
        return list(self._requests.list_resignations())

    def list_resignations_for_employee(self, employee_id: int, *, actor: Optional[Actor] = None) -> list[Resignation]:
        ensure_owner_or_admin(actor, employee_id)
        return list(self._requests.list_resignations(employee_id=int(employee_id)))

    def submit_resignation(
        self,
        *,
        reason: Any,
        last_working_day: Any,
        employee_id: Any = None,
        actor: Optional[Actor] = None,
    ) -> int:
        owner_id = resolve_employee_id(actor, employee_id)
        if owner_id is None or _blank(reason) or _blank(last_working_day):
            raise ValidationError("Missing required fields")
        last_day = require_date(last_working_day, "last_working_day")
        ensure_owner(actor, owner_id)

        resignation_id = self._requests.create_resignation(
            employee_id=owner_id, reason=str(reason).strip(), last_working_day=last_day
        )
        self._audit.record_for(
            actor, actions.RESIGNATION_CREATED, f"Submitted resignation, last working day {last_day.isoformat()}"
        )
        return resignation_id

    def decide_resignation(
        self,
        *,
        resignation_id: int,
        status: Any,
        admin_notes: Any = None,
        actor: Optional[Actor] = None,
    ) -> ResignationStatus:
        new_status = self._parse_status(status, ResignationStatus)
        ensure_admin(actor)
        resignation = self.get_resignation(resignation_id)

        self._requests.decide_resignation(
            resignation_id=resignation.resignation_id,
            status=new_status,
            admin_notes=str(admin_notes or "").strip(),
        )
        self._audit.record_for(
            actor,
            actions.RESIGNATION_UPDATED,
            f"Resignation #{resignation.resignation_id} of {resignation.username or resignation.employee_id} "
            f"marked {new_status.value}",
            fallback_user_type="admin",
        )
        return new_status

    def delete_resignation(self, *, resignation_id: int, actor: Optional[Actor] = None) -> None:
        resignation = self.get_resignation(resignation_id, actor=actor)

        self._requests.delete_resignation(resignation.resignation_id)
        self._audit.record_for(actor, actions.RESIGNATION_DELETED, f"Deleted resignation #{resignation.resignation_id}")
