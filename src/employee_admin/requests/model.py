from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import GrievanceStatus, ResignationStatus


@dataclass(frozen=True)
class Grievance:
    grievance_id: int
    employee_id: int
    subject: str
    description: str
    status: GrievanceStatus
    admin_response: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    username: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.grievance_id,
            "employee_id": self.employee_id,
            "username": self.username,
            "subject": self.subject,
            "description": self.description,
            "status": self.status.value,
            "admin_response": self.admin_response,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class Resignation:
    resignation_id: int
    employee_id: int
    reason: str
    last_working_day: date
    status: ResignationStatus
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    username: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.resignation_id,
            "employee_id": self.employee_id,
            "username": self.username,
            "reason": self.reason,
            "last_working_day": self.last_working_day,
            "status": self.status.value,
            "admin_notes": self.admin_notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
