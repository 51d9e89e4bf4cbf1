from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import GrievanceStatus, ResignationStatus
from .model import Grievance, Resignation


class RequestRepository(Protocol):
    # Grievances
    def get_grievance(self, grievance_id: int) -> Optional[Grievance]:
        raise NotImplementedError

    def list_grievances(self, *, employee_id: Optional[int] = None) -> Sequence[Grievance]:
        """Newest first, optionally scoped to one employee."""

        raise NotImplementedError

    def create_grievance(self, *, employee_id: int, subject: str, description: str) -> int:
        raise NotImplementedError

    def decide_grievance(self, *, grievance_id: int, status: GrievanceStatus, admin_response: str) -> bool:
        raise NotImplementedError

    def delete_grievance(self, grievance_id: int) -> bool:
        raise NotImplementedError

    # Resignations
    def get_resignation(self, resignation_id: int) -> Optional[Resignation]:
        raise NotImplementedError

    def list_resignations(self, *, employee_id: Optional[int] = None) -> Sequence[Resignation]:
        raise NotImplementedError

    def create_resignation(self, *, employee_id: int, reason: str, last_working_day: date) -> int:
        raise NotImplementedError

    def decide_resignation(self, *, resignation_id: int, status: ResignationStatus, admin_notes: str) -> bool:
        raise NotImplementedError

    def delete_resignation(self, resignation_id: int) -> bool:
        raise NotImplementedError
