from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication


class LeaveRepository(Protocol):
    def get(self, leave_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def create(self, *, employee_id: int, leave_type: str, start_date: date, end_date: date, reason: str) -> int:
        raise NotImplementedError

    def update(self, *, leave_id: int, leave_type: str, start_date: date, end_date: date, reason: str) -> bool:
        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError

    def set_status(self, *, leave_id: int, status: LeaveStatus) -> bool:
        raise NotImplementedError
