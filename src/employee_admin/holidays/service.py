from __future__ import annotations

from typing import Any, Mapping, Optional

from ..audit import actions
from ..audit.model import Actor
from ..audit.service import AuditLog
from ..common.access import ensure_admin
from ..common.validators import require_date, require_int
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository


class HolidayService:
    def __init__(self, holidays: HolidayRepository, audit: AuditLog):
        self._holidays = holidays
        self._audit = audit

    @staticmethod
    def _parse(payload: Mapping[str, Any]):
        if any(payload.get(k) in (None, "") for k in ("holiday_name", "holiday_date", "year")):
            raise ValidationError("Missing required fields")
        return (
            str(payload["holiday_name"]).strip(),
            require_date(payload["holiday_date"], "holiday_date"),
            str(payload.get("description") or "").strip(),
            require_int(payload["year"], "year"),
        )

    def list_all(self) -> list[Holiday]:
        return list(self._holidays.list_all())

    def list_for_year(self, year: Any) -> list[Holiday]:
        return list(self._holidays.list_for_year(require_int(year, "year")))

    def get(self, holiday_id: int) -> Holiday:
        holiday = self._holidays.get(int(holiday_id))
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    def create(self, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> int:
        name, when, description, year = self._parse(payload)
        ensure_admin(actor)

        holiday_id = self._holidays.create(holiday_name=name, holiday_date=when, description=description, year=year)
        self._audit.record_for(
            actor, actions.HOLIDAY_CREATED, f"Added holiday: {name} on {when.isoformat()}", fallback_user_type="admin"
        )
        return holiday_id

    def update(self, holiday_id: int, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> None:
        name, when, description, year = self._parse(payload)
        ensure_admin(actor)
        holiday = self.get(holiday_id)

        self._holidays.update(
            holiday_id=holiday.holiday_id,
            holiday_name=name,
            holiday_date=when,
            description=description,
            year=year,
        )
        self._audit.record_for(
            actor, actions.HOLIDAY_UPDATED, f"Updated holiday: {name} on {when.isoformat()}", fallback_user_type="admin"
        )

    def delete(self, holiday_id: int, *, actor: Optional[Actor] = None) -> None:
        ensure_admin(actor)
        holiday = self.get(holiday_id)

        self._holidays.delete(holiday.holiday_id)
        self._audit.record_for(
            actor, actions.HOLIDAY_DELETED, f"Deleted holiday: {holiday.holiday_name}", fallback_user_type="admin"
        )
