from __future__ import annotations

from typing import Any, Mapping, Optional

from ..audit import actions
from ..audit.model import Actor
from ..audit.service import AuditLog
from ..common.access import ensure_owner, ensure_owner_or_admin, resolve_employee_id
from ..common.validators import require_choice, require_date, require_fields
from ..core.enums import Gender
from ..core.exceptions import DuplicateNameError, NotFoundError, ValidationError
from .model import Biodata, BiodataFields
from .repository import BiodataRepository

REQUIRED_FIELDS = (
    "full_name",
    "email",
    "phone",
    "address",
    "date_of_birth",
    "gender",
    "position",
    "department",
    "joining_date",
)


def parse_biodata(payload: Mapping[str, Any]) -> BiodataFields:
    require_fields(payload, REQUIRED_FIELDS)

    email = str(payload["email"]).strip()
    if "@" not in email:
        raise ValidationError("Invalid email address")

    dob = require_date(payload["date_of_birth"], "date_of_birth")
    joined = require_date(payload["joining_date"], "joining_date")
    if joined < dob:
        raise ValidationError("Joining date cannot be before date of birth")

    return BiodataFields(
        full_name=str(payload["full_name"]).strip(),
        email=email,
        phone=str(payload["phone"]).strip(),
        address=str(payload["address"]).strip(),
        date_of_birth=dob,
        gender=require_choice(payload["gender"], Gender, "gender"),
        position=str(payload["position"]).strip(),
        department=str(payload["department"]).strip(),
        joining_date=joined,
    )


class BiodataService:
    """At most one biodata row per employee."""

    def __init__(self, biodata: BiodataRepository, audit: AuditLog):
        self._biodata = biodata
        self._audit = audit

    def get(self, biodata_id: int, *, actor: Optional[Actor] = None) -> Biodata:
        record = self._biodata.get(int(biodata_id))
        if not record:
            raise NotFoundError("Biodata not found")
        ensure_owner_or_admin(actor, record.employee_id)
        return record

    def list_all(self) -> list[Biodata]:
        return list(self._biodata.list_all())

    def list_for_employee(self, employee_id: int, *, actor: Optional[Actor] = None) -> list[Biodata]:
        ensure_owner_or_admin(actor, employee_id)
        record = self._biodata.get_for_employee(int(employee_id))
        return [record] if record else []

    def create(self, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> int:
        owner_id = resolve_employee_id(actor, payload.get("employee_id"))
        if owner_id is None:
            raise ValidationError("All fields are required")
        fields = parse_biodata(payload)
        ensure_owner(actor, owner_id)

        if self._biodata.get_for_employee(owner_id):
            raise DuplicateNameError("Biodata already exists for this employee")

        biodata_id = self._biodata.create(employee_id=owner_id, fields=fields)
        self._audit.record_for(actor, actions.BIODATA_CREATED, f"Added biodata: {fields.full_name}")
        return biodata_id

    def update(self, biodata_id: int, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> None:
        fields = parse_biodata(payload)
        record = self._biodata.get(int(biodata_id))
        if not record:
            raise NotFoundError("Biodata not found")
        ensure_owner(actor, record.employee_id)

        self._biodata.update(biodata_id=record.biodata_id, fields=fields)
        self._audit.record_for(actor, actions.BIODATA_UPDATED, f"Updated biodata: {fields.full_name}")

    def delete(self, biodata_id: int, *, actor: Optional[Actor] = None) -> None:
        record = self.get(biodata_id, actor=actor)
        self._biodata.delete(record.biodata_id)
        self._audit.record_for(actor, actions.BIODATA_DELETED, f"Deleted biodata: {record.fields.full_name}")
