from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import Gender


@dataclass(frozen=True)
class BiodataFields:
    full_name: str
    email: str
    phone: str
    address: str
    date_of_birth: date
    gender: Gender
    position: str
    department: str
    joining_date: date


@dataclass(frozen=True)
class Biodata:
    biodata_id: int
    employee_id: int
    fields: BiodataFields
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    username: Optional[str] = None

    def to_dict(self) -> dict:
        f = self.fields
        return {
            "id": self.biodata_id,
            "employee_id": self.employee_id,
            "username": self.username,
            "full_name": f.full_name,
            "email": f.email,
            "phone": f.phone,
            "address": f.address,
            "date_of_birth": f.date_of_birth,
            "gender": f.gender.value,
            "position": f.position,
            "department": f.department,
            "joining_date": f.joining_date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
