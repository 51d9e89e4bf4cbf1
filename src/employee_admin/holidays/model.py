from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    holiday_name: str
    holiday_date: date
    description: str
    year: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.holiday_id,
            "holiday_name": self.holiday_name,
            "holiday_date": self.holiday_date,
            "description": self.description,
            "year": self.year,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
