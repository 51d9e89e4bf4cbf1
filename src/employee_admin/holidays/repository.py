from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def get(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Holiday]:
        """Newest date first."""

        raise NotImplementedError

    def list_for_year(self, year: int) -> Sequence[Holiday]:
        """Calendar order."""

        raise NotImplementedError

    def create(self, *, holiday_name: str, holiday_date: date, description: str, year: int) -> int:
        raise NotImplementedError

    def update(self, *, holiday_id: int, holiday_name: str, holiday_date: date, description: str, year: int) -> bool:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> bool:
        raise NotImplementedError
