from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Biodata, BiodataFields


class BiodataRepository(Protocol):
    def get(self, biodata_id: int) -> Optional[Biodata]:
        raise NotImplementedError

    def get_for_employee(self, employee_id: int) -> Optional[Biodata]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Biodata]:
        raise NotImplementedError

    def create(self, *, employee_id: int, fields: BiodataFields) -> int:
        """Raises DuplicateNameError when the employee already has biodata."""

        raise NotImplementedError

    def update(self, *, biodata_id: int, fields: BiodataFields) -> bool:
        raise NotImplementedError

    def delete(self, biodata_id: int) -> bool:
        raise NotImplementedError
