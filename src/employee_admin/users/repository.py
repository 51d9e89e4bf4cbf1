from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import UserType
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_phone(self, phone: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_verification_token(self, token: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        user_type: UserType,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        email_verified: bool = False,
        verification_token: Optional[str] = None,
        verification_expires: Optional[datetime] = None,
    ) -> int:
        raise NotImplementedError

    def update_credentials(self, *, user_id: int, username: str, password_hash: Optional[str] = None) -> bool:
        raise NotImplementedError

    def mark_email_verified(self, user_id: int) -> bool:
        raise NotImplementedError

    def delete_employee_cascade(self, user_id: int) -> bool:
        """Delete an employee and every owned record atomically."""

        raise NotImplementedError

    def list_employees(self) -> Sequence[dict]:
        raise NotImplementedError
