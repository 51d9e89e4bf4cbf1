from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import UserType


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object, no database access here.
    """

    user_id: int
    username: str
    password_hash: str
    user_type: UserType
    email: Optional[str] = None
    phone: Optional[str] = None
    email_verified: bool = False
    verification_token: Optional[str] = None
    verification_expires: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "email": self.email,
            "phone": self.phone,
            "user_type": self.user_type.value,
            "email_verified": self.email_verified,
            "created_at": self.created_at,
        }
