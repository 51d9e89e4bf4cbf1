from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import ANONYMOUS_USERNAME


@dataclass(frozen=True)
class Actor:
    """Who is performing a request, as seen by the handlers."""

    user_id: Optional[int]
    username: Optional[str]
    user_type: Optional[str]
    ip_address: Optional[str] = None

    @classmethod
    def anonymous(cls, ip_address: Optional[str] = None) -> "Actor":
        return cls(user_id=None, username=None, user_type=None, ip_address=ip_address)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.user_type == "admin"


@dataclass(frozen=True)
class NewActivity:
    user_id: Optional[int]
    username: str
    user_type: str
    action: str
    description: str
    ip_address: Optional[str]

    @classmethod
    def from_actor(cls, actor: Optional[Actor], action: str, description: str, *, fallback_user_type: str) -> "NewActivity":
        actor = actor or Actor.anonymous()
        return cls(
            user_id=actor.user_id,
            username=actor.username or ANONYMOUS_USERNAME,
            user_type=actor.user_type or fallback_user_type,
            action=action,
            description=description,
            ip_address=actor.ip_address,
        )


@dataclass(frozen=True)
class ActivityLogEntry:
    log_id: int
    user_id: Optional[int]
    username: Optional[str]
    user_type: Optional[str]
    action: str
    description: Optional[str]
    ip_address: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "user_id": self.user_id,
            "username": self.username,
            "user_type": self.user_type,
            "action": self.action,
            "description": self.description,
            "ip_address": self.ip_address,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class ActivityFilter:
    user_id: Optional[int] = None
    action: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class ActivityPage:
    rows: list[ActivityLogEntry]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class ActivityStat:
    action: str
    day: date
    count: int

    def to_dict(self) -> dict:
        return {"action": self.action, "date": self.day, "count": self.count}
