from __future__ import annotations

from enum import Enum


class UserType(str, Enum):
    """Account type stored on the users row."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GrievanceStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"


class ResignationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
