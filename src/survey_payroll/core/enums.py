from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class RequestStatus(str, Enum):
    """Leave request approval flow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveKind(str, Enum):
    MEDICAL = "medical"
    PERSONAL = "personal"
    VACATION = "vacation"
    OTHER = "other"


class SurveyCategory(str, Enum):
    """External survey providers an employee can report piecework for."""

    YOURS = "yours"
    YOURS_INTERNATIONAL = "yoursinternational"
    SSI = "ssi"
    DYNATA = "dynata"
