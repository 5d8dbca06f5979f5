from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"


class ActiveStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class PlanTier(str, Enum):
    """Membership duration category; each tier has a fixed monthly price."""

    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMIANNUAL = "SEMIANNUAL"
    ANNUAL = "ANNUAL"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class MembershipStanding(str, Enum):
    """Derived from the due date, never stored."""

    CURRENT = "CURRENT"
    OVERDUE = "OVERDUE"
    NO_DATE = "NO_DATE"
