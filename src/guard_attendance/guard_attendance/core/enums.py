from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """사용자 역할 (권한 확인용)."""

    ADMIN = "admin"
    GUARD = "guard"


class Company(str, Enum):
    MIRAE_ABM = "mirae_abm"
    DAWON_PMC = "dawon_pmc"


class VacationType(str, Enum):
    """휴가 유형."""

    ANNUAL = "annual"
    HALF_DAY = "half_day"
    SICK = "sick"
    FAMILY_EVENT = "family_event"
    OTHER = "other"


class VacationStatus(str, Enum):
    """휴가 신청 승인 흐름 상태."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveStatus(str, Enum):
    """Distinguishes a not-yet-started worker from a plain zero balance."""

    EMPLOYED = "employed"
    NOT_YET_EMPLOYED = "not_yet_employed"
