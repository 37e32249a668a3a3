from __future__ import annotations

from datetime import date

from ..core.constants import HALF_DAY_LEAVE
from ..core.enums import VacationStatus, VacationType

VACATION_TYPE_NAMES = {
    VacationType.ANNUAL: "연차",
    VacationType.HALF_DAY: "반차",
    VacationType.SICK: "병가",
    VacationType.FAMILY_EVENT: "경조사",
    VacationType.OTHER: "기타",
}

VACATION_STATUS_NAMES = {
    VacationStatus.PENDING: "대기중",
    VacationStatus.APPROVED: "승인",
    VacationStatus.REJECTED: "반려",
}

# Only these types draw down the statutory annual-leave balance.
ANNUAL_LEAVE_TYPES = frozenset({VacationType.ANNUAL, VacationType.HALF_DAY})


def vacation_type_name(vacation_type: str) -> str:
    try:
        return VACATION_TYPE_NAMES[VacationType(vacation_type)]
    except ValueError:
        return str(vacation_type)


def vacation_status_name(status: str) -> str:
    try:
        return VACATION_STATUS_NAMES[VacationStatus(status)]
    except ValueError:
        return str(status)


def days_between(start_date: date, end_date: date) -> int:
    """Inclusive number of calendar days from start_date to end_date."""
    return (end_date - start_date).days + 1


def requested_days(start_date: date, end_date: date, vacation_type: str) -> float:
    """Days a request consumes: half-day leave is 0.5, otherwise at least one full day."""
    if VacationType(vacation_type) == VacationType.HALF_DAY:
        return HALF_DAY_LEAVE
    return float(max(days_between(start_date, end_date), 1))


def counts_against_annual_leave(vacation_type: str) -> bool:
    try:
        return VacationType(vacation_type) in ANNUAL_LEAVE_TYPES
    except ValueError:
        return False
