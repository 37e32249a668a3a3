from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import DATE_FORMAT
from ..core.enums import LeaveStatus


def _days(value: float):
    """Render whole day counts as int so 15.0 shows up as 15."""
    return int(value) if float(value).is_integer() else float(value)


def _fmt(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


@dataclass(frozen=True)
class Tenure:
    """근속 기간: 입사일부터 기준일까지 채운 만 연수/개월 수."""

    years: int
    months: int


@dataclass(frozen=True)
class AccrualPeriod:
    """연차 발생 단위 (한 번의 부여분과 그 유효기간)."""

    label: str
    accrued: int
    used: float
    remaining: float
    granted_at: date
    expires_at: date
    is_expired: bool

    def to_dict(self) -> dict:
        return {
            "period": self.label,
            "accrued": self.accrued,
            "used": _days(self.used),
            "remaining": _days(self.remaining),
            "grantedAt": _fmt(self.granted_at),
            "expiresAt": _fmt(self.expires_at),
            "isExpired": self.is_expired,
        }


@dataclass(frozen=True)
class LeaveBalance:
    """Result of one accrual calculation.

    ``period_start``/``period_end`` bound the entitlement currently in force
    (end exclusive). Both are None for a worker who has not started yet.
    """

    status: LeaveStatus
    total_accrued: int
    total_used: float
    total_remaining: float
    accruals: tuple[AccrualPeriod, ...]
    years_of_service: int
    months_of_service: int
    period_start: Optional[date]
    period_end: Optional[date]
    description: str

    @property
    def tenure(self) -> Tenure:
        return Tenure(years=self.years_of_service, months=self.months_of_service)

    @property
    def is_employed(self) -> bool:
        return self.status == LeaveStatus.EMPLOYED

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "totalAccrued": self.total_accrued,
            "totalUsed": _days(self.total_used),
            "totalRemaining": _days(self.total_remaining),
            "yearsOfService": self.years_of_service,
            "monthsOfService": self.months_of_service,
            "periodStart": _fmt(self.period_start),
            "periodEnd": _fmt(self.period_end),
            "description": self.description,
            "accruals": [a.to_dict() for a in self.accruals],
        }
