"""연차 발생일수 계산 (근로기준법 제60조).

- 1년 미만: 1개월 개근마다 1일 발생 (최대 11일), 입사 1년이 되는 날 일괄 소멸
- 1년 이상: 15일 발생, 매년 입사 기념일 기준으로 초기화
- 3년 이상: 최초 1년을 초과하는 매 2년마다 1일 가산 (가산 최대 10일, 총 25일)

All functions are pure: callers resolve "today" in the business timezone
and pass it in as ``reference_date``.
"""
from __future__ import annotations

import math
from dataclasses import replace
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from ..common.datetime_utils import DateLike, to_date
from ..core.constants import BASE_ANNUAL_LEAVE_DAYS, MAX_BONUS_LEAVE_DAYS, MAX_MONTHLY_LEAVE_DAYS
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError
from .model import AccrualPeriod, LeaveBalance, Tenure


def _completed_months(start: date, end: date) -> int:
    if end < start:
        return 0
    months = (end.year - start.year) * 12 + (end.month - start.month)
    # relativedelta clamps Jan 31 + 1 month to Feb 28/29
    if start + relativedelta(months=months) > end:
        months -= 1
    return max(months, 0)


def compute_tenure(hire_date: DateLike, reference_date: DateLike) -> Tenure:
    hire = to_date(hire_date, "입사일")
    ref = to_date(reference_date, "기준일")
    months = _completed_months(hire, ref)
    return Tenure(years=months // 12, months=months)


def annual_entitlement(years_of_service: int) -> int:
    """Days granted for a service year once at least one year is completed."""
    if years_of_service < 1:
        return 0
    bonus = min((years_of_service - 1) // 2, MAX_BONUS_LEAVE_DAYS)
    return BASE_ANNUAL_LEAVE_DAYS + bonus


def current_leave_period(hire_date: DateLike, reference_date: DateLike) -> Optional[tuple[date, date]]:
    """Validity window [start, end) of the entitlement in force on reference_date."""
    hire = to_date(hire_date, "입사일")
    ref = to_date(reference_date, "기준일")
    if hire > ref:
        return None
    years = compute_tenure(hire, ref).years
    return hire + relativedelta(years=years), hire + relativedelta(years=years + 1)


def _monthly_accruals(hire: date, ref: date, months: int) -> list[AccrualPeriod]:
    expires_at = hire + relativedelta(years=1)
    is_expired = ref > expires_at
    if is_expired:
        return []

    accruals = []
    for month in range(1, min(months, MAX_MONTHLY_LEAVE_DAYS) + 1):
        accruals.append(
            AccrualPeriod(
                label=f"입사 {month}개월차",
                accrued=1,
                used=0,
                remaining=1,
                granted_at=hire + relativedelta(months=month),
                expires_at=expires_at,
                is_expired=False,
            )
        )
    return accruals


def _annual_accrual(hire: date, ref: date, years: int) -> list[AccrualPeriod]:
    period_start = hire + relativedelta(years=years)
    expires_at = hire + relativedelta(years=years + 1)
    # Outside the window the bucket contributes nothing; the previous year is never re-counted.
    if ref < period_start or ref > expires_at:
        return []

    days = annual_entitlement(years)
    return [
        AccrualPeriod(
            label=f"{years}년차 연차",
            accrued=days,
            used=0,
            remaining=days,
            granted_at=period_start,
            expires_at=expires_at,
            is_expired=False,
        )
    ]


def _allocate_usage(accruals: list[AccrualPeriod], used_days: float) -> list[AccrualPeriod]:
    """Draw usage down first-bucket-first; usage beyond total accrual is dropped."""
    out = []
    left = used_days
    for accrual in accruals:
        if left <= 0:
            out.append(accrual)
            continue
        take = min(left, accrual.accrued)
        out.append(replace(accrual, used=take, remaining=accrual.accrued - take))
        left -= take
    return out


def calculate_annual_leave(
    hire_date: DateLike,
    reference_date: DateLike,
    used_days: float = 0,
) -> LeaveBalance:
    """Compute the annual-leave balance of a worker on ``reference_date``.

    ``used_days`` is the sum of approved leave already taken, in half-day
    steps. A hire date after the reference date returns a zero balance with
    ``LeaveStatus.NOT_YET_EMPLOYED`` instead of raising.
    """
    hire = to_date(hire_date, "입사일")
    ref = to_date(reference_date, "기준일")
    try:
        used = float(used_days or 0)
    except (TypeError, ValueError):
        raise ValidationError("사용 일수 값이 올바르지 않습니다")
    if not math.isfinite(used):
        raise ValidationError("사용 일수 값이 올바르지 않습니다")
    if used < 0:
        raise ValidationError("사용 일수는 0 이상이어야 합니다")

    if hire > ref:
        return LeaveBalance(
            status=LeaveStatus.NOT_YET_EMPLOYED,
            total_accrued=0,
            total_used=0,
            total_remaining=0,
            accruals=(),
            years_of_service=0,
            months_of_service=0,
            period_start=None,
            period_end=None,
            description="입사 전",
        )

    tenure = compute_tenure(hire, ref)
    period_start, period_end = current_leave_period(hire, ref)

    if tenure.years < 1:
        accruals = _monthly_accruals(hire, ref, tenure.months)
    else:
        accruals = _annual_accrual(hire, ref, tenure.years)

    total_accrued = sum(a.accrued for a in accruals if not a.is_expired)
    if tenure.years < 1:
        description = f"1년 미만 ({tenure.months}개월 근무) → {total_accrued}일"
    else:
        description = f"{tenure.years}년차 → {total_accrued}일"

    return LeaveBalance(
        status=LeaveStatus.EMPLOYED,
        total_accrued=total_accrued,
        total_used=used,
        total_remaining=max(0.0, total_accrued - used),
        accruals=tuple(_allocate_usage(accruals, used)),
        years_of_service=tenure.years,
        months_of_service=tenure.months,
        period_start=period_start,
        period_end=period_end,
        description=description,
    )
