from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import kst_today
from ..common.validators import require_leave_days, require_non_empty
from ..core.constants import BUSINESS_TIMEZONE, DATE_FORMAT, DEFAULT_LIST_LIMIT
from ..core.enums import Role, VacationStatus, VacationType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..leave.calculator import calculate_annual_leave, current_leave_period
from ..leave.labels import counts_against_annual_leave, requested_days, vacation_status_name, vacation_type_name
from ..leave.model import LeaveBalance
from ..users.model import Worker
from ..users.repository import UserRepository
from .model import VacationRequest
from .repository import VacationRepository

logger = logging.getLogger(__name__)

NO_HIRE_DATE_MESSAGE = "입사일이 등록되지 않았습니다. 관리자에게 문의하세요."


def _sum_days(requests: Sequence[VacationRequest]) -> float:
    return sum(r.days for r in requests if counts_against_annual_leave(r.vacation_type))


class VacationService:
    def __init__(
        self,
        users: UserRepository,
        vacations: VacationRepository,
        *,
        timezone: str = BUSINESS_TIMEZONE,
    ):
        self._users = users
        self._vacations = vacations
        self._timezone = timezone

    def _today(self, today: Optional[date]) -> date:
        return today or kst_today(self._timezone)

    def _get_worker(self, user_id: int) -> Worker:
        worker = self._users.get_by_id(int(user_id))
        if not worker:
            raise NotFoundError("근무자를 찾을 수 없습니다")
        return worker

    def _requests_in_period(self, worker: Worker, today: date, status: VacationStatus) -> Sequence[VacationRequest]:
        period = current_leave_period(worker.hire_date, today)
        if period is None:
            return []
        start, end = period
        return self._vacations.list_for_user(
            user_id=worker.user_id,
            status=status,
            start_from=start,
            start_before=end,
            limit=DEFAULT_LIST_LIMIT,
        )

    def _balance(self, worker: Worker, today: date, *, exclude_request_id: Optional[int] = None) -> LeaveBalance:
        approved = [
            r
            for r in self._requests_in_period(worker, today, VacationStatus.APPROVED)
            if r.request_id != exclude_request_id
        ]
        return calculate_annual_leave(worker.hire_date, today, used_days=_sum_days(approved))

    def _reference_for(self, worker: Worker, start_date: date, today: date) -> date:
        """Day on which the balance backing a request starting on start_date is read.

        Requests inside the current service year use today. Later years are read
        on their first day and earlier years on their last day.
        """
        period = current_leave_period(worker.hire_date, start_date)
        if period is None:
            return start_date
        start, end = period
        if start <= today < end:
            return today
        if start > today:
            return start
        return end - timedelta(days=1)

    def _balance_row(self, worker: Worker, today: date) -> dict:
        out = {
            "userId": worker.user_id,
            "name": worker.name,
            "hireDate": worker.hire_date.strftime(DATE_FORMAT) if worker.hire_date else None,
        }

        if not worker.hire_date:
            out.update(
                {
                    "totalAccrued": 0,
                    "totalUsed": 0,
                    "totalRemaining": 0,
                    "yearsOfService": 0,
                    "monthsOfService": 0,
                    "pendingDays": 0,
                    "pendingCount": 0,
                    "message": NO_HIRE_DATE_MESSAGE,
                }
            )
            return out

        balance = self._balance(worker, today)
        pending = [
            r
            for r in self._requests_in_period(worker, today, VacationStatus.PENDING)
            if counts_against_annual_leave(r.vacation_type)
        ]

        out.update(balance.to_dict())
        out["pendingDays"] = _sum_days(pending)
        out["pendingCount"] = len(pending)
        return out

    def balance_for_user(self, user_id: int, *, today: Optional[date] = None) -> dict:
        """Leave balance payload for one worker.

        Workers without a hire date get zeros plus a ``message`` and the
        calculator is not called at all.
        """
        return self._balance_row(self._get_worker(user_id), self._today(today))

    def site_balances(self, site_id: int, *, today: Optional[date] = None) -> list[dict]:
        today = self._today(today)
        rows = [self._balance_row(w, today) for w in self._users.list_by_site(int(site_id))]
        rows.sort(key=lambda x: x["name"])
        return rows

    def create_request(
        self,
        *,
        current_role: Role,
        user_id: int,
        vacation_type: str,
        start_date: date,
        end_date: date,
        reason: str = "",
        today: Optional[date] = None,
    ) -> int:
        if current_role != Role.GUARD:
            raise AuthorizationError("근무자만 휴가를 신청할 수 있습니다")

        try:
            vtype = VacationType(vacation_type)
        except ValueError:
            raise ValidationError("휴가 유형이 올바르지 않습니다")

        if end_date < start_date:
            raise ValidationError("종료일은 시작일 이후여야 합니다")
        if vtype == VacationType.HALF_DAY and start_date != end_date:
            raise ValidationError("반차는 하루만 신청할 수 있습니다")

        days = require_leave_days(requested_days(start_date, end_date, vtype))

        if counts_against_annual_leave(vtype):
            today = self._today(today)
            worker = self._get_worker(user_id)
            if not worker.hire_date:
                raise ValidationError(NO_HIRE_DATE_MESSAGE)

            ref = self._reference_for(worker, start_date, today)
            balance = self._balance(worker, ref)
            pending = self._requests_in_period(worker, ref, VacationStatus.PENDING)
            available = balance.total_remaining - _sum_days(pending)
            if days > available:
                raise ValidationError(f"잔여 연차가 부족합니다 (신청 {days:g}일, 잔여 {max(available, 0):g}일)")

        request_id = self._vacations.create(
            user_id=int(user_id),
            vacation_type=vtype,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=(reason or "").strip() or None,
        )
        logger.info("user %s requested %s %s~%s (%g days)", user_id, vtype.value, start_date, end_date, days)
        return request_id

    def approve_request(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        admin_note: str = "",
        today: Optional[date] = None,
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("권한이 없습니다")

        req = self._vacations.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("휴가 신청을 찾을 수 없습니다")
        if req.status != VacationStatus.PENDING:
            raise ValidationError("이미 처리된 신청입니다")

        if counts_against_annual_leave(req.vacation_type):
            today = self._today(today)
            worker = self._get_worker(req.user_id)
            if not worker.hire_date:
                raise ValidationError(NO_HIRE_DATE_MESSAGE)
            ref = self._reference_for(worker, req.start_date, today)
            balance = self._balance(worker, ref, exclude_request_id=req.request_id)
            if req.days > balance.total_remaining:
                raise ValidationError(
                    f"잔여 연차가 부족합니다 (신청 {req.days:g}일, 잔여 {balance.total_remaining:g}일)"
                )

        ok = self._vacations.decide(
            request_id=int(request_id),
            status=VacationStatus.APPROVED,
            responded_by=int(admin_user_id),
            admin_note=(admin_note or "").strip() or None,
        )
        if not ok:
            raise ValidationError("승인 처리에 실패했습니다")
        logger.info("vacation request %s approved by %s", request_id, admin_user_id)

    def reject_request(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        admin_note: str,
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("권한이 없습니다")

        ok = self._vacations.decide(
            request_id=int(request_id),
            status=VacationStatus.REJECTED,
            responded_by=int(admin_user_id),
            admin_note=require_non_empty(admin_note, "반려 사유"),
        )
        if not ok:
            raise ValidationError("반려 처리에 실패했습니다")
        logger.info("vacation request %s rejected by %s", request_id, admin_user_id)

    def cancel_request(self, *, user_id: int, request_id: int) -> None:
        req = self._vacations.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("휴가 신청을 찾을 수 없습니다")
        if req.user_id != int(user_id):
            raise AuthorizationError("본인의 신청만 취소할 수 있습니다")
        if req.status != VacationStatus.PENDING:
            raise ValidationError("대기중인 신청만 취소할 수 있습니다")

        if not self._vacations.delete(request_id=int(request_id)):
            raise ValidationError("취소 처리에 실패했습니다")

    def list_my_requests(self, *, user_id: int) -> list[dict]:
        rows = []
        for r in self._vacations.list_for_user(user_id=int(user_id), limit=DEFAULT_LIST_LIMIT):
            rows.append(
                {
                    "request_id": r.request_id,
                    "vacation_type": r.vacation_type.value,
                    "type_name": vacation_type_name(r.vacation_type),
                    "start_date": r.start_date.strftime(DATE_FORMAT),
                    "end_date": r.end_date.strftime(DATE_FORMAT),
                    "days": r.days,
                    "reason": r.reason or "",
                    "status": r.status.value,
                    "status_name": vacation_status_name(r.status),
                    "admin_note": r.admin_note or "",
                }
            )
        return rows
