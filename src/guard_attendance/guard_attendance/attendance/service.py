from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import kst_current_month, kst_now, kst_year, month_bounds
from ..core.constants import BUSINESS_TIMEZONE, DATE_FORMAT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import AttendanceLog
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        timezone: str = BUSINESS_TIMEZONE,
    ):
        self._attendance = attendance
        self._users = users
        self._timezone = timezone

    def _now(self, now: Optional[datetime]) -> datetime:
        now = now or kst_now(self._timezone)
        if now.tzinfo is not None:
            now = now.astimezone(ZoneInfo(self._timezone)).replace(tzinfo=None)
        return now

    def check_in(
        self,
        user_id: int,
        site_id: int,
        *,
        latitude: Optional[str] = None,
        longitude: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Record today's check-in. A second check-in on the same KST day is refused."""
        if not site_id:
            raise ValidationError("필수 정보가 누락되었습니다")

        now = self._now(now)
        today = now.date()

        worker = self._users.get_by_id(int(user_id))
        if not worker:
            raise NotFoundError("근무자를 찾을 수 없습니다")
        if not worker.is_active:
            raise ValidationError("비활성화된 계정입니다")

        if self._attendance.get_for_user_and_date(worker.user_id, today):
            raise ValidationError("오늘 이미 출근 처리되었습니다")

        log_id = self._attendance.create(
            user_id=worker.user_id,
            site_id=int(site_id),
            check_in_date=today,
            check_in_time=now,
            latitude=latitude or None,
            longitude=longitude or None,
        )
        logger.info("user %s checked in at site %s on %s", worker.user_id, site_id, today)
        return log_id

    def today_record(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceLog]:
        return self._attendance.get_for_user_and_date(int(user_id), self._now(now).date())

    def monthly_logs(self, user_id: int, *, month: Optional[str] = None) -> list[dict]:
        """Check-ins of one worker for a YYYY-MM month (current KST month by default)."""
        start, end = month_bounds(month or kst_current_month(self._timezone))
        logs = self._attendance.list_for_user(int(user_id), start_date=start, end_date=end)
        return [self._to_ui(log) for log in logs]

    def site_month_grid(self, site_id: int, *, month: Optional[str] = None) -> dict[int, list[int]]:
        """Days of the month each worker of a site checked in, keyed by user id."""
        start, end = month_bounds(month or kst_current_month(self._timezone))
        grid: dict[int, list[int]] = {}
        for log in self._attendance.list_for_site(int(site_id), start_date=start, end_date=end):
            grid.setdefault(log.user_id, []).append(log.check_in_date.day)
        for days in grid.values():
            days.sort()
        return grid

    def yearly_counts(self, user_id: int, *, year: Optional[int] = None) -> dict[str, int]:
        year = int(year or kst_year(self._timezone))
        counts = {f"{year}-{m:02d}": 0 for m in range(1, 13)}
        logs = self._attendance.list_for_user(int(user_id), start_date=date(year, 1, 1), end_date=date(year, 12, 31))
        for log in logs:
            counts[log.check_in_date.strftime("%Y-%m")] += 1
        return counts

    def remove_log(self, *, current_role: Role, user_id: int, check_in_date: date) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("권한이 없습니다")
        if not self._attendance.delete_for_user_and_date(int(user_id), check_in_date):
            raise NotFoundError("출근 기록을 찾을 수 없습니다")
        logger.info("attendance of user %s on %s removed", user_id, check_in_date)

    def _to_ui(self, log: AttendanceLog) -> dict:
        return {
            "log_id": log.log_id,
            "site_id": log.site_id,
            "date": log.check_in_date.strftime(DATE_FORMAT),
            "check_in": log.check_in_time.strftime("%H:%M:%S"),
        }
