from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

import pytest

from src.guard_attendance.guard_attendance.attendance.model import AttendanceLog
from src.guard_attendance.guard_attendance.attendance.service import AttendanceService
from src.guard_attendance.guard_attendance.common import datetime_utils
from src.guard_attendance.guard_attendance.core.enums import Company, Role
from src.guard_attendance.guard_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.guard_attendance.guard_attendance.users.model import Worker


def make_worker(user_id: int, *, is_active: bool = True) -> Worker:
    return Worker(
        user_id=user_id,
        name=f"경비{user_id}",
        username=f"guard{user_id}",
        role=Role.GUARD,
        company=Company.DAWON_PMC,
        site_id=1,
        hire_date=date(2023, 1, 15),
        is_active=is_active,
    )


class InMemoryUsers:
    def __init__(self, *workers: Worker):
        self._by_id = {w.user_id: w for w in workers}

    def get_by_id(self, user_id: int) -> Optional[Worker]:
        return self._by_id.get(user_id)

    def list_by_site(self, site_id: int, *, active_only: bool = True):
        return [w for w in self._by_id.values() if w.site_id == site_id]


class InMemoryAttendance:
    def __init__(self):
        self._next_id = 1
        self.items: list[AttendanceLog] = []

    def get_for_user_and_date(self, user_id, check_in_date):
        for log in self.items:
            if log.user_id == user_id and log.check_in_date == check_in_date:
                return log
        return None

    def list_for_user(self, user_id, *, start_date, end_date):
        return sorted(
            (l for l in self.items if l.user_id == user_id and start_date <= l.check_in_date <= end_date),
            key=lambda l: l.check_in_date,
        )

    def list_for_site(self, site_id, *, start_date, end_date):
        return [l for l in self.items if l.site_id == site_id and start_date <= l.check_in_date <= end_date]

    def create(self, *, user_id, site_id, check_in_date, check_in_time, latitude=None, longitude=None):
        log_id = self._next_id
        self._next_id += 1
        self.items.append(
            AttendanceLog(
                log_id=log_id,
                user_id=user_id,
                site_id=site_id,
                check_in_date=check_in_date,
                check_in_time=check_in_time,
                latitude=latitude,
                longitude=longitude,
            )
        )
        return log_id

    def delete_for_user_and_date(self, user_id, check_in_date):
        before = len(self.items)
        self.items = [l for l in self.items if not (l.user_id == user_id and l.check_in_date == check_in_date)]
        return len(self.items) < before


def build_service(*workers: Worker):
    attendance = InMemoryAttendance()
    return AttendanceService(attendance, InMemoryUsers(*workers)), attendance


def seed(attendance: InMemoryAttendance, user_id: int, *days: date, site_id: int = 1):
    for d in days:
        attendance.create(user_id=user_id, site_id=site_id, check_in_date=d, check_in_time=datetime(d.year, d.month, d.day, 7, 55))


def test_check_in_records_one_log_per_day():
    svc, attendance = build_service(make_worker(1))
    now = datetime(2024, 6, 20, 7, 58)

    log_id = svc.check_in(1, 1, latitude="37.5", longitude="127.0", now=now)

    log = attendance.items[0]
    assert log.log_id == log_id
    assert log.check_in_date == date(2024, 6, 20)
    assert log.latitude == "37.5"
    with pytest.raises(ValidationError):
        svc.check_in(1, 1, now=datetime(2024, 6, 20, 18, 0))


def test_check_in_uses_the_business_day_in_seoul():
    svc, attendance = build_service(make_worker(1))

    # 2024-06-19 23:30 UTC is 08:30 on the 20th in Seoul
    svc.check_in(1, 1, now=datetime(2024, 6, 19, 23, 30, tzinfo=timezone.utc))

    assert attendance.items[0].check_in_date == date(2024, 6, 20)
    assert attendance.items[0].check_in_time == datetime(2024, 6, 20, 8, 30)


@pytest.mark.parametrize("user_id, site_id, error", [(9, 1, NotFoundError), (2, 1, ValidationError), (1, None, ValidationError)])
def test_check_in_rejects_unknown_inactive_or_siteless(user_id, site_id, error):
    svc, attendance = build_service(make_worker(1), make_worker(2, is_active=False))

    with pytest.raises(error):
        svc.check_in(user_id, site_id, now=datetime(2024, 6, 20, 8, 0))
    assert attendance.items == []


def test_today_record():
    svc, attendance = build_service(make_worker(1))
    seed(attendance, 1, date(2024, 6, 19))

    assert svc.today_record(1, now=datetime(2024, 6, 20, 9, 0)) is None
    assert svc.today_record(1, now=datetime(2024, 6, 19, 9, 0)).check_in_date == date(2024, 6, 19)


def test_monthly_logs_cover_the_whole_month():
    svc, attendance = build_service(make_worker(1))
    seed(attendance, 1, date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 29), date(2024, 3, 1))

    rows = svc.monthly_logs(1, month="2024-02")

    assert [r["date"] for r in rows] == ["2024-02-01", "2024-02-29"]
    assert rows[0]["check_in"] == "07:55:00"


def test_monthly_logs_default_to_current_kst_month(monkeypatch):
    monkeypatch.setattr(datetime_utils, "kst_now", lambda tz="Asia/Seoul": datetime(2024, 3, 5, 9, 0))
    svc, attendance = build_service(make_worker(1))
    seed(attendance, 1, date(2024, 2, 29), date(2024, 3, 4))

    assert [r["date"] for r in svc.monthly_logs(1)] == ["2024-03-04"]


def test_monthly_logs_reject_bad_month():
    svc, _ = build_service(make_worker(1))
    with pytest.raises(ValidationError):
        svc.monthly_logs(1, month="2024-13")


def test_site_month_grid_groups_days_by_worker():
    svc, attendance = build_service(make_worker(1), make_worker(2))
    seed(attendance, 1, date(2024, 6, 3), date(2024, 6, 1))
    seed(attendance, 2, date(2024, 6, 2))
    seed(attendance, 3, date(2024, 6, 2), site_id=2)

    assert svc.site_month_grid(1, month="2024-06") == {1: [1, 3], 2: [2]}


def test_yearly_counts_per_month():
    svc, attendance = build_service(make_worker(1))
    seed(attendance, 1, date(2023, 12, 31), date(2024, 1, 2), date(2024, 1, 3), date(2024, 12, 31))

    counts = svc.yearly_counts(1, year=2024)

    assert len(counts) == 12
    assert counts["2024-01"] == 2
    assert counts["2024-12"] == 1
    assert counts["2024-06"] == 0


def test_only_admin_removes_logs():
    svc, attendance = build_service(make_worker(1))
    seed(attendance, 1, date(2024, 6, 20))

    with pytest.raises(AuthorizationError):
        svc.remove_log(current_role=Role.GUARD, user_id=1, check_in_date=date(2024, 6, 20))

    svc.remove_log(current_role=Role.ADMIN, user_id=1, check_in_date=date(2024, 6, 20))
    assert attendance.items == []
    with pytest.raises(NotFoundError):
        svc.remove_log(current_role=Role.ADMIN, user_id=1, check_in_date=date(2024, 6, 20))
