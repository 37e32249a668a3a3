from datetime import date, datetime, timezone

import pytest

from src.guard_attendance.guard_attendance.common import datetime_utils
from src.guard_attendance.guard_attendance.common.validators import require_leave_days, require_non_empty
from src.guard_attendance.guard_attendance.core.exceptions import InvalidDateError, ValidationError


def test_to_date_normalizes_inputs():
    assert datetime_utils.to_date("2024-02-29") == date(2024, 2, 29)
    assert datetime_utils.to_date(datetime(2024, 2, 29, 18, 30)) == date(2024, 2, 29)
    assert datetime_utils.to_date(date(2024, 2, 29)) == date(2024, 2, 29)


@pytest.mark.parametrize("bad", ["2024/02/29", "2023-02-29", 20240229])
def test_to_date_rejects_malformed_values(bad):
    with pytest.raises(InvalidDateError):
        datetime_utils.to_date(bad)


def test_format_kst_date_crosses_midnight_before_utc():
    # 2026-01-31 16:00 UTC is already 2026-02-01 in Seoul
    utc = datetime(2026, 1, 31, 16, 0, tzinfo=timezone.utc)

    assert datetime_utils.format_kst_date(utc, "%Y-%m-%d") == "2026-02-01"
    assert datetime_utils.format_kst_date(utc, "%Y-%m-%d", tz="UTC") == "2026-01-31"


def test_kst_helpers_share_one_clock(monkeypatch):
    from zoneinfo import ZoneInfo

    fixed = datetime(2026, 2, 1, 0, 30, tzinfo=ZoneInfo("Asia/Seoul"))
    monkeypatch.setattr(datetime_utils, "kst_now", lambda tz="Asia/Seoul": fixed)

    assert datetime_utils.kst_today() == date(2026, 2, 1)
    assert datetime_utils.kst_current_month() == "2026-02"
    assert datetime_utils.kst_year() == 2026


def test_require_leave_days():
    assert require_leave_days(1.5) == 1.5
    assert require_leave_days("2") == 2
    with pytest.raises(ValidationError):
        require_leave_days(-0.5)
    with pytest.raises(ValidationError):
        require_leave_days(0.3)


def test_require_non_empty_strips():
    assert require_non_empty("  가족 행사 ", "사유") == "가족 행사"
    with pytest.raises(ValidationError):
        require_non_empty("   ", "사유")


@pytest.mark.parametrize(
    "month, first, last",
    [
        ("2024-02", date(2024, 2, 1), date(2024, 2, 29)),
        ("2023-02", date(2023, 2, 1), date(2023, 2, 28)),
        ("2024-12", date(2024, 12, 1), date(2024, 12, 31)),
    ],
)
def test_month_bounds(month, first, last):
    assert datetime_utils.month_bounds(month) == (first, last)


@pytest.mark.parametrize("bad", ["2024-13", "2024/02", "", None])
def test_month_bounds_rejects_malformed_months(bad):
    with pytest.raises(InvalidDateError):
        datetime_utils.month_bounds(bad)
