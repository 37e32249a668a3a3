from datetime import date

import pytest

from src.guard_attendance.guard_attendance.core.enums import VacationType
from src.guard_attendance.guard_attendance.leave.labels import (
    counts_against_annual_leave,
    days_between,
    requested_days,
    vacation_status_name,
    vacation_type_name,
)


def test_type_and_status_names():
    assert vacation_type_name("annual") == "연차"
    assert vacation_type_name(VacationType.HALF_DAY) == "반차"
    assert vacation_type_name("family_event") == "경조사"
    assert vacation_type_name("unpaid") == "unpaid"
    assert vacation_status_name("approved") == "승인"
    assert vacation_status_name("rejected") == "반려"
    assert vacation_status_name("archived") == "archived"


def test_days_between_is_inclusive():
    assert days_between(date(2026, 2, 2), date(2026, 2, 2)) == 1
    assert days_between(date(2026, 2, 27), date(2026, 3, 2)) == 4


@pytest.mark.parametrize(
    "start, end, vacation_type, expected",
    [
        (date(2026, 2, 2), date(2026, 2, 2), "half_day", 0.5),
        (date(2026, 2, 2), date(2026, 2, 4), "annual", 3),
        (date(2026, 2, 2), date(2026, 2, 2), "sick", 1),
    ],
)
def test_requested_days(start, end, vacation_type, expected):
    assert requested_days(start, end, vacation_type) == expected


def test_only_annual_and_half_day_draw_down_balance():
    assert counts_against_annual_leave("annual")
    assert counts_against_annual_leave(VacationType.HALF_DAY)
    assert not counts_against_annual_leave("sick")
    assert not counts_against_annual_leave("unknown")
