from __future__ import annotations

from datetime import date, datetime
from typing import Union
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from ..core.constants import BUSINESS_TIMEZONE, DATE_FORMAT
from ..core.exceptions import InvalidDateError

DateLike = Union[str, date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateError(f"날짜 형식이 올바르지 않습니다: {value!r}")


def to_date(value: DateLike | None, field_name: str = "date") -> date:
    """Normalize a date-like value to a calendar date.

    datetimes are truncated to the day, strings must be YYYY-MM-DD.
    """
    if value is None:
        raise InvalidDateError(f"{field_name} 값이 없습니다")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not value.strip():
            raise InvalidDateError(f"{field_name} 값이 없습니다")
        return parse_iso_date(value)
    raise InvalidDateError(f"Unsupported type for {field_name}: {type(value)!r}")


def kst_now(tz: str = BUSINESS_TIMEZONE) -> datetime:
    """Current time in the business timezone.

    Note: Wrapped so tests can patch it easier.
    """
    return datetime.now(ZoneInfo(tz))


def kst_today(tz: str = BUSINESS_TIMEZONE) -> date:
    return kst_now(tz).date()


def kst_current_month(tz: str = BUSINESS_TIMEZONE) -> str:
    return kst_now(tz).strftime("%Y-%m")


def kst_year(tz: str = BUSINESS_TIMEZONE) -> int:
    return kst_now(tz).year


def month_bounds(month: str) -> tuple[date, date]:
    """First and last day of a YYYY-MM month, both inclusive."""
    try:
        first = datetime.strptime((month or "").strip(), "%Y-%m").date()
    except ValueError:
        raise InvalidDateError(f"월 형식이 올바르지 않습니다: {month!r}")
    return first, first + relativedelta(months=1, days=-1)


def format_kst_date(value: datetime, fmt: str, tz: str = BUSINESS_TIMEZONE) -> str:
    """Format an aware datetime in the business timezone (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo("UTC"))
    return value.astimezone(ZoneInfo(tz)).strftime(fmt)
