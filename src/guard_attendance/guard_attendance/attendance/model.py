from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceLog:
    """도메인 엔티티: 출근 기록.

    근무자 한 명당 하루에 한 건만 존재한다. check_in_time은 KST 기준 naive datetime.
    """

    log_id: int
    user_id: int
    site_id: int
    check_in_date: date
    check_in_time: datetime
    latitude: Optional[str] = None
    longitude: Optional[str] = None
