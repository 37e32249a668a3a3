from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceLog


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, check_in_date: date) -> Optional[AttendanceLog]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceLog]:
        """Logs with start_date <= check_in_date <= end_date, oldest first."""

        raise NotImplementedError

    def list_for_site(self, site_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceLog]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        site_id: int,
        check_in_date: date,
        check_in_time: datetime,
        latitude: Optional[str] = None,
        longitude: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def delete_for_user_and_date(self, user_id: int, check_in_date: date) -> bool:
        raise NotImplementedError
