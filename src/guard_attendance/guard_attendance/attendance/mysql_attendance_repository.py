from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date_or_none
from .model import AttendanceLog
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "log_id, user_id, site_id, check_in_date, check_in_time, latitude, longitude"


def _to_log(r: dict) -> AttendanceLog:
    return AttendanceLog(
        log_id=int(r["log_id"]),
        user_id=int(r["user_id"]),
        site_id=int(r["site_id"]),
        check_in_date=to_date_or_none(r["check_in_date"]),
        check_in_time=r["check_in_time"],
        latitude=r.get("latitude"),
        longitude=r.get("longitude"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, check_in_date: date) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_logs WHERE user_id=%s AND check_in_date=%s",
                (int(user_id), check_in_date),
            )
            r = fetchone(cur)
            return _to_log(r) if r else None

    def list_for_user(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE user_id=%s AND check_in_date BETWEEN %s AND %s
                ORDER BY check_in_date ASC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_for_site(self, site_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE site_id=%s AND check_in_date BETWEEN %s AND %s
                ORDER BY check_in_date ASC, user_id ASC
                """,
                (int(site_id), start_date, end_date),
            )
            rows = fetchall(cur)
            logger.debug("site %s: %d attendance logs %s~%s", site_id, len(rows), start_date, end_date)
            return [_to_log(r) for r in rows]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(user_id, site_id, check_in_date, check_in_time, latitude, longitude)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), int(site_id), check_in_date, check_in_time, latitude, longitude),
            )
            return int(cur.lastrowid)

    def delete_for_user_and_date(self, user_id: int, check_in_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_logs WHERE user_id=%s AND check_in_date=%s",
                (int(user_id), check_in_date),
            )
            return cur.rowcount > 0
