from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.enums import VacationStatus, VacationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date_or_none, to_leave_days
from .model import VacationRequest
from .repository import VacationRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    request_id, user_id, vacation_type, start_date, end_date, days, reason,
    status, requested_at, responded_by, responded_at, admin_note
"""


def _to_request(r: dict) -> VacationRequest:
    return VacationRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        vacation_type=VacationType(r.get("vacation_type") or VacationType.ANNUAL.value),
        start_date=to_date_or_none(r["start_date"]),
        end_date=to_date_or_none(r["end_date"]),
        days=to_leave_days(r.get("days")),
        reason=r.get("reason"),
        status=VacationStatus(r["status"]),
        requested_at=r["requested_at"],
        responded_by=r.get("responded_by"),
        responded_at=r.get("responded_at"),
        admin_note=r.get("admin_note"),
    )


class MySQLVacationRepository(VacationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        vacation_type: VacationType,
        start_date: date,
        end_date: date,
        days: float,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO vacation_requests(user_id, vacation_type, start_date, end_date, days, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    VacationType(vacation_type).value,
                    start_date,
                    end_date,
                    days,
                    reason,
                    VacationStatus.PENDING.value,
                ),
            )
            request_id = int(cur.lastrowid)
            logger.debug("vacation request %s created for user %s", request_id, user_id)
            return request_id

    def get(self, *, request_id: int) -> Optional[VacationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM vacation_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_user(
        self,
        *,
        user_id: int,
        status: Optional[VacationStatus] = None,
        start_from: Optional[date] = None,
        start_before: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[VacationRequest]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if start_from is not None:
            clauses.append("start_date>=%s")
            params.append(start_from)
        if start_before is not None:
            clauses.append("start_date<%s")
            params.append(start_before)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM vacation_requests
                WHERE {where}
                ORDER BY start_date DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: VacationStatus,
        responded_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE vacation_requests
                SET status=%s, responded_by=%s, responded_at=CURRENT_TIMESTAMP, admin_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, int(responded_by), admin_note, int(request_id), VacationStatus.PENDING.value),
            )
            return cur.rowcount == 1

    def delete(self, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM vacation_requests WHERE request_id=%s AND status=%s",
                (int(request_id), VacationStatus.PENDING.value),
            )
            return cur.rowcount == 1
