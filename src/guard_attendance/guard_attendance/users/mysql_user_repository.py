from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.enums import Company, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date_or_none
from .model import Worker
from .repository import UserRepository

logger = logging.getLogger(__name__)

_COLUMNS = "user_id, name, username, role, company, site_id, hire_date, is_active"


def _to_worker(r: dict) -> Worker:
    return Worker(
        user_id=int(r["user_id"]),
        name=r["name"],
        username=r["username"],
        role=Role(r["role"]),
        company=Company(r["company"]),
        site_id=int(r["site_id"]) if r.get("site_id") is not None else None,
        hire_date=to_date_or_none(r.get("hire_date")),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_worker(r) if r else None

    def list_by_site(self, site_id: int, *, active_only: bool = True) -> Sequence[Worker]:
        clauses = ["site_id=%s", "role=%s"]
        params: list[object] = [int(site_id), Role.GUARD.value]
        if active_only:
            clauses.append("is_active=1")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE {' AND '.join(clauses)} ORDER BY name",
                tuple(params),
            )
            rows = fetchall(cur)
            logger.debug("site %s: %d workers", site_id, len(rows))
            return [_to_worker(r) for r in rows]
