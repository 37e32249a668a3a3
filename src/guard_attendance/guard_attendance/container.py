from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import BUSINESS_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .vacations.mysql_vacation_repository import MySQLVacationRepository
from .vacations.service import VacationService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    vacations_repo: MySQLVacationRepository
    attendance_repo: MySQLAttendanceRepository

    vacation_service: VacationService
    attendance_service: AttendanceService


def build_container(*, db_config: dict, timezone: str = BUSINESS_TIMEZONE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    users_repo = MySQLUserRepository(conn)
    vacations_repo = MySQLVacationRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    vacation_service = VacationService(users_repo, vacations_repo, timezone=timezone)
    attendance_service = AttendanceService(attendance_repo, users_repo, timezone=timezone)

    return Container(
        conn=conn,
        users_repo=users_repo,
        vacations_repo=vacations_repo,
        attendance_repo=attendance_repo,
        vacation_service=vacation_service,
        attendance_service=attendance_service,
    )
