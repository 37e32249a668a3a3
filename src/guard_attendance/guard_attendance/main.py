from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from config import get_settings_module

from .common.datetime_utils import kst_today, to_date
from .common.logging_utils import configure_logging
from .container import build_container
from .core.constants import BUSINESS_TIMEZONE
from .core.exceptions import DomainError
from .leave.calculator import calculate_annual_leave

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="guard-leave", description="연차 발생/잔여 일수 조회")
    sub = parser.add_subparsers(dest="command", required=True)

    calc = sub.add_parser("calc", help="입사일 기준으로 연차를 계산 (DB 불필요)")
    calc.add_argument("--hire-date", required=True, help="입사일 YYYY-MM-DD")
    calc.add_argument("--reference-date", help="기준일 YYYY-MM-DD (기본: 오늘, KST)")
    calc.add_argument("--used-days", type=float, default=0.0, help="사용한 연차 일수 (0.5 단위)")

    worker = sub.add_parser("worker", help="DB에서 근무자의 연차 현황을 조회")
    worker.add_argument("--user-id", type=int, required=True)
    worker.add_argument("--reference-date", help="기준일 YYYY-MM-DD (기본: 오늘, KST)")

    attendance = sub.add_parser("attendance", help="DB에서 근무자의 월별 출근 기록을 조회")
    attendance.add_argument("--user-id", type=int, required=True)
    attendance.add_argument("--month", help="조회 월 YYYY-MM (기본: 이번 달, KST)")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    timezone = getattr(settings, "BUSINESS_TIMEZONE", BUSINESS_TIMEZONE)

    args = build_parser().parse_args(argv)
    logger.debug("settings=%s command=%s", settings_module, args.command)

    try:
        if args.command == "calc":
            today = to_date(args.reference_date, "기준일") if args.reference_date else kst_today(timezone)
            payload = calculate_annual_leave(args.hire_date, today, used_days=args.used_days).to_dict()
        elif args.command == "worker":
            today = to_date(args.reference_date, "기준일") if args.reference_date else kst_today(timezone)
            container = build_container(db_config=getattr(settings, "DB_CONFIG"), timezone=timezone)
            payload = container.vacation_service.balance_for_user(args.user_id, today=today)
        else:
            container = build_container(db_config=getattr(settings, "DB_CONFIG"), timezone=timezone)
            payload = container.attendance_service.monthly_logs(args.user_id, month=args.month)
    except DomainError as e:
        print(str(e), file=sys.stderr)
        return 1

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
