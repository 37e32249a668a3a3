from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Company, Role


@dataclass(frozen=True)
class Worker:
    """도메인 엔티티: 근무자 (경비원/관리자).

    hire_date가 없을 수 있다. 이 경우 연차 계산 대신 안내 메시지를 보여준다.
    """

    user_id: int
    name: str
    username: str
    role: Role
    company: Company
    site_id: Optional[int]
    hire_date: Optional[date]
    is_active: bool = True
