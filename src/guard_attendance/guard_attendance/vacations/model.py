from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import VacationStatus, VacationType


@dataclass(frozen=True)
class VacationRequest:
    request_id: int
    user_id: int
    vacation_type: VacationType
    start_date: date
    end_date: date
    days: float
    reason: Optional[str]
    status: VacationStatus
    requested_at: datetime
    responded_by: Optional[int] = None
    responded_at: Optional[datetime] = None
    admin_note: Optional[str] = None
