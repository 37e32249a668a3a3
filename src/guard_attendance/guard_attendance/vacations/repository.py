from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import VacationStatus, VacationType
from .model import VacationRequest


class VacationRepository(Protocol):
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
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[VacationRequest]:
        raise NotImplementedError

    def list_for_user(
        self,
        *,
        user_id: int,
        status: Optional[VacationStatus] = None,
        start_from: Optional[date] = None,
        start_before: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[VacationRequest]:
        """Requests of one user, newest first.

        start_from/start_before filter on start_date as a half-open range.
        """

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: VacationStatus,
        responded_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, request_id: int) -> bool:
        raise NotImplementedError
