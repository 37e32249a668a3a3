from __future__ import annotations

from ..core.constants import HALF_DAY_LEAVE
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} 항목을 입력해주세요")
    return value.strip()


def require_leave_days(value: float, field_name: str = "사용 일수") -> float:
    """Leave days are non-negative and counted in half-day steps."""
    try:
        days = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} 값이 올바르지 않습니다")
    if days < 0:
        raise ValidationError(f"{field_name}는 0 이상이어야 합니다")
    if (days / HALF_DAY_LEAVE) % 1 != 0:
        raise ValidationError(f"{field_name}는 0.5일 단위여야 합니다")
    return days
