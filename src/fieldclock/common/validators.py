from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError(f"End date {end.isoformat()} is before start date {start.isoformat()}")


def require_positive(value: float, field_name: str) -> float:
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return value
