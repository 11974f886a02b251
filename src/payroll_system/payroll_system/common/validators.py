from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_amount(value: Any, field_name: str) -> float:
    """Accept a finite, non-negative number (bool is rejected)."""
    if value is None:
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number")
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"{field_name} must be a finite number")
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return value


def require_day_count(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be a whole number of days")
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return value


def require_month(value: Any) -> int:
    """Zero-indexed month (0 = January)."""
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError("month must be an integer between 0 and 11") from None
    if not 0 <= month <= 11:
        raise ValidationError("month must be an integer between 0 and 11")
    return month


def require_year(value: Any) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("year must be an integer") from None
    if not 1 <= year <= 9999:
        raise ValidationError("year is out of range")
    return year


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer") from None
    if number < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number
