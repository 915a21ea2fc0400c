from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Optional, Tuple, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import current_month, is_iso_date

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_str(value: Any, field_name: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a string")
    return str(value).strip() or None


def require_number(value: Any, field_name: str, *, min_value: Optional[float] = None) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number")
    number = float(value)
    if min_value is not None and number < min_value:
        raise ValidationError(f"{field_name} must be at least {min_value:g}")
    return number


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None


def require_iso_date(value: Any, field_name: str) -> str:
    if not is_iso_date(value):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    return value


def require_list(value: Any, field_name: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list")
    return value


def require_mapping(value: Any, field_name: str) -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} must be an object")
    return value


def resolve_month(month: Any = None, year: Any = None, *, today: Optional[date] = None) -> Tuple[int, int]:
    """Zero-indexed (month, year) from query values, defaulting to this month."""

    default_month, default_year = current_month(today)
    m = default_month if month in (None, "") else require_int(month, "month")
    y = default_year if year in (None, "") else require_int(year, "year")
    if not 0 <= m <= 11:
        raise ValidationError("month must be between 0 and 11")
    return m, y
