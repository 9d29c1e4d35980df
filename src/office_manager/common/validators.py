from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_non_empty(value: Any, field_name: str) -> str:
    if is_blank(value):
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    """Blank strings are stored as NULL."""
    if is_blank(value):
        return None
    return str(value).strip()


def parse_id(value: Any, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return parsed


def parse_enum(enum_cls: Type[E], value: Any, default: E, field_name: str) -> E:
    if is_blank(value):
        return default
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def parse_date_field(value: Any, field_name: str):
    if is_blank(value):
        return None
    try:
        return parse_iso_date(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_decimal(value: Any, field_name: str) -> Optional[Decimal]:
    if is_blank(value):
        return None
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not parsed.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return parsed
