from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_non_negative_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; "true" is not a unit count.
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a non-negative integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a non-negative integer")
    if isinstance(value, float) and value != number:
        raise ValidationError(f"{field_name} must be a non-negative integer")
    if number < 0:
        raise ValidationError(f"{field_name} must be a non-negative integer")
    return number


def require_positive_int(value: Any, field_name: str) -> int:
    number = require_non_negative_int(value, field_name)
    if number == 0:
        raise ValidationError(f"{field_name} is invalid")
    return number


def require_enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
