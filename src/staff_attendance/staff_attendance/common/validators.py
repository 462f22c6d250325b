from __future__ import annotations

from typing import Optional, Type

from ..core.exceptions import DomainError, ValidationError


def require_id(value, error: Type[DomainError]) -> int:
    """Return value as a positive int id, or raise the given error."""
    if value is None or value == "":
        raise error()
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise error()
    if parsed <= 0:
        raise error()
    return parsed


def optional_id(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")
    if parsed <= 0:
        raise ValidationError(f"Invalid {field_name}")
    return parsed


def require_non_empty(value: Optional[str], error: Type[DomainError]) -> str:
    if not value or not value.strip():
        raise error()
    return value.strip()


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> str:
    value = value or ""
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value
