from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} no es válido")
    return value.strip()


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} debe ser un número")
    if number <= 0:
        raise ValidationError(f"{field_name} debe ser positivo")
    return number


def require_int_list(value: Any, field_name: str) -> list[int]:
    if not isinstance(value, list) or not value:
        raise ValidationError(f"{field_name} debe ser una lista no vacía")
    return [require_positive_int(v, field_name) for v in value]
