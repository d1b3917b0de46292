from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return str(value).strip()


def require_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} inválido")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido") from None


def require_latitude(value: Any, field_name: str = "Latitude") -> float:
    lat = require_float(value, field_name)
    if not -90.0 <= lat <= 90.0:
        raise ValidationError(f"{field_name} fora do intervalo [-90, 90]")
    return lat


def require_longitude(value: Any, field_name: str = "Longitude") -> float:
    lon = require_float(value, field_name)
    if not -180.0 <= lon <= 180.0:
        raise ValidationError(f"{field_name} fora do intervalo [-180, 180]")
    return lon


def require_positive(value: Any, field_name: str) -> float:
    number = require_float(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} deve ser maior que zero")
    return number
