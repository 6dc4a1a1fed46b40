"""Request parsing shared by the JSON route modules."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Type, TypeVar

from flask import request

from opsportal.services.errors import ValidationError
from opsportal.services.serialization import parse_bool

E = TypeVar('E', bound=Enum)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def require_fields(data: dict[str, Any], fields: Iterable[str], message: str) -> None:
    if not all(_present(data.get(field)) for field in fields):
        raise ValidationError(message)


def optional_text(data: dict[str, Any], field: str, default: str | None = None) -> str | None:
    value = data.get(field)
    if value is None or value == '':
        return default
    return str(value).strip() if isinstance(value, str) else str(value)


def parse_int(value: Any, field: str, minimum: int | None = None, maximum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number") from None
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field} must be at most {maximum}")
    return number


def parse_enum(enum_cls: Type[E], value: Any, message: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message) from None


def parse_flag(data: dict[str, Any], field: str = 'isActive') -> bool:
    if field not in data:
        raise ValidationError(f"{field} is required")
    flag = parse_bool(data.get(field))
    if flag is None:
        raise ValidationError(f"{field} must be true or false")
    return flag


def success(**extra: Any) -> dict[str, Any]:
    return {'success': True, **extra}


__all__ = [
    'json_body',
    'optional_text',
    'parse_enum',
    'parse_flag',
    'parse_int',
    'require_fields',
    'success',
]
