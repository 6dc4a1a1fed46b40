"""Helpers shared by the JSON serializers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from opsportal.services.errors import ValidationError


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def iso_timestamp(value: datetime | None) -> str | None:
    value = as_utc(value)
    if value is None:
        return None
    return value.isoformat().replace('+00:00', 'Z')


def iso_date(value: datetime | date | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        value = as_utc(value).date()
    return value.isoformat()


def enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def parse_timestamp(value: Any, field: str = 'timestamp') -> datetime | None:
    """Parse an ISO-8601 string from a request body into an aware datetime."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field}")
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        raise ValidationError(f"Invalid {field}") from None


def parse_bool(value: Any, default: bool | None = None) -> bool | None:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {'1', 'true', 'yes', 'on'}:
            return True
        if lowered in {'0', 'false', 'no', 'off'}:
            return False
    return default


__all__ = [
    'as_utc',
    'enum_value',
    'iso_date',
    'iso_timestamp',
    'parse_bool',
    'parse_timestamp',
]
