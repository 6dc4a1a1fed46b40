"""Validation for files embedded in JSON bodies as base64 data URLs."""

from __future__ import annotations

import re

from opsportal.services.errors import ValidationError


IMAGE_MAX_BYTES = 500 * 1024  # 500KB
ALERT_PDF_MAX_BYTES = 5 * 1024 * 1024  # 5MB
SCHEDULE_FILE_MAX_BYTES = 20 * 1024 * 1024  # 20MB
TRAINING_PDF_MAX_BYTES = 20 * 1024 * 1024
DOCUMENT_MAX_BYTES = 20 * 1024 * 1024

IMAGE_MIME_PREFIX = 'image/'
PDF_MIME_TYPES = {'application/pdf'}
SCHEDULE_MIME_TYPES = PDF_MIME_TYPES | {
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'text/csv',
    'application/octet-stream',
}

_DATA_URL_RE = re.compile(r'^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w-]+=[^;,]+)*;base64,(?P<payload>.*)$', re.DOTALL)
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")


def _format_size(num_bytes: int) -> str:
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes // 1024}KB"


def decoded_size(payload: str) -> int:
    """Size in bytes of a base64 payload without materialising it."""
    padding = len(payload) - len(payload.rstrip("="))
    return (len(payload) * 3) // 4 - padding


def parse_data_url(value: str, field: str = 'file') -> tuple[str, str]:
    """Split ``data:<mime>;base64,<payload>`` into ``(mime, payload)``."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a base64 data URL")
    match = _DATA_URL_RE.match(value)
    if match is None:
        raise ValidationError(f"{field} must be a base64 data URL")
    payload = re.sub(r"\s+", "", match.group("payload"))
    if len(payload) % 4 or not _BASE64_RE.match(payload):
        raise ValidationError(f"{field} is not valid base64")
    return (match.group('mime') or 'application/octet-stream').lower(), payload


def validate_data_url(
    value: str | None,
    *,
    field: str,
    max_bytes: int,
    mime_types: set[str] | None = None,
    mime_prefix: str | None = None,
) -> str | None:
    """Return ``value`` unchanged if it is an acceptable data URL.

    Empty values pass through as ``None`` so optional attachments can be
    cleared.
    """
    if value in (None, ''):
        return None

    mime, payload = parse_data_url(value, field)

    if mime_types is not None and mime not in mime_types:
        raise ValidationError(f"{field} has unsupported type {mime}")
    if mime_prefix is not None and not mime.startswith(mime_prefix):
        raise ValidationError(f"{field} has unsupported type {mime}")

    if decoded_size(payload) > max_bytes:
        raise ValidationError(f"{field} exceeds the {_format_size(max_bytes)} limit")

    return value


def validate_image(value: str | None, field: str = 'image') -> str | None:
    return validate_data_url(value, field=field, max_bytes=IMAGE_MAX_BYTES, mime_prefix=IMAGE_MIME_PREFIX)


def validate_pdf(value: str | None, field: str = 'pdf', max_bytes: int = ALERT_PDF_MAX_BYTES) -> str | None:
    return validate_data_url(value, field=field, max_bytes=max_bytes, mime_types=PDF_MIME_TYPES)


def validate_schedule_file(value: str | None, field: str = 'excelData') -> str | None:
    return validate_data_url(value, field=field, max_bytes=SCHEDULE_FILE_MAX_BYTES, mime_types=SCHEDULE_MIME_TYPES)


def validate_document(value: str | None, field: str = 'file') -> str | None:
    return validate_data_url(value, field=field, max_bytes=DOCUMENT_MAX_BYTES)


__all__ = [
    'ALERT_PDF_MAX_BYTES',
    'DOCUMENT_MAX_BYTES',
    'IMAGE_MAX_BYTES',
    'SCHEDULE_FILE_MAX_BYTES',
    'TRAINING_PDF_MAX_BYTES',
    'decoded_size',
    'parse_data_url',
    'validate_data_url',
    'validate_document',
    'validate_image',
    'validate_pdf',
    'validate_schedule_file',
]
