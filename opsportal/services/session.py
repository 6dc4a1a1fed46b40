"""Signed admin session cookie.

The cookie carries ``{userId, email, timestamp}`` signed with the app's
``SECRET_KEY``. A tampered payload fails signature verification and an old
one fails the max-age check; both are reported separately so the client can
tell an expired session from a forged one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from flask import Response, current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from opsportal.extensions import db
from opsportal.models import AdminUser, utcnow

SESSION_SALT = 'admin-session'


class SessionError(Exception):
    """Raised when the admin session cookie cannot be trusted."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class AdminSession:
    user_id: int
    email: str
    timestamp: int


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=SESSION_SALT)


def _max_age() -> int:
    max_age = current_app.config.get('ADMIN_SESSION_MAX_AGE', timedelta(days=7))
    if isinstance(max_age, timedelta):
        return int(max_age.total_seconds())
    return int(max_age)


def cookie_name() -> str:
    return current_app.config.get('ADMIN_SESSION_COOKIE', 'admin_session')


def issue_token(user: AdminUser) -> str:
    payload = {
        'userId': str(user.id),
        'email': user.email,
        'timestamp': int(utcnow().timestamp() * 1000),
    }
    return _serializer().dumps(payload)


def read_token(token: str | None) -> AdminSession:
    """Verify a cookie value and return its payload.

    Raises:
        SessionError: ``Session expired`` or ``Invalid session``
    """
    if not token:
        raise SessionError('Not authenticated')
    try:
        payload = _serializer().loads(token, max_age=_max_age())
    except SignatureExpired:
        raise SessionError('Session expired') from None
    except BadSignature:
        raise SessionError('Invalid session') from None

    try:
        return AdminSession(
            user_id=int(payload['userId']),
            email=str(payload['email']),
            timestamp=int(payload['timestamp']),
        )
    except (KeyError, TypeError, ValueError):
        raise SessionError('Invalid session') from None


def load_admin(token: str | None) -> AdminUser:
    """Resolve a cookie value to a still-existing, active admin."""
    session = read_token(token)
    user = db.session.get(AdminUser, session.user_id)
    if user is None or user.email != session.email:
        raise SessionError('Invalid session')
    if not user.is_active:
        raise SessionError('Account is disabled')
    return user


def set_session_cookie(response: Response, user: AdminUser) -> Response:
    config = current_app.config
    response.set_cookie(
        cookie_name(),
        issue_token(user),
        max_age=_max_age(),
        path='/',
        httponly=config.get('SESSION_COOKIE_HTTPONLY', True),
        secure=config.get('SESSION_COOKIE_SECURE', False),
        samesite=config.get('SESSION_COOKIE_SAMESITE', 'Strict'),
    )
    return response


def clear_session_cookie(response: Response) -> Response:
    config = current_app.config
    response.delete_cookie(
        cookie_name(),
        path='/',
        httponly=config.get('SESSION_COOKIE_HTTPONLY', True),
        secure=config.get('SESSION_COOKIE_SECURE', False),
        samesite=config.get('SESSION_COOKIE_SAMESITE', 'Strict'),
    )
    return response


__all__ = [
    'AdminSession',
    'SessionError',
    'clear_session_cookie',
    'cookie_name',
    'issue_token',
    'load_admin',
    'read_token',
    'set_session_cookie',
]
