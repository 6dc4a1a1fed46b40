"""Admin accounts and the staff user directory."""

from __future__ import annotations

import secrets
from typing import Any

from flask import current_app
from sqlalchemy import func, select

from opsportal.extensions import bcrypt, db
from opsportal.models import AdminUser, StaffRole, StaffUser, utcnow
from opsportal.services.crud import CRUDService
from opsportal.services.errors import AuthenticationError, ConflictError


def normalize_email(email: str) -> str:
    return (email or '').strip().lower()


def split_name(name: str) -> tuple[str, str]:
    """First word is the first name, the rest the last name."""
    parts = (name or '').split()
    if not parts:
        return '', ''
    return parts[0], ' '.join(parts[1:])


def role_flags(role: str | None) -> dict[str, Any]:
    role = (role or StaffRole.EMPLOYEE.value).strip().lower()
    return {
        'role': role,
        'is_staff': role in (StaffRole.SUPERVISOR.value, StaffRole.ADMIN.value),
        'is_superuser': role == StaffRole.ADMIN.value,
    }


def unusable_password() -> str:
    """Hash of a random secret; staff accounts do not sign in here."""
    return bcrypt.hashpw(secrets.token_urlsafe(32).encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


class AdminUserService(CRUDService[AdminUser]):
    conflict_message = "An admin with this email already exists"

    def __init__(self):
        super().__init__(AdminUser, 'admin user')

    def find_by_email(self, email: str) -> AdminUser | None:
        return db.session.scalars(
            select(AdminUser).where(func.lower(AdminUser.email) == normalize_email(email))
        ).first()

    def authenticate(self, email: str, password: str) -> AdminUser:
        """Return the admin for valid credentials.

        Raises:
            AuthenticationError: unknown email, wrong password or disabled account
        """
        user = self.find_by_email(email)
        if user is None or not user.check_password(password):
            current_app.logger.warning(f"Failed admin login for {normalize_email(email)}")
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            current_app.logger.warning(f"Login attempt on disabled admin account {user.email}")
            raise AuthenticationError("Account is disabled")
        return user

    def record_login(self, user: AdminUser) -> AdminUser:
        user.last_login_at = utcnow()
        self._commit('update', verb='record login of')
        return user

    def create_admin(self, email: str, password: str) -> AdminUser:
        if self.find_by_email(email) is not None:
            raise ConflictError(self.conflict_message)
        user = AdminUser(email=normalize_email(email), active=True)
        user.set_password(password)
        db.session.add(user)
        self._commit('create')
        return user

    def set_password(self, user: AdminUser, password: str) -> AdminUser:
        user.set_password(password)
        self._commit('update', verb='update password of')
        return user

    def upsert_admin(self, email: str, password: str) -> tuple[AdminUser, bool]:
        user = self.find_by_email(email)
        if user is None:
            return self.create_admin(email, password), True
        user.active = True
        return self.set_password(user, password), False


class StaffUserService(CRUDService[StaffUser]):
    conflict_message = "A user with this email already exists"

    def __init__(self):
        super().__init__(StaffUser, 'user')

    def list_recent(self) -> list[StaffUser]:
        return self.list_all(order_by=(StaffUser.created_at.desc(), StaffUser.id.desc()))

    def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        stmt = select(StaffUser.id).where(func.lower(StaffUser.email) == normalize_email(email))
        if exclude_id is not None:
            stmt = stmt.where(StaffUser.id != exclude_id)
        return db.session.scalar(stmt.limit(1)) is not None

    def _validate_create(self, data: dict[str, Any]) -> None:
        if self.email_taken(data['email']):
            raise ConflictError(self.conflict_message)
        data.setdefault('password_hash', unusable_password())
        data.setdefault('date_joined', utcnow())

    def _validate_update(self, instance: StaffUser, data: dict[str, Any]) -> None:
        email = data.get('email')
        if email and self.email_taken(email, exclude_id=instance.id):
            raise ConflictError(self.conflict_message)

    def toggle_status(self, user: StaffUser) -> StaffUser:
        user.active = not user.active
        self._commit('update', verb='toggle status of')
        return user


admin_user_service = AdminUserService()
staff_user_service = StaffUserService()


__all__ = [
    'AdminUserService',
    'StaffUserService',
    'admin_user_service',
    'normalize_email',
    'role_flags',
    'split_name',
    'staff_user_service',
    'unusable_password',
]
