"""Stored credentials for outbound integrations."""

from __future__ import annotations

from sqlalchemy import select

from opsportal.extensions import db
from opsportal.models import ApiKey
from opsportal.services.crud import CRUDService
from opsportal.services.errors import NotFoundError


class ApiKeyService(CRUDService[ApiKey]):
    conflict_message = "An API key with this name already exists"

    def __init__(self):
        super().__init__(ApiKey, 'API key')

    def list_recent(self) -> list[ApiKey]:
        return self.list_all(order_by=(ApiKey.created_at.desc(), ApiKey.id.desc()))

    def get_by_name(self, key_name: str) -> ApiKey | None:
        return db.session.scalars(select(ApiKey).where(ApiKey.key_name == key_name)).first()

    def save(self, key_name: str, key_value: str, channel_id: str | None = None) -> ApiKey:
        """Insert or overwrite the key stored under ``key_name``."""
        existing = self.get_by_name(key_name)
        if existing is None:
            return self.create({
                'key_name': key_name,
                'key_value': key_value,
                'channel_id': channel_id or None,
                'is_active': True,
            })
        return self.update(existing, {'key_value': key_value, 'channel_id': channel_id or None})

    def delete_by_name(self, key_name: str) -> None:
        existing = self.get_by_name(key_name)
        if existing is None:
            raise NotFoundError("API key not found")
        self.delete(existing)


api_key_service = ApiKeyService()


__all__ = ['ApiKeyService', 'api_key_service']
