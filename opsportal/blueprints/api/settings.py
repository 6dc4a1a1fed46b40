"""Integration settings (API keys)."""

from __future__ import annotations

from flask import jsonify, request

from opsportal.blueprints.api import api_bp
from opsportal.blueprints.api.helpers import json_body, optional_text, require_fields, success
from opsportal.models import ApiKey
from opsportal.services.errors import ValidationError
from opsportal.services.serialization import iso_timestamp
from opsportal.services.settings import api_key_service


def serialize_api_key(key: ApiKey) -> dict:
    return {
        'id': str(key.id),
        'keyName': key.key_name,
        'keyValue': key.key_value,
        'channelId': key.channel_id,
        'isActive': key.is_active,
        'createdAt': iso_timestamp(key.created_at),
        'updatedAt': iso_timestamp(key.updated_at),
    }


@api_bp.route('/settings/api-keys', methods=['GET'])
def list_api_keys():
    return jsonify([serialize_api_key(k) for k in api_key_service.list_recent()])


@api_bp.route('/settings/api-keys', methods=['POST'])
def save_api_key():
    data = json_body()
    require_fields(data, ('keyName', 'keyValue'), "Key name and value are required")
    key = api_key_service.save(
        optional_text(data, 'keyName'),
        optional_text(data, 'keyValue'),
        optional_text(data, 'channelId'),
    )
    return jsonify(serialize_api_key(key))


@api_bp.route('/settings/api-keys', methods=['DELETE'])
def delete_api_key():
    key_name = (request.args.get('keyName') or '').strip()
    if not key_name:
        raise ValidationError("Key name is required")
    api_key_service.delete_by_name(key_name)
    return jsonify(success())
