"""Staff user directory."""

from __future__ import annotations

from flask import jsonify

from opsportal.blueprints.api import api_bp
from opsportal.blueprints.api.helpers import json_body, optional_text, require_fields, success
from opsportal.models import StaffUser
from opsportal.services.accounts import normalize_email, role_flags, split_name, staff_user_service
from opsportal.services.errors import ValidationError
from opsportal.services.serialization import iso_date, iso_timestamp

USER_COMPANY = 'RSRG'


def serialize_user(user: StaffUser) -> dict:
    return {
        'id': str(user.id),
        'name': user.full_name,
        'email': user.email,
        'phone': user.phone or '',
        'company': USER_COMPANY,
        'role': user.display_role,
        'department': user.department or '',
        'status': 'active' if user.active else 'inactive',
        'lastLogin': iso_timestamp(user.last_login) or 'Never',
        'createdAt': iso_date(user.created_at),
        'employeeId': user.employee_id,
    }


def _user_fields(data: dict) -> dict:
    require_fields(data, ('name', 'email'), "Name and email are required")
    email = normalize_email(data['email']) if isinstance(data['email'], str) else ''
    if '@' not in email:
        raise ValidationError("A valid email address is required")
    first_name, last_name = split_name(optional_text(data, 'name'))
    fields = {
        'username': email.split('@')[0],
        'email': email,
        'first_name': first_name,
        'last_name': last_name,
        'phone': optional_text(data, 'phone', ''),
        'department': optional_text(data, 'department', ''),
        'employee_id': optional_text(data, 'employeeId'),
    }
    fields.update(role_flags(optional_text(data, 'role')))
    return fields


@api_bp.route('/users', methods=['GET'])
def list_users():
    return jsonify([serialize_user(u) for u in staff_user_service.list_recent()])


@api_bp.route('/users', methods=['POST'])
def create_user():
    fields = _user_fields(json_body())
    fields['active'] = True
    user = staff_user_service.create(fields)
    return jsonify(serialize_user(user)), 201


@api_bp.route('/users/<int:user_id>', methods=['GET'])
def get_user(user_id: int):
    return jsonify(serialize_user(staff_user_service.get_or_404(user_id)))


@api_bp.route('/users/<int:user_id>', methods=['PUT'])
def update_user(user_id: int):
    user = staff_user_service.get_or_404(user_id)
    data = json_body()
    fields = _user_fields(data)
    if data.get('status') in ('active', 'inactive'):
        fields['active'] = data['status'] == 'active'
    user = staff_user_service.update(user, fields)
    return jsonify(serialize_user(user))


@api_bp.route('/users/<int:user_id>', methods=['PATCH'])
def toggle_user_status(user_id: int):
    user = staff_user_service.toggle_status(staff_user_service.get_or_404(user_id))
    return jsonify(serialize_user(user))


@api_bp.route('/users/<int:user_id>', methods=['DELETE'])
def delete_user(user_id: int):
    staff_user_service.delete(staff_user_service.get_or_404(user_id))
    return jsonify(success())
