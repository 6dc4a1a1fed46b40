"""Admin sign-in endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from opsportal.blueprints.api.helpers import json_body, require_fields
from opsportal.extensions import limiter
from opsportal.services.accounts import admin_user_service
from opsportal.services.errors import ValidationError
from opsportal.services.session import (
    SessionError,
    clear_session_cookie,
    cookie_name,
    load_admin,
    set_session_cookie,
)

auth_bp = Blueprint('auth', __name__)


def _user_payload(user) -> dict:
    return {'id': str(user.id), 'email': user.email}


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per minute")
def login():
    data = json_body()
    require_fields(data, ('email', 'password'), "Email and password are required")
    if not isinstance(data['email'], str) or not isinstance(data['password'], str):
        raise ValidationError("Email and password are required")

    user = admin_user_service.authenticate(data['email'], data['password'])
    admin_user_service.record_login(user)
    current_app.logger.info(f"Admin {user.email} signed in")

    response = jsonify({
        'success': True,
        'message': 'Login successful',
        'user': _user_payload(user),
    })
    return set_session_cookie(response, user)


@auth_bp.route('/check', methods=['GET'])
def check():
    token = request.cookies.get(cookie_name())
    if not token:
        return jsonify({'authenticated': False}), 401
    try:
        user = load_admin(token)
    except SessionError as e:
        response = jsonify({'authenticated': False, 'error': e.message})
        return clear_session_cookie(response), 401
    return jsonify({'authenticated': True, 'user': _user_payload(user)})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    token = request.cookies.get(cookie_name())
    if token:
        try:
            current_app.logger.info(f"Admin {load_admin(token).email} signed out")
        except SessionError:
            pass
    response = jsonify({'success': True, 'message': 'Logged out successfully'})
    return clear_session_cookie(response)
