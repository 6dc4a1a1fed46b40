"""Flask-Login wiring for the cookie-based admin session."""

from __future__ import annotations

from flask import current_app, g, jsonify, request

from opsportal.extensions import login_manager
from opsportal.services.session import SessionError, cookie_name, load_admin


def init_auth(app):
    """Authenticate each request from the signed ``admin_session`` cookie."""
    login_manager.init_app(app)

    @login_manager.request_loader
    def load_user_from_request(req):
        token = req.cookies.get(cookie_name())
        if not token:
            return None
        try:
            return load_admin(token)
        except SessionError as e:
            g.session_error = e.message
            return None

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        message = getattr(g, 'session_error', None) or 'Authentication required'
        current_app.logger.info(f"Rejected unauthenticated request to {request.path}")
        return jsonify({'error': message}), 401

    return app


__all__ = ['init_auth']
