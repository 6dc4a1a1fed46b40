"""Security headers and JSON error responses."""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from opsportal.extensions import db
from opsportal.services.errors import ServiceError


def configure_security_headers(app):
    """Configure security headers."""

    @app.after_request
    def add_security_headers(response):
        # Prevent MIME type sniffing
        response.headers['X-Content-Type-Options'] = 'nosniff'

        # Prevent clickjacking
        response.headers['X-Frame-Options'] = 'DENY'

        response.headers['Referrer-Policy'] = 'same-origin'

        # API responses never embed active content
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"

        if request.path.startswith('/api/'):
            response.headers['Cache-Control'] = 'no-store'

        # HSTS for HTTPS (only add if using HTTPS)
        if request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    return app


ERROR_MESSAGES = {
    400: 'Bad request',
    401: 'Authentication required',
    403: 'Forbidden',
    404: 'Not found',
    405: 'Method not allowed',
    413: 'Payload too large',
    429: 'Too many requests',
    500: 'Internal server error',
}


def register_error_handlers(app):
    """Every failure leaves the API as ``{"error": message}``."""

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{request.method} {request.path} failed: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        message = ERROR_MESSAGES.get(error.code) or error.name
        if error.code == 429:
            message = f"Too many requests: {error.description}"
        return jsonify({'error': message}), error.code

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f"Unhandled error on {request.method} {request.path}: {error}")
        return jsonify({'error': ERROR_MESSAGES[500]}), 500

    return app


__all__ = ['configure_security_headers', 'register_error_handlers']
