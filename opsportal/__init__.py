"""Application factory for the operations portal admin API."""

from __future__ import annotations

from flask import Flask

from opsportal.auth import init_auth
from opsportal.blueprints.api import api_bp
from opsportal.blueprints.auth import auth_bp
from opsportal.config import Config
from opsportal.extensions import db, limiter, migrate
from opsportal.security import configure_security_headers, register_error_handlers


def create_app(config_class=Config):
    """Create Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    init_auth(app)

    # Ensure models are registered for migrations
    import opsportal.models  # noqa: F401

    # Safety net for local runs without migrations
    if app.config.get('AUTO_CREATE_TABLES'):
        with app.app_context():
            db.create_all()

    configure_security_headers(app)
    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(api_bp, url_prefix='/api')

    # Register CLI commands
    from opsportal.commands import register_commands
    register_commands(app)

    return app
