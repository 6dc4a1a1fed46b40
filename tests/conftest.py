"""Shared fixtures for the operations portal test suite."""

import base64

import pytest

from opsportal import create_app
from opsportal.config import TestingConfig
from opsportal.extensions import db
from opsportal.models import AdminUser

ADMIN_EMAIL = 'admin@test.com'
ADMIN_PASSWORD = 'TestPass123!'


@pytest.fixture
def app():
    """Create and configure a test application instance.

    No app context stays pushed while tests run, so each request gets a fresh
    ``g`` and Flask-Login re-reads the session cookie.
    """
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def admin_user(app):
    """Create an active dashboard admin and return its id."""
    with app.app_context():
        user = AdminUser(email=ADMIN_EMAIL, active=True)
        user.set_password(ADMIN_PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def auth_client(client, admin_user):
    """Test client carrying a valid admin session cookie."""
    response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


def make_data_url(size: int, mime: str = 'application/pdf') -> str:
    """Build a data URL whose payload decodes to ``size`` bytes."""
    payload = base64.b64encode(b'\x00' * size).decode('ascii')
    return f"data:{mime};base64,{payload}"


@pytest.fixture
def data_url():
    return make_data_url
