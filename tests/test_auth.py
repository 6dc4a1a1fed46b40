"""Admin session cookie and the login gate on /api."""

from opsportal.extensions import db
from opsportal.models import AdminUser

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


class TestLogin:
    """Test /api/auth/login."""

    def test_login_success_sets_cookie(self, client, admin_user):
        response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['message'] == 'Login successful'
        assert data['user'] == {'id': str(admin_user), 'email': ADMIN_EMAIL}

        cookie_header = response.headers.get('Set-Cookie')
        assert 'admin_session=' in cookie_header
        assert 'HttpOnly' in cookie_header
        assert 'SameSite=Strict' in cookie_header

    def test_login_is_case_insensitive_on_email(self, client, admin_user):
        response = client.post('/api/auth/login', json={'email': ' Admin@Test.com ', 'password': ADMIN_PASSWORD})
        assert response.status_code == 200

    def test_login_records_last_login(self, app, client, admin_user):
        client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})

        with app.app_context():
            assert db.session.get(AdminUser, admin_user).last_login_at is not None

    def test_login_wrong_password(self, client, admin_user):
        response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': 'wrong'})

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid email or password'
        assert client.get_cookie('admin_session') is None

    def test_login_unknown_email(self, client, admin_user):
        response = client.post('/api/auth/login', json={'email': 'nobody@test.com', 'password': ADMIN_PASSWORD})

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid email or password'

    def test_login_missing_fields(self, client):
        response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Email and password are required'

    def test_login_rejects_non_string_credentials(self, client, admin_user):
        for payload in ({'email': 123, 'password': 'x'}, {'email': ADMIN_EMAIL, 'password': 12345}):
            response = client.post('/api/auth/login', json=payload)

            assert response.status_code == 400
            assert response.get_json()['error'] == 'Email and password are required'
        assert client.get_cookie('admin_session') is None

    def test_login_disabled_account(self, app, client, admin_user):
        with app.app_context():
            db.session.get(AdminUser, admin_user).active = False
            db.session.commit()

        response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Account is disabled'


class TestSessionCheck:
    """Test /api/auth/check."""

    def test_check_without_cookie(self, client):
        response = client.get('/api/auth/check')

        assert response.status_code == 401
        assert response.get_json() == {'authenticated': False}

    def test_check_with_valid_session(self, auth_client, admin_user):
        response = auth_client.get('/api/auth/check')

        assert response.status_code == 200
        data = response.get_json()
        assert data['authenticated'] is True
        assert data['user']['id'] == str(admin_user)
        assert data['user']['email'] == ADMIN_EMAIL

    def test_tampered_cookie_is_rejected_and_cleared(self, auth_client):
        token = auth_client.get_cookie('admin_session').value
        auth_client.set_cookie('admin_session', token[:-4] + 'AAAA')

        response = auth_client.get('/api/auth/check')

        assert response.status_code == 401
        assert response.get_json() == {'authenticated': False, 'error': 'Invalid session'}
        assert auth_client.get_cookie('admin_session') is None

    def test_garbage_cookie(self, client):
        client.set_cookie('admin_session', 'not-a-session')

        response = client.get('/api/auth/check')

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid session'

    def test_expired_session(self, app, auth_client):
        app.config['ADMIN_SESSION_MAX_AGE'] = -1

        response = auth_client.get('/api/auth/check')

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Session expired'

    def test_session_for_disabled_admin(self, app, auth_client, admin_user):
        with app.app_context():
            db.session.get(AdminUser, admin_user).active = False
            db.session.commit()

        response = auth_client.get('/api/auth/check')

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Account is disabled'

    def test_session_for_deleted_admin(self, app, auth_client, admin_user):
        with app.app_context():
            db.session.delete(db.session.get(AdminUser, admin_user))
            db.session.commit()

        response = auth_client.get('/api/auth/check')

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid session'


class TestLogout:
    def test_logout_clears_cookie(self, auth_client):
        response = auth_client.post('/api/auth/logout')

        assert response.status_code == 200
        assert response.get_json() == {'success': True, 'message': 'Logged out successfully'}
        assert auth_client.get_cookie('admin_session') is None
        assert auth_client.get('/api/auth/check').status_code == 401

    def test_logout_without_session(self, client):
        response = client.post('/api/auth/logout')
        assert response.status_code == 200


class TestLoginGate:
    """Entity endpoints require a signed-in admin."""

    def test_protected_route_without_login(self, client):
        response = client.get('/api/checkins')

        assert response.status_code == 401
        assert response.get_json() == {'error': 'Authentication required'}

    def test_protected_write_without_login(self, client):
        response = client.post('/api/news', json={'title': 'Sneaky'})
        assert response.status_code == 401

    def test_protected_route_reports_session_error(self, app, auth_client):
        app.config['ADMIN_SESSION_MAX_AGE'] = -1

        response = auth_client.get('/api/stats')

        assert response.status_code == 401
        assert response.get_json() == {'error': 'Session expired'}

    def test_protected_route_with_login(self, auth_client):
        assert auth_client.get('/api/checkins').status_code == 200

    def test_security_headers(self, auth_client):
        response = auth_client.get('/api/checkins')

        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert response.headers['Cache-Control'] == 'no-store'

    def test_unknown_route_is_json(self, auth_client):
        response = auth_client.get('/api/does-not-exist')

        assert response.status_code == 404
        assert response.get_json() == {'error': 'Not found'}
