"""Staff user directory."""

from opsportal.extensions import db
from opsportal.models import StaffUser


def _create(client, **extra):
    payload = {
        'name': 'Alex Morgan Smith',
        'email': 'Alex.Smith@Example.com',
        'phone': '555-0100',
        'department': 'Maintenance',
        'role': 'supervisor',
        'employeeId': 'E-100',
        **extra,
    }
    response = client.post('/api/users', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_create_user(app, auth_client):
    user = _create(auth_client)

    assert user['name'] == 'Alex Morgan Smith'
    assert user['email'] == 'alex.smith@example.com'
    assert user['company'] == 'RSRG'
    assert user['role'] == 'supervisor'
    assert user['status'] == 'active'
    assert user['lastLogin'] == 'Never'
    assert user['employeeId'] == 'E-100'

    with app.app_context():
        record = db.session.get(StaffUser, int(user['id']))
        assert record.first_name == 'Alex'
        assert record.last_name == 'Morgan Smith'
        assert record.username == 'alex.smith'
        assert record.is_staff is True
        assert record.is_superuser is False
        assert record.password_hash.startswith('$2')


def test_admin_role(auth_client):
    assert _create(auth_client, role='admin')['role'] == 'admin'


def test_role_defaults_to_employee(auth_client):
    assert _create(auth_client, role=None)['role'] == 'employee'


def test_duplicate_email_conflicts(auth_client):
    _create(auth_client)

    response = auth_client.post('/api/users', json={'name': 'Other', 'email': 'alex.smith@example.com'})

    assert response.status_code == 409
    assert response.get_json()['error'] == 'A user with this email already exists'


def test_name_and_email_required(auth_client):
    response = auth_client.post('/api/users', json={'name': 'No Email'})

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Name and email are required'


def test_invalid_email(auth_client):
    response = auth_client.post('/api/users', json={'name': 'Bad', 'email': 'not-an-email'})

    assert response.status_code == 400


def test_update_user(auth_client):
    user = _create(auth_client)

    response = auth_client.put(f"/api/users/{user['id']}", json={
        'name': 'Alex Smith',
        'email': 'alex.smith@example.com',
        'role': 'employee',
        'status': 'inactive',
    })

    data = response.get_json()
    assert response.status_code == 200
    assert data['name'] == 'Alex Smith'
    assert data['role'] == 'employee'
    assert data['status'] == 'inactive'


def test_update_to_taken_email_conflicts(auth_client):
    _create(auth_client)
    other = _create(auth_client, name='Sam Lee', email='sam@example.com')

    response = auth_client.put(f"/api/users/{other['id']}", json={'name': 'Sam Lee', 'email': 'alex.smith@example.com'})

    assert response.status_code == 409


def test_patch_toggles_status(auth_client):
    user = _create(auth_client)

    assert auth_client.patch(f"/api/users/{user['id']}").get_json()['status'] == 'inactive'
    assert auth_client.patch(f"/api/users/{user['id']}").get_json()['status'] == 'active'


def test_delete_user(auth_client):
    user = _create(auth_client)

    assert auth_client.delete(f"/api/users/{user['id']}").status_code == 200
    assert auth_client.get(f"/api/users/{user['id']}").status_code == 404
