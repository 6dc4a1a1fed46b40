"""Weekly safety alerts and their PDF attachments."""

import pytest


def _payload(week=12, year=2024, **extra):
    return {
        'weekNumber': week,
        'year': year,
        'category': 'PPE',
        'title': f'Week {week} alert',
        'content': 'Wear your hi-vis',
        **extra,
    }


@pytest.fixture
def alert(auth_client):
    response = auth_client.post('/api/safety-alerts', json=_payload())
    assert response.status_code == 201
    return response.get_json()


def test_create_alert(alert):
    assert alert['weekNumber'] == 12
    assert alert['isActive'] is True
    assert alert['pdfFiles'] == []


def test_required_fields(auth_client):
    response = auth_client.post('/api/safety-alerts', json={'weekNumber': 1, 'year': 2024})

    assert response.status_code == 400
    assert response.get_json()['error'] == "Week number, year, category, title, and content are required"


def test_duplicate_week_conflicts(auth_client, alert):
    response = auth_client.post('/api/safety-alerts', json=_payload())

    assert response.status_code == 409
    assert response.get_json()['error'] == "Safety alert for week 12 of 2024 already exists"


def test_week_beyond_year_is_rejected(auth_client):
    response = auth_client.post('/api/safety-alerts', json=_payload(week=999))

    assert response.status_code == 400
    assert response.get_json()['error'] == "Week number must be between 1 and 52 for 2024"
    assert auth_client.get('/api/safety-alerts').get_json() == []


def test_week_53_only_in_long_years(auth_client):
    assert auth_client.post('/api/safety-alerts', json=_payload(week=53, year=2020)).status_code == 201
    assert auth_client.post('/api/safety-alerts', json=_payload(week=53, year=2023)).status_code == 400


def test_year_beyond_calendar_is_rejected(auth_client):
    response = auth_client.post('/api/safety-alerts', json=_payload(year=10000))

    assert response.status_code == 400
    assert response.get_json()['error'] == "year must be at most 9999"


def test_moving_to_invalid_week_is_rejected(auth_client, alert):
    response = auth_client.put(f"/api/safety-alerts/{alert['id']}", json=_payload(week=999))

    assert response.status_code == 400
    assert auth_client.get(f"/api/safety-alerts/{alert['id']}").get_json()['weekNumber'] == 12


def test_moving_onto_taken_week_conflicts(auth_client, alert):
    other = auth_client.post('/api/safety-alerts', json=_payload(week=13)).get_json()

    response = auth_client.put(f"/api/safety-alerts/{other['id']}", json=_payload(week=12))

    assert response.status_code == 409


def test_update_same_week(auth_client, alert):
    response = auth_client.put(f"/api/safety-alerts/{alert['id']}", json=_payload(title='Revised'))

    assert response.status_code == 200
    assert response.get_json()['title'] == 'Revised'


def test_list_newest_week_first(auth_client, alert):
    auth_client.post('/api/safety-alerts', json=_payload(week=2, year=2025))
    auth_client.post('/api/safety-alerts', json=_payload(week=40, year=2023))

    weeks = [(a['year'], a['weekNumber']) for a in auth_client.get('/api/safety-alerts').get_json()]
    assert weeks == [(2025, 2), (2024, 12), (2023, 40)]


def test_pdf_over_limit(auth_client, data_url):
    response = auth_client.post('/api/safety-alerts', json=_payload(pdfData=data_url(5 * 1024 * 1024 + 1)))

    assert response.status_code == 400
    assert response.get_json()['error'] == 'pdfData exceeds the 5MB limit'


def test_pdf_files_mirror_first_attachment(auth_client, data_url):
    first = data_url(100)
    response = auth_client.post('/api/safety-alerts', json=_payload(pdfFiles=[
        {'filename': 'one.pdf', 'data': first},
        {'filename': 'two.pdf', 'data': data_url(200)},
    ]))

    data = response.get_json()
    assert response.status_code == 201
    assert len(data['pdfFiles']) == 2
    assert data['pdfFilename'] == 'one.pdf'
    assert data['pdfData'] == first


def test_upload_pdf_appends(auth_client, alert, data_url):
    pdf = data_url(64)

    response = auth_client.post('/api/safety-alerts/upload-pdf', json={
        'alertId': alert['id'],
        'filename': 'briefing.pdf',
        'data': pdf,
    })

    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'pdfCount': 1, 'id': alert['id']}

    auth_client.post('/api/safety-alerts/upload-pdf', json={
        'alertId': alert['id'],
        'filename': 'appendix.pdf',
        'data': data_url(32),
    })
    data = auth_client.get(f"/api/safety-alerts/{alert['id']}").get_json()
    assert [f['filename'] for f in data['pdfFiles']] == ['briefing.pdf', 'appendix.pdf']
    assert data['pdfFilename'] == 'briefing.pdf'
    assert data['pdfData'] == pdf


def test_upload_pdf_unknown_alert(auth_client, data_url):
    response = auth_client.post('/api/safety-alerts/upload-pdf', json={
        'alertId': 999,
        'filename': 'x.pdf',
        'data': data_url(10),
    })

    assert response.status_code == 404


def test_upload_pdf_rejects_non_pdf(auth_client, alert, data_url):
    response = auth_client.post('/api/safety-alerts/upload-pdf', json={
        'alertId': alert['id'],
        'filename': 'x.png',
        'data': data_url(10, mime='image/png'),
    })

    assert response.status_code == 400


def test_toggle_and_delete(auth_client, alert):
    response = auth_client.patch(f"/api/safety-alerts/{alert['id']}", json={'isActive': 'false'})
    assert response.get_json()['isActive'] is False

    assert auth_client.delete(f"/api/safety-alerts/{alert['id']}").status_code == 200
    assert auth_client.get('/api/safety-alerts').get_json() == []
