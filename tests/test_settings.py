"""Integration API keys."""


def test_save_creates_key(auth_client):
    response = auth_client.post('/api/settings/api-keys', json={
        'keyName': 'youtube_api_key',
        'keyValue': 'abc123',
        'channelId': 'UC999',
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data['keyName'] == 'youtube_api_key'
    assert data['keyValue'] == 'abc123'
    assert data['channelId'] == 'UC999'
    assert data['isActive'] is True


def test_save_overwrites_existing_key(auth_client):
    first = auth_client.post('/api/settings/api-keys', json={'keyName': 'youtube_api_key', 'keyValue': 'old'}).get_json()

    second = auth_client.post('/api/settings/api-keys', json={'keyName': 'youtube_api_key', 'keyValue': 'new'}).get_json()

    assert second['id'] == first['id']
    assert second['keyValue'] == 'new'
    keys = auth_client.get('/api/settings/api-keys').get_json()
    assert [k['keyValue'] for k in keys] == ['new']


def test_save_requires_name_and_value(auth_client):
    response = auth_client.post('/api/settings/api-keys', json={'keyName': 'youtube_api_key'})

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Key name and value are required'


def test_delete_by_name(auth_client):
    auth_client.post('/api/settings/api-keys', json={'keyName': 'youtube_api_key', 'keyValue': 'abc'})

    response = auth_client.delete('/api/settings/api-keys?keyName=youtube_api_key')

    assert response.status_code == 200
    assert auth_client.get('/api/settings/api-keys').get_json() == []


def test_delete_requires_name(auth_client):
    response = auth_client.delete('/api/settings/api-keys')

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Key name is required'


def test_delete_unknown_key(auth_client):
    response = auth_client.delete('/api/settings/api-keys?keyName=missing')

    assert response.status_code == 404
    assert response.get_json()['error'] == 'API key not found'
