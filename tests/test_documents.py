"""Document library and training content."""

import pytest


@pytest.fixture
def document(auth_client, data_url):
    response = auth_client.post('/api/documents', json={
        'title': 'Rulebook',
        'description': 'Track access rules',
        'category': 'safety',
        'file': data_url(3000),
    })
    assert response.status_code == 201
    return response.get_json()


class TestDocuments:
    def test_create_computes_file_size(self, document):
        assert document['fileSize'] == 3000
        assert document['downloadCount'] == 0
        assert document['isActive'] is True
        assert document['documentType'] == 'pdf'
        assert document['uploadedBy'] == 'Admin'

    def test_explicit_file_size_wins(self, auth_client, data_url):
        response = auth_client.post('/api/documents', json={
            'title': 'Sized', 'file': data_url(10), 'fileSize': 12345,
        })

        assert response.get_json()['fileSize'] == 12345

    def test_title_required(self, auth_client):
        response = auth_client.post('/api/documents', json={'description': 'Untitled'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Title is required'

    def test_file_must_be_data_url(self, auth_client):
        response = auth_client.post('/api/documents', json={'title': 'Bad', 'file': 'not a data url'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'file must be a base64 data URL'

    def test_record_download(self, auth_client, document):
        auth_client.post(f"/api/documents/{document['id']}/download")
        response = auth_client.post(f"/api/documents/{document['id']}/download")

        assert response.status_code == 200
        assert response.get_json()['downloadCount'] == 2

    def test_patch_toggles_without_file(self, auth_client, document):
        response = auth_client.patch(f"/api/documents/{document['id']}")

        data = response.get_json()
        assert data['isActive'] is False
        assert 'file' not in data

    def test_metadata_update_keeps_file(self, auth_client, document):
        response = auth_client.put(f"/api/documents/{document['id']}", json={'title': 'Rulebook v2'})

        data = response.get_json()
        assert data['title'] == 'Rulebook v2'
        assert data['file'] == document['file']
        assert data['fileSize'] == 3000

    def test_delete_document(self, auth_client, document):
        assert auth_client.delete(f"/api/documents/{document['id']}").status_code == 200
        assert auth_client.get('/api/documents').get_json() == []


class TestTrainingContent:
    def _create(self, client, content_type='training_videos', order=0, **extra):
        response = client.post('/api/training-content', json={
            'contentType': content_type,
            'title': f'{content_type} {order}',
            'displayOrder': order,
            **extra,
        })
        assert response.status_code == 201
        return response.get_json()

    def test_create_training_content(self, auth_client):
        item = self._create(auth_client, linkUrl='https://intranet/video')

        assert item['contentType'] == 'training_videos'
        assert item['linkUrl'] == 'https://intranet/video'
        assert item['isActive'] is True

    def test_invalid_content_type(self, auth_client):
        response = auth_client.post('/api/training-content', json={'contentType': 'memes', 'title': 'x'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid content type'

    def test_ordered_by_type_then_display_order(self, auth_client):
        self._create(auth_client, 'work_instructions', order=2)
        self._create(auth_client, 'documents', order=1)
        self._create(auth_client, 'work_instructions', order=1)
        self._create(auth_client, 'training_videos', order=0)

        items = auth_client.get('/api/training-content').get_json()

        assert [(i['contentType'], i['displayOrder']) for i in items] == [
            ('documents', 1),
            ('training_videos', 0),
            ('work_instructions', 1),
            ('work_instructions', 2),
        ]

    def test_pdf_limit_is_twenty_megabytes(self, auth_client, data_url):
        item = self._create(auth_client, 'documents', pdfData=data_url(6 * 1024 * 1024))
        assert item['pdfData'] is not None

    def test_set_active(self, auth_client):
        item = self._create(auth_client)

        response = auth_client.patch(f"/api/training-content/{item['id']}", json={'isActive': False})

        assert response.get_json()['isActive'] is False
