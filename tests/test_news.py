"""News desk articles and homepage news cards."""

import pytest


def _article(client, **extra):
    payload = {'title': 'Depot open day', 'summary': 'Come along', 'content': 'Details', **extra}
    response = client.post('/api/news', json=payload)
    assert response.status_code == 201
    return response.get_json()


class TestNewsArticles:
    def test_new_article_is_draft(self, auth_client):
        data = _article(auth_client)

        assert data['status'] == 'draft'
        assert data['publishDate'] == ''
        assert data['category'] == 'general'
        assert data['priority'] == 'normal'
        assert data['author'] == 'Admin'

    def test_title_required(self, auth_client):
        response = auth_client.post('/api/news', json={'summary': 'No title'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Title is required'

    def test_publish_and_unpublish(self, auth_client):
        article = _article(auth_client)

        published = auth_client.patch(f"/api/news/{article['id']}", json={'action': 'publish'}).get_json()
        assert published['status'] == 'published'
        assert published['publishDate'] != ''

        draft = auth_client.patch(f"/api/news/{article['id']}", json={'action': 'unpublish'}).get_json()
        assert draft['status'] == 'draft'
        assert draft['publishDate'] == ''

    def test_unknown_action(self, auth_client):
        article = _article(auth_client)

        response = auth_client.patch(f"/api/news/{article['id']}", json={'action': 'archive'})

        assert response.status_code == 400
        assert response.get_json()['error'] == "Action must be 'publish' or 'unpublish'"

    def test_update_with_status(self, auth_client):
        article = _article(auth_client)

        response = auth_client.put(
            f"/api/news/{article['id']}",
            json={'title': 'Depot open day (updated)', 'status': 'published'},
        )

        data = response.get_json()
        assert response.status_code == 200
        assert data['title'] == 'Depot open day (updated)'
        assert data['status'] == 'published'

    def test_update_rejects_unknown_status(self, auth_client):
        article = _article(auth_client)

        response = auth_client.put(f"/api/news/{article['id']}", json={'title': 'x', 'status': 'archived'})

        assert response.status_code == 400

    def test_delete_article(self, auth_client):
        article = _article(auth_client)

        assert auth_client.delete(f"/api/news/{article['id']}").status_code == 200
        response = auth_client.get(f"/api/news/{article['id']}")
        assert response.status_code == 404
        assert response.get_json()['error'] == 'News item not found'


class TestNewsItems:
    @pytest.fixture
    def item(self, auth_client, data_url):
        response = auth_client.post('/api/news-items', json={
            'title': 'Safety award',
            'description': 'The night shift won again',
            'imageData': data_url(1024, mime='image/png'),
            'posterName': 'Sam',
        })
        assert response.status_code == 201
        return response.get_json()

    def test_create_news_item(self, item):
        assert item['isActive'] is True
        assert item['imageData'].startswith('data:image/png;base64,')
        assert item['avatarData'] is None

    def test_title_and_description_required(self, auth_client):
        response = auth_client.post('/api/news-items', json={'title': 'Only title'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Title and description are required'

    def test_image_over_limit(self, auth_client, data_url):
        response = auth_client.post('/api/news-items', json={
            'title': 'Big',
            'description': 'Too big',
            'imageData': data_url(500 * 1024 + 1, mime='image/jpeg'),
        })

        assert response.status_code == 400
        assert response.get_json()['error'] == 'imageData exceeds the 500KB limit'

    def test_image_must_be_an_image(self, auth_client, data_url):
        response = auth_client.post('/api/news-items', json={
            'title': 'Wrong',
            'description': 'Not an image',
            'avatarData': data_url(10, mime='application/pdf'),
        })

        assert response.status_code == 400

    def test_toggle_visibility(self, auth_client, item):
        response = auth_client.patch(f"/api/news-items/{item['id']}", json={'isActive': False})

        assert response.status_code == 200
        assert response.get_json()['isActive'] is False

    def test_update_clears_image(self, auth_client, item):
        response = auth_client.put(f"/api/news-items/{item['id']}", json={
            'title': item['title'],
            'description': item['description'],
            'imageData': None,
        })

        assert response.status_code == 200
        assert response.get_json()['imageData'] is None
