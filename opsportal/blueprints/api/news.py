"""News desk articles and homepage news cards."""

from __future__ import annotations

from flask import jsonify

from opsportal.blueprints.api import api_bp
from opsportal.blueprints.api.helpers import json_body, optional_text, parse_flag, require_fields, success
from opsportal.models import NewsArticle, NewsItem, utcnow
from opsportal.services.content import news_article_service, news_item_service
from opsportal.services.errors import ValidationError
from opsportal.services.serialization import iso_date, iso_timestamp
from opsportal.services.uploads import validate_image

NEWS_STATUSES = ('draft', 'published')


def serialize_article(article: NewsArticle) -> dict:
    return {
        'id': str(article.id),
        'title': article.title,
        'summary': article.summary,
        'content': article.content,
        'category': article.category,
        'priority': article.priority,
        'author': article.author,
        'status': 'published' if article.is_published else 'draft',
        'publishDate': iso_date(article.published_at) or '',
        'lastModified': iso_timestamp(article.updated_at),
        'createdAt': iso_date(article.created_at),
    }


def _article_fields(data: dict) -> dict:
    return {
        'title': optional_text(data, 'title'),
        'summary': optional_text(data, 'summary', ''),
        'content': optional_text(data, 'content', ''),
        'category': optional_text(data, 'category', 'general'),
        'priority': optional_text(data, 'priority', 'normal'),
        'author': optional_text(data, 'author', 'Admin'),
    }


@api_bp.route('/news', methods=['GET'])
def list_news():
    return jsonify([serialize_article(a) for a in news_article_service.list_recent()])


@api_bp.route('/news', methods=['POST'])
def create_news():
    data = json_body()
    require_fields(data, ('title',), "Title is required")
    fields = _article_fields(data)
    fields['is_published'] = False
    article = news_article_service.create(fields)
    return jsonify(serialize_article(article)), 201


@api_bp.route('/news/<int:article_id>', methods=['GET'])
def get_news(article_id: int):
    return jsonify(serialize_article(news_article_service.get_or_404(article_id)))


@api_bp.route('/news/<int:article_id>', methods=['PUT'])
def update_news(article_id: int):
    article = news_article_service.get_or_404(article_id)
    data = json_body()
    require_fields(data, ('title',), "Title is required")

    fields = _article_fields(data)
    status = data.get('status') or ('published' if article.is_published else 'draft')
    if status not in NEWS_STATUSES:
        raise ValidationError("Status must be 'draft' or 'published'")
    published = status == 'published'
    fields['is_published'] = published
    if not published:
        fields['published_at'] = None
    elif not article.is_published:
        fields['published_at'] = utcnow()

    article = news_article_service.update(article, fields)
    return jsonify(serialize_article(article))


@api_bp.route('/news/<int:article_id>', methods=['PATCH'])
def publish_news(article_id: int):
    article = news_article_service.get_or_404(article_id)
    action = json_body().get('action')
    if action not in ('publish', 'unpublish'):
        raise ValidationError("Action must be 'publish' or 'unpublish'")
    article = news_article_service.set_published(article, action == 'publish')
    return jsonify(serialize_article(article))


@api_bp.route('/news/<int:article_id>', methods=['DELETE'])
def delete_news(article_id: int):
    news_article_service.delete(news_article_service.get_or_404(article_id))
    return jsonify(success())


# ---------------------------------------------------------------- news cards

def serialize_news_item(item: NewsItem) -> dict:
    return {
        'id': str(item.id),
        'title': item.title,
        'description': item.description,
        'imageData': item.image_data,
        'avatarData': item.avatar_data,
        'newsLink': item.news_link,
        'posterName': item.poster_name,
        'posterTitle': item.poster_title,
        'isActive': item.is_active,
        'createdAt': iso_timestamp(item.created_at),
        'updatedAt': iso_timestamp(item.updated_at),
    }


def _news_item_fields(data: dict) -> dict:
    require_fields(data, ('title', 'description'), "Title and description are required")
    return {
        'title': optional_text(data, 'title'),
        'description': optional_text(data, 'description'),
        'image_data': validate_image(data.get('imageData'), 'imageData'),
        'avatar_data': validate_image(data.get('avatarData'), 'avatarData'),
        'news_link': optional_text(data, 'newsLink'),
        'poster_name': optional_text(data, 'posterName'),
        'poster_title': optional_text(data, 'posterTitle'),
    }


@api_bp.route('/news-items', methods=['GET'])
def list_news_items():
    return jsonify([serialize_news_item(i) for i in news_item_service.list_recent()])


@api_bp.route('/news-items', methods=['POST'])
def create_news_item():
    fields = _news_item_fields(json_body())
    fields['is_active'] = True
    item = news_item_service.create(fields)
    return jsonify(serialize_news_item(item)), 201


@api_bp.route('/news-items/<int:item_id>', methods=['GET'])
def get_news_item(item_id: int):
    return jsonify(serialize_news_item(news_item_service.get_or_404(item_id)))


@api_bp.route('/news-items/<int:item_id>', methods=['PUT'])
def update_news_item(item_id: int):
    item = news_item_service.get_or_404(item_id)
    item = news_item_service.update(item, _news_item_fields(json_body()))
    return jsonify(serialize_news_item(item))


@api_bp.route('/news-items/<int:item_id>', methods=['PATCH'])
def set_news_item_active(item_id: int):
    item = news_item_service.get_or_404(item_id)
    item = news_item_service.set_active(item, parse_flag(json_body()))
    return jsonify(serialize_news_item(item))


@api_bp.route('/news-items/<int:item_id>', methods=['DELETE'])
def delete_news_item(item_id: int):
    news_item_service.delete(news_item_service.get_or_404(item_id))
    return jsonify(success())
