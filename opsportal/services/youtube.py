"""Channel video sync against the YouTube Data API."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import requests
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from opsportal.extensions import db
from opsportal.models import ApiKey, ChannelVideo, utcnow
from opsportal.services.errors import PersistenceError, UpstreamError, ValidationError
from opsportal.services.serialization import parse_timestamp

YOUTUBE_KEY_NAME = 'youtube_api_key'

_DURATION_RE = re.compile(r'PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?')
_URL_ID_RE = re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\s?]+)')
_BARE_ID_RE = re.compile(r'^([a-zA-Z0-9_-]{11})$')


def format_duration(iso_duration: str | None) -> str:
    """Render an ISO-8601 duration (``PT1H2M3S``) as ``H:MM:SS`` or ``M:SS``."""
    match = _DURATION_RE.search(iso_duration or '')
    if not match:
        return '0:00'
    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def extract_youtube_id(url: str | None) -> str | None:
    """Pull the video id out of a watch/short/embed URL or a bare 11-char id."""
    if not url:
        return None
    url = url.strip()
    match = _URL_ID_RE.search(url)
    if match:
        return match.group(1)
    match = _BARE_ID_RE.match(url)
    if match:
        return match.group(1)
    return None


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


@dataclass
class SyncResult:
    videos_updated: int
    total_on_channel: int

    @property
    def message(self) -> str:
        if self.videos_updated == 0:
            return "No videos found on this channel"
        return f"Successfully fetched {self.videos_updated} videos from YouTube"


def get_credentials() -> ApiKey | None:
    return db.session.scalar(select(ApiKey).where(ApiKey.key_name == YOUTUBE_KEY_NAME))


def configuration_status() -> dict[str, bool]:
    record = get_credentials()
    return {
        'configured': record is not None,
        'hasApiKey': bool(record and record.key_value),
        'hasChannelId': bool(record and record.channel_id),
    }


class YouTubeClient:
    """Thin wrapper over the two Data API endpoints the sync needs."""

    def __init__(self, api_key: str, base_url: str | None = None, timeout: float | None = None):
        config = current_app.config
        self.api_key = api_key
        self.base_url = (base_url or config['YOUTUBE_API_BASE_URL']).rstrip('/')
        self.timeout = timeout or config.get('YOUTUBE_API_TIMEOUT', 20)

    def _get(self, endpoint: str, params: dict[str, Any]) -> dict:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = requests.get(url, params={'key': self.api_key, **params}, timeout=self.timeout)
        except requests.RequestException as e:
            current_app.logger.error(f"YouTube API request to {endpoint} failed: {e}")
            raise UpstreamError("Failed to fetch videos from YouTube", details=str(e)) from e

        if not response.ok:
            try:
                details = response.json()
            except ValueError:
                details = response.text[:1000]
            current_app.logger.error(f"YouTube API error on {endpoint}: HTTP {response.status_code}")
            raise UpstreamError("Failed to fetch videos from YouTube API", details=details)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError("YouTube API returned an invalid response") from e

    def search_channel(self, channel_id: str, max_results: int) -> dict:
        return self._get('search', {
            'channelId': channel_id,
            'part': 'snippet',
            'type': 'video',
            'order': 'date',
            'maxResults': max_results,
        })

    def video_details(self, video_ids: list[str]) -> dict:
        return self._get('videos', {
            'id': ','.join(video_ids),
            'part': 'contentDetails,statistics',
        })


def _best_thumbnail(snippet: dict) -> str:
    thumbnails = snippet.get('thumbnails') or {}
    for size in ('high', 'medium', 'default'):
        url = (thumbnails.get(size) or {}).get('url')
        if url:
            return url
    return ''


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def sync_channel_videos() -> SyncResult:
    """Fetch the channel's latest videos and upsert them by video id.

    Raises:
        ValidationError: credentials or channel id missing
        UpstreamError: the video API failed
        PersistenceError: the upsert could not be committed
    """
    record = get_credentials()
    if record is None or not record.key_value:
        raise ValidationError("YouTube API key not configured. Please add it in Settings.")
    if not record.channel_id:
        raise ValidationError("YouTube Channel ID not configured. Please add it in Settings.")

    client = YouTubeClient(record.key_value)
    search = client.search_channel(record.channel_id, current_app.config.get('YOUTUBE_MAX_RESULTS', 50))
    items = [item for item in search.get('items') or [] if (item.get('id') or {}).get('videoId')]

    if not items:
        return SyncResult(videos_updated=0, total_on_channel=0)

    video_ids = [item['id']['videoId'] for item in items]
    details = {entry.get('id'): entry for entry in client.video_details(video_ids).get('items') or []}

    existing = {
        video.video_id: video
        for video in db.session.scalars(select(ChannelVideo).where(ChannelVideo.video_id.in_(video_ids)))
    }

    now = utcnow()
    for item in items:
        video_id = item['id']['videoId']
        snippet = item.get('snippet') or {}
        detail = details.get(video_id) or {}
        statistics = detail.get('statistics') or {}

        video = existing.get(video_id)
        if video is None:
            video = ChannelVideo(
                video_id=video_id,
                published_at=parse_timestamp(snippet.get('publishedAt'), 'publishedAt'),
                fetched_at=now,
                is_active=True,
            )
            db.session.add(video)

        video.title = snippet.get('title') or video_id
        video.description = snippet.get('description') or ''
        video.thumbnail_url = _best_thumbnail(snippet)
        video.video_url = watch_url(video_id)
        video.duration = format_duration((detail.get('contentDetails') or {}).get('duration'))
        video.view_count = _to_int(statistics.get('viewCount'))
        video.like_count = _to_int(statistics.get('likeCount'))
        video.channel_title = snippet.get('channelTitle') or ''
        video.updated_at = now

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to store channel videos: {e}")
        raise PersistenceError("Failed to store videos from YouTube") from e

    total = (search.get('pageInfo') or {}).get('totalResults') or len(items)
    current_app.logger.info(f"Synced {len(items)} channel videos ({total} on channel)")
    return SyncResult(videos_updated=len(items), total_on_channel=total)


__all__ = [
    'SyncResult',
    'YOUTUBE_KEY_NAME',
    'YouTubeClient',
    'configuration_status',
    'extract_youtube_id',
    'format_duration',
    'get_credentials',
    'sync_channel_videos',
    'thumbnail_url',
    'watch_url',
]
