"""Depot induction videos and the channel video library."""

from __future__ import annotations

from flask import jsonify

from opsportal.blueprints.api import api_bp
from opsportal.blueprints.api.helpers import json_body, optional_text, parse_flag, require_fields, success
from opsportal.models import ChannelVideo, DepotInductionVideo, utcnow
from opsportal.services.content import channel_video_service, depot_induction_service
from opsportal.services.errors import ValidationError
from opsportal.services.serialization import iso_date, iso_timestamp, parse_bool
from opsportal.services.youtube import (
    configuration_status,
    extract_youtube_id,
    sync_channel_videos,
    thumbnail_url,
    watch_url,
)


def serialize_induction_video(video: DepotInductionVideo) -> dict:
    return {
        'id': str(video.id),
        'title': video.title,
        'youtubeUrl': video.youtube_url,
        'youtubeId': video.youtube_id,
        'isActive': video.is_active,
        'createdAt': iso_timestamp(video.created_at),
        'updatedAt': iso_timestamp(video.updated_at),
    }


def _induction_fields(data: dict) -> dict:
    require_fields(data, ('title', 'youtubeUrl'), "Title and YouTube URL are required")
    youtube_url = optional_text(data, 'youtubeUrl')
    youtube_id = optional_text(data, 'youtubeId') or extract_youtube_id(youtube_url)
    if not youtube_id:
        raise ValidationError("Could not determine the YouTube video ID from the URL")
    return {
        'title': optional_text(data, 'title'),
        'youtube_url': youtube_url,
        'youtube_id': youtube_id,
        'is_active': parse_bool(data.get('isActive'), default=True),
    }


@api_bp.route('/depot-induction', methods=['GET'])
def list_induction_videos():
    videos = depot_induction_service.list_recent()
    return jsonify({'videos': [serialize_induction_video(v) for v in videos]})


@api_bp.route('/depot-induction', methods=['POST'])
def create_induction_video():
    video = depot_induction_service.create(_induction_fields(json_body()))
    return jsonify(serialize_induction_video(video)), 201


@api_bp.route('/depot-induction/<int:video_id>', methods=['GET'])
def get_induction_video(video_id: int):
    return jsonify(serialize_induction_video(depot_induction_service.get_or_404(video_id)))


@api_bp.route('/depot-induction/<int:video_id>', methods=['PUT'])
def update_induction_video(video_id: int):
    video = depot_induction_service.get_or_404(video_id)
    video = depot_induction_service.update(video, _induction_fields(json_body()))
    return jsonify(serialize_induction_video(video))


@api_bp.route('/depot-induction/<int:video_id>', methods=['PATCH'])
def set_induction_video_active(video_id: int):
    video = depot_induction_service.get_or_404(video_id)
    video = depot_induction_service.set_active(video, parse_flag(json_body()))
    return jsonify(serialize_induction_video(video))


@api_bp.route('/depot-induction/<int:video_id>', methods=['DELETE'])
def delete_induction_video(video_id: int):
    depot_induction_service.delete(depot_induction_service.get_or_404(video_id))
    return jsonify(success(message="Video deleted successfully"))


# ------------------------------------------------------------ channel videos

def serialize_channel_video(video: ChannelVideo) -> dict:
    return {
        'id': str(video.id),
        'title': video.title,
        'description': video.description,
        'youtubeId': video.video_id,
        'thumbnailUrl': video.thumbnail_url,
        'videoUrl': video.video_url,
        'duration': video.duration,
        'publishDate': iso_date(video.published_at) or '',
        'uploadDate': iso_date(video.fetched_at) or '',
        'isActive': video.is_active,
        'views': video.view_count,
        'likes': video.like_count,
        'status': 'active' if video.is_active else 'inactive',
        'channelTitle': video.channel_title,
        'updatedAt': iso_timestamp(video.updated_at),
    }


@api_bp.route('/videos', methods=['GET'])
def list_channel_videos():
    return jsonify([serialize_channel_video(v) for v in channel_video_service.list_latest()])


@api_bp.route('/videos', methods=['POST'])
def create_channel_video():
    data = json_body()
    require_fields(data, ('title', 'youtubeId'), "Title and YouTube ID are required")
    video_id = extract_youtube_id(optional_text(data, 'youtubeId'))
    if not video_id:
        raise ValidationError("Invalid YouTube video ID")

    now = utcnow()
    video = channel_video_service.create({
        'video_id': video_id,
        'title': optional_text(data, 'title'),
        'description': optional_text(data, 'description', ''),
        'thumbnail_url': thumbnail_url(video_id),
        'video_url': watch_url(video_id),
        'duration': '0:00',
        'published_at': now,
        'channel_title': optional_text(data, 'category', 'RSRG'),
        'fetched_at': now,
        'is_active': parse_bool(data.get('isActive'), default=True),
    })
    return jsonify(serialize_channel_video(video)), 201


@api_bp.route('/videos/<int:video_id>', methods=['GET'])
def get_channel_video(video_id: int):
    return jsonify(serialize_channel_video(channel_video_service.get_or_404(video_id)))


@api_bp.route('/videos/<int:video_id>', methods=['PUT'])
def update_channel_video(video_id: int):
    video = channel_video_service.get_or_404(video_id)
    data = json_body()
    require_fields(data, ('title',), "Title is required")
    video = channel_video_service.update(video, {
        'title': optional_text(data, 'title'),
        'description': optional_text(data, 'description', ''),
        'is_active': parse_bool(data.get('isActive'), default=True),
    })
    return jsonify(serialize_channel_video(video))


@api_bp.route('/videos/<int:video_id>', methods=['PATCH'])
def toggle_channel_video(video_id: int):
    video = channel_video_service.toggle_active(channel_video_service.get_or_404(video_id))
    return jsonify(serialize_channel_video(video))


@api_bp.route('/videos/<int:video_id>', methods=['DELETE'])
def delete_channel_video(video_id: int):
    channel_video_service.delete(channel_video_service.get_or_404(video_id))
    return jsonify(success())


@api_bp.route('/youtube/fetch', methods=['GET'])
def youtube_status():
    return jsonify(configuration_status())


@api_bp.route('/youtube/fetch', methods=['POST'])
def youtube_fetch():
    result = sync_channel_videos()
    return jsonify(success(
        message=result.message,
        videosUpdated=result.videos_updated,
        totalVideosOnChannel=result.total_on_channel,
    ))
