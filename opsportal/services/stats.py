"""Dashboard counters and the recent activity feed."""

from __future__ import annotations

from datetime import datetime, time

from sqlalchemy import select

from opsportal.extensions import db
from opsportal.models import ChannelVideo, CheckInRecord, CheckInStatus, Document, NewsArticle, utcnow
from opsportal.services.serialization import as_utc, iso_timestamp

RECENT_PER_SOURCE = 5
RECENT_ACTIVITY_LIMIT = 10


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''} ago"


def format_time_ago(moment: datetime | None, now: datetime | None = None) -> str:
    if moment is None:
        return ''
    now = as_utc(now) if now is not None else utcnow()
    seconds = (now - as_utc(moment)).total_seconds()
    minutes = int(seconds // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return _plural(minutes, 'minute')
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, 'hour')
    return _plural(hours // 24, 'day')


def _count(model, *criteria) -> int:
    stmt = select(db.func.count()).select_from(model)
    if criteria:
        stmt = stmt.where(*criteria)
    return db.session.scalar(stmt) or 0


def system_stats(now: datetime | None = None) -> dict[str, int]:
    now = as_utc(now) if now is not None else utcnow()
    start_of_day = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    return {
        'totalUsers': _count(CheckInRecord),
        'activeUsers': _count(CheckInRecord, CheckInRecord.status == CheckInStatus.CHECKED_IN),
        'todayCheckIns': _count(CheckInRecord, CheckInRecord.check_in_time >= start_of_day),
        'totalNews': _count(NewsArticle),
        'publishedNews': _count(NewsArticle, NewsArticle.is_published.is_(True)),
        'totalVideos': _count(ChannelVideo),
        'activeVideos': _count(ChannelVideo, ChannelVideo.is_active.is_(True)),
        'totalDocuments': _count(Document),
        'activeDocuments': _count(Document, Document.is_active.is_(True)),
    }


def recent_activity(now: datetime | None = None) -> list[dict]:
    """Latest check-in and news events merged by their real timestamps."""
    events: list[tuple[datetime, dict]] = []

    # Ranked by the same moment the event is stamped with
    last_seen = db.func.coalesce(CheckInRecord.check_out_time, CheckInRecord.created_at)
    checkins = db.session.scalars(
        select(CheckInRecord).order_by(last_seen.desc(), CheckInRecord.id.desc()).limit(RECENT_PER_SOURCE)
    )
    for record in checkins:
        checked_out = record.check_out_time is not None
        moment = as_utc(record.check_out_time if checked_out else record.created_at)
        events.append((moment, {
            'id': str(record.id),
            'action': "User Check-out" if checked_out else "User Check-in",
            'user': record.name,
            'type': 'info',
        }))

    articles = db.session.scalars(
        select(NewsArticle).order_by(NewsArticle.updated_at.desc()).limit(RECENT_PER_SOURCE)
    )
    for article in articles:
        events.append((as_utc(article.updated_at), {
            'id': f"news-{article.id}",
            'action': "News Published" if article.is_published else "News Updated",
            'user': article.author,
            'type': 'success' if article.is_published else 'info',
        }))

    events.sort(key=lambda event: event[0], reverse=True)
    activity = []
    for moment, entry in events[:RECENT_ACTIVITY_LIMIT]:
        entry['time'] = format_time_ago(moment, now)
        entry['timestamp'] = iso_timestamp(moment)
        activity.append(entry)
    return activity


def dashboard(now: datetime | None = None) -> dict:
    return {
        'systemStats': system_stats(now),
        'recentActivity': recent_activity(now),
    }


__all__ = ['dashboard', 'format_time_ago', 'recent_activity', 'system_stats']
