"""Content services: check-ins, news, safety alerts, videos, documents, training."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from opsportal.extensions import db
from opsportal.models import (
    ChannelVideo,
    CheckInRecord,
    CheckInStatus,
    DepotInductionVideo,
    Document,
    NewsArticle,
    NewsItem,
    SafetyAlert,
    TrainingContent,
    utcnow,
)
from opsportal.services.crud import CRUDService
from opsportal.services.errors import ConflictError
from opsportal.services.weeks import validate_week


class CheckInService(CRUDService[CheckInRecord]):
    def __init__(self):
        super().__init__(CheckInRecord, 'check-in record')

    def list_recent(self) -> list[CheckInRecord]:
        return self.list_all(order_by=(CheckInRecord.created_at.desc(), CheckInRecord.id.desc()))

    def check_in(self, name: str, company: str = '', reason: str = '') -> CheckInRecord:
        return self.create({
            'name': name,
            'company': company or '',
            'reason': reason or '',
            'check_in_time': utcnow(),
            'status': CheckInStatus.CHECKED_IN,
        })

    def check_out(self, record: CheckInRecord) -> CheckInRecord:
        return self.update(record, {
            'check_out_time': utcnow(),
            'status': CheckInStatus.CHECKED_OUT,
        })


class NewsArticleService(CRUDService[NewsArticle]):
    def __init__(self):
        super().__init__(NewsArticle, 'news item')

    def list_recent(self) -> list[NewsArticle]:
        return self.list_all(order_by=(NewsArticle.created_at.desc(), NewsArticle.id.desc()))

    def set_published(self, article: NewsArticle, published: bool) -> NewsArticle:
        return self.update(article, {
            'is_published': published,
            'published_at': utcnow() if published else None,
        })


class NewsItemService(CRUDService[NewsItem]):
    def __init__(self):
        super().__init__(NewsItem, 'news item')

    def list_recent(self) -> list[NewsItem]:
        return self.list_all(order_by=(NewsItem.created_at.desc(), NewsItem.id.desc()))


class SafetyAlertService(CRUDService[SafetyAlert]):
    """Safety alerts, one per (week, year)."""

    conflict_message = "A safety alert for this week already exists"

    def __init__(self):
        super().__init__(SafetyAlert, 'safety alert')

    def list_by_week(self) -> list[SafetyAlert]:
        return self.list_all(order_by=(SafetyAlert.year.desc(), SafetyAlert.week_number.desc()))

    def find_for_week(self, week_number: int, year: int, exclude_id: int | None = None) -> SafetyAlert | None:
        stmt = select(SafetyAlert).where(SafetyAlert.week_number == week_number, SafetyAlert.year == year)
        if exclude_id is not None:
            stmt = stmt.where(SafetyAlert.id != exclude_id)
        return db.session.scalars(stmt.limit(1)).first()

    def _check_week(self, week_number: int, year: int, exclude_id: int | None = None) -> None:
        validate_week(week_number, year)
        if self.find_for_week(week_number, year, exclude_id) is not None:
            raise ConflictError(f"Safety alert for week {week_number} of {year} already exists")

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._check_week(data['week_number'], data['year'])
        _mirror_first_pdf(data)

    def _validate_update(self, instance: SafetyAlert, data: dict[str, Any]) -> None:
        week = data.get('week_number', instance.week_number)
        year = data.get('year', instance.year)
        if (week, year) != (instance.week_number, instance.year):
            self._check_week(week, year, exclude_id=instance.id)
        _mirror_first_pdf(data)

    def attach_pdf(self, alert: SafetyAlert, filename: str, data: str) -> SafetyAlert:
        """Append a PDF; the first attachment is mirrored into the single-file fields."""
        files = list(alert.pdf_files or [])
        files.append({'filename': filename, 'data': data})
        return self.update(alert, {'pdf_files': files})


def _mirror_first_pdf(data: dict[str, Any]) -> None:
    files = data.get('pdf_files')
    if files:
        data['pdf_data'] = files[0]['data']
        data['pdf_filename'] = files[0]['filename']


class DepotInductionService(CRUDService[DepotInductionVideo]):
    def __init__(self):
        super().__init__(DepotInductionVideo, 'video')

    def list_recent(self) -> list[DepotInductionVideo]:
        return self.list_all(order_by=(DepotInductionVideo.created_at.desc(), DepotInductionVideo.id.desc()))


class ChannelVideoService(CRUDService[ChannelVideo]):
    conflict_message = "This video is already in the library"

    def __init__(self):
        super().__init__(ChannelVideo, 'video')

    def list_latest(self) -> list[ChannelVideo]:
        return self.list_all(order_by=(ChannelVideo.published_at.desc(), ChannelVideo.id.desc()))


class DocumentService(CRUDService[Document]):
    def __init__(self):
        super().__init__(Document, 'document')

    def list_recent(self) -> list[Document]:
        return self.list_all(order_by=(Document.created_at.desc(), Document.id.desc()))

    def record_download(self, document: Document) -> Document:
        document.download_count = Document.download_count + 1
        self._commit('update', verb='record download of')
        db.session.refresh(document)
        return document


class TrainingContentService(CRUDService[TrainingContent]):
    def __init__(self):
        super().__init__(TrainingContent, 'training content')

    def list_ordered(self) -> list[TrainingContent]:
        return self.list_all(order_by=(
            TrainingContent.content_type.asc(),
            TrainingContent.display_order.asc(),
            TrainingContent.created_at.desc(),
        ))


checkin_service = CheckInService()
news_article_service = NewsArticleService()
news_item_service = NewsItemService()
safety_alert_service = SafetyAlertService()
depot_induction_service = DepotInductionService()
channel_video_service = ChannelVideoService()
document_service = DocumentService()
training_content_service = TrainingContentService()


__all__ = [
    'ChannelVideoService',
    'CheckInService',
    'DepotInductionService',
    'DocumentService',
    'NewsArticleService',
    'NewsItemService',
    'SafetyAlertService',
    'TrainingContentService',
    'channel_video_service',
    'checkin_service',
    'depot_induction_service',
    'document_service',
    'news_article_service',
    'news_item_service',
    'safety_alert_service',
    'training_content_service',
]
