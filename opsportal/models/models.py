from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Enum as SqlEnum,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from opsportal.extensions import db, bcrypt

JSONType = JSON().with_variant(JSONB, 'postgresql')
# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer, 'sqlite')


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


def _enum_column(enum_cls, name: str) -> SqlEnum:
    return SqlEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=_enum_values,
    )


class TimestampedBase(db.Model):
    """Abstract base providing id/created/updated columns."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


class ScheduleType(Enum):
    THIS_WEEK = "this_week"
    NEXT_WEEK = "next_week"


class TeamType(Enum):
    OPERATIONS = "operations"
    MAINTENANCE = "maintenance"


class CheckInStatus(Enum):
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class TrainingContentType(Enum):
    TRAINING_VIDEOS = "training_videos"
    WORK_INSTRUCTIONS = "work_instructions"
    DOCUMENTS = "documents"


class StaffRole(Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    EMPLOYEE = "employee"


class AdminUser(TimestampedBase):
    """Dashboard operator allowed to sign in to the admin API."""

    __tablename__ = "admin_user"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column('is_active', Boolean, nullable=False, default=True)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def set_password(self, password: str) -> None:
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except ValueError:
            return False

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_active(self) -> bool:  # Flask-Login compatibility
        return bool(self.active)

    @property
    def is_anonymous(self) -> bool:
        return False

    def get_id(self) -> str:
        return str(self.id)


class StaffUser(TimestampedBase):
    __tablename__ = "staff_user"

    username: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(150), nullable=False, default='')
    last_name: Mapped[str] = mapped_column(String(150), nullable=False, default='')
    phone: Mapped[str] = mapped_column(String(32), nullable=False, default='')
    department: Mapped[str] = mapped_column(String(128), nullable=False, default='')
    role: Mapped[str] = mapped_column(String(32), nullable=False, default=StaffRole.EMPLOYEE.value)
    employee_id: Mapped[str | None] = mapped_column(String(64))
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column('is_active', Boolean, nullable=False, default=True)
    is_staff: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_superuser: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    date_joined: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.username

    @property
    def display_role(self) -> str:
        if self.is_superuser:
            return StaffRole.ADMIN.value
        if self.is_staff:
            return StaffRole.SUPERVISOR.value
        return self.role or StaffRole.EMPLOYEE.value


class CheckInRecord(TimestampedBase):
    __tablename__ = "checkin_record"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    reason: Mapped[str] = mapped_column(Text, nullable=False, default='')
    check_in_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), index=True)
    check_out_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[CheckInStatus] = mapped_column(
        _enum_column(CheckInStatus, 'checkin_status'),
        nullable=False,
        default=CheckInStatus.CHECKED_IN,
    )


class NewsArticle(TimestampedBase):
    """Long-form news managed from the news desk (draft/published)."""

    __tablename__ = "news_article"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default='')
    content: Mapped[str] = mapped_column(Text, nullable=False, default='')
    category: Mapped[str] = mapped_column(String(64), nullable=False, default='general')
    priority: Mapped[str] = mapped_column(String(32), nullable=False, default='normal')
    author: Mapped[str] = mapped_column(String(255), nullable=False, default='Admin')
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class NewsItem(TimestampedBase):
    """Homepage news card with embedded images."""

    __tablename__ = "news_item"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_data: Mapped[str | None] = mapped_column(Text)
    avatar_data: Mapped[str | None] = mapped_column(Text)
    news_link: Mapped[str | None] = mapped_column(String(1024))
    poster_name: Mapped[str | None] = mapped_column(String(255))
    poster_title: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class SafetyAlert(TimestampedBase):
    __tablename__ = "safety_alert"
    __table_args__ = (
        UniqueConstraint("week_number", "year", name="uq_safety_alert_week_year"),
    )

    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_data: Mapped[str | None] = mapped_column(Text)
    pdf_data: Mapped[str | None] = mapped_column(Text)
    pdf_filename: Mapped[str | None] = mapped_column(String(255))
    pdf_files: Mapped[list | None] = mapped_column(JSONType)  # [{"filename": ..., "data": ...}]
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class OperationSchedule(TimestampedBase):
    """Weekly operations/maintenance plan with its embedded spreadsheet or PDF."""

    __tablename__ = "operation_schedule"
    __table_args__ = (
        # One visible schedule per (schedule_type, team_type) bucket
        Index(
            "uq_operation_schedule_active_bucket",
            "schedule_type",
            "team_type",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
        Index("ix_operation_schedule_year_week", "year", "week_number"),
    )

    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    excel_data: Mapped[str | None] = mapped_column(Text)
    excel_filename: Mapped[str | None] = mapped_column(String(255))
    schedule_type: Mapped[ScheduleType] = mapped_column(
        _enum_column(ScheduleType, 'schedule_type'),
        nullable=False,
    )
    team_type: Mapped[TeamType] = mapped_column(
        _enum_column(TeamType, 'team_type'),
        nullable=False,
        default=TeamType.OPERATIONS,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class RealtimeScheduleLink(TimestampedBase):
    __tablename__ = "realtime_schedule_link"

    team_type: Mapped[TeamType] = mapped_column(
        _enum_column(TeamType, 'link_team_type'),
        nullable=False,
        unique=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    link_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class DepotInductionVideo(TimestampedBase):
    __tablename__ = "depot_induction_video"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    youtube_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    youtube_id: Mapped[str] = mapped_column(String(32), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ChannelVideo(TimestampedBase):
    """Local cache of the company channel's videos."""

    __tablename__ = "channel_video"

    video_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default='')
    thumbnail_url: Mapped[str] = mapped_column(String(1024), nullable=False, default='')
    video_url: Mapped[str] = mapped_column(String(1024), nullable=False, default='')
    duration: Mapped[str] = mapped_column(String(16), nullable=False, default='0:00')
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), index=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    channel_title: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    fetched_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Document(TimestampedBase):
    __tablename__ = "document"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default='')
    category: Mapped[str] = mapped_column(String(64), nullable=False, default='general')
    document_type: Mapped[str] = mapped_column(String(32), nullable=False, default='pdf')
    file: Mapped[str] = mapped_column(Text, nullable=False, default='')
    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    uploaded_by: Mapped[str] = mapped_column(String(255), nullable=False, default='Admin')


class TrainingContent(TimestampedBase):
    __tablename__ = "training_content"
    __table_args__ = (
        Index("ix_training_content_type_order", "content_type", "display_order"),
    )

    content_type: Mapped[TrainingContentType] = mapped_column(
        _enum_column(TrainingContentType, 'training_content_type'),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    link_url: Mapped[str | None] = mapped_column(String(1024))
    pdf_data: Mapped[str | None] = mapped_column(Text)
    pdf_filename: Mapped[str | None] = mapped_column(String(255))
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ApiKey(TimestampedBase):
    """Credentials for outbound integrations, keyed by name."""

    __tablename__ = "api_key"

    key_name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    key_value: Mapped[str] = mapped_column(Text, nullable=False)
    channel_id: Mapped[str | None] = mapped_column(String(128))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
