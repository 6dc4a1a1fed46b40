from .models import (
    AdminUser,
    ApiKey,
    ChannelVideo,
    CheckInRecord,
    CheckInStatus,
    DepotInductionVideo,
    Document,
    NewsArticle,
    NewsItem,
    OperationSchedule,
    RealtimeScheduleLink,
    SafetyAlert,
    ScheduleType,
    StaffRole,
    StaffUser,
    TeamType,
    TimestampedBase,
    TrainingContent,
    TrainingContentType,
    utcnow,
)

__all__ = [
    "AdminUser",
    "ApiKey",
    "ChannelVideo",
    "CheckInRecord",
    "CheckInStatus",
    "DepotInductionVideo",
    "Document",
    "NewsArticle",
    "NewsItem",
    "OperationSchedule",
    "RealtimeScheduleLink",
    "SafetyAlert",
    "ScheduleType",
    "StaffRole",
    "StaffUser",
    "TeamType",
    "TimestampedBase",
    "TrainingContent",
    "TrainingContentType",
    "utcnow",
]
