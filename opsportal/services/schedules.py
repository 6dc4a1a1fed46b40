"""Weekly operations schedules and real-time schedule links."""

from __future__ import annotations

from datetime import date
from typing import Any

from flask import current_app
from sqlalchemy import select

from opsportal.extensions import db
from opsportal.models import OperationSchedule, RealtimeScheduleLink, ScheduleType, TeamType
from opsportal.services.crud import CRUDService
from opsportal.services.errors import ConflictError, ValidationError
from opsportal.services.weeks import expected_week, validate_week

SCHEDULE_LABELS = {
    ScheduleType.THIS_WEEK: 'this week',
    ScheduleType.NEXT_WEEK: 'next week',
}


def bucket_conflict_message(schedule_type: ScheduleType, team_type: TeamType) -> str:
    return (
        f"An active {team_type.value} schedule for {SCHEDULE_LABELS[schedule_type]} already exists. "
        "Please edit the existing one."
    )


class ScheduleService(CRUDService[OperationSchedule]):
    """Enforces one active schedule per (schedule type, team type) bucket.

    The pre-check gives a readable message; the partial unique index on the
    table catches anything that races past it.
    """

    conflict_message = "An active schedule already exists for this schedule type and team"

    def __init__(self):
        super().__init__(OperationSchedule, 'operation')

    def list_schedules(
        self,
        schedule_type: ScheduleType | None = None,
        team_type: TeamType | None = None,
    ) -> list[OperationSchedule]:
        filters: dict[str, Any] = {}
        if schedule_type is not None:
            filters['schedule_type'] = schedule_type
        if team_type is not None:
            filters['team_type'] = team_type
        return self.list_all(
            filters=filters,
            order_by=(OperationSchedule.year.desc(), OperationSchedule.week_number.desc(), OperationSchedule.id.desc()),
        )

    def active_in_bucket(
        self,
        schedule_type: ScheduleType,
        team_type: TeamType,
        exclude_id: int | None = None,
    ) -> OperationSchedule | None:
        stmt = select(OperationSchedule).where(
            OperationSchedule.schedule_type == schedule_type,
            OperationSchedule.team_type == team_type,
            OperationSchedule.is_active.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(OperationSchedule.id != exclude_id)
        return db.session.scalars(stmt.limit(1)).first()

    def current_overview(self, today: date | None = None) -> dict[str, dict]:
        """Expected week and active schedule per team, for each schedule type."""
        overview = {}
        for schedule_type in ScheduleType:
            week, year = expected_week(schedule_type, today)
            overview[schedule_type.value] = {
                'weekNumber': week,
                'year': year,
                'schedules': {
                    team_type.value: self.active_in_bucket(schedule_type, team_type)
                    for team_type in TeamType
                },
            }
        return overview

    def _check_week(self, schedule_type: ScheduleType, week: int, year: int) -> None:
        validate_week(week, year)

        if not current_app.config.get('ENFORCE_SCHEDULE_WEEK', True):
            return

        expected = expected_week(schedule_type)
        if (week, year) != expected:
            raise ValidationError(
                f"A schedule for {SCHEDULE_LABELS[schedule_type]} must be for week {expected[0]} of {expected[1]}"
            )

    def _check_bucket(self, schedule_type: ScheduleType, team_type: TeamType, exclude_id: int | None = None) -> None:
        if self.active_in_bucket(schedule_type, team_type, exclude_id) is not None:
            raise ConflictError(bucket_conflict_message(schedule_type, team_type))

    def _validate_create(self, data: dict[str, Any]) -> None:
        data.setdefault('team_type', TeamType.OPERATIONS)
        data.setdefault('is_active', True)
        self._check_week(data['schedule_type'], data['week_number'], data['year'])
        if data['is_active']:
            self._check_bucket(data['schedule_type'], data['team_type'])

    def _validate_update(self, instance: OperationSchedule, data: dict[str, Any]) -> None:
        schedule_type = data.get('schedule_type') or instance.schedule_type
        team_type = data.get('team_type') or instance.team_type
        week = data.get('week_number', instance.week_number)
        year = data.get('year', instance.year)

        # Untouched week/type on an old record is not re-validated against today's calendar
        if (schedule_type, week, year) != (instance.schedule_type, instance.week_number, instance.year):
            self._check_week(schedule_type, week, year)

        if instance.is_active and (schedule_type, team_type) != (instance.schedule_type, instance.team_type):
            self._check_bucket(schedule_type, team_type, exclude_id=instance.id)

    def _validate_activation(self, instance: OperationSchedule, is_active: bool) -> None:
        if is_active:
            self._check_bucket(instance.schedule_type, instance.team_type, exclude_id=instance.id)


class RealtimeLinkService(CRUDService[RealtimeScheduleLink]):
    """One real-time schedule link per team."""

    conflict_message = "A real-time schedule link already exists for this team"

    def __init__(self):
        super().__init__(RealtimeScheduleLink, 'realtime schedule link')

    def list_links(self) -> list[RealtimeScheduleLink]:
        return self.list_all(order_by=RealtimeScheduleLink.team_type.asc())

    def get_for_team(self, team_type: TeamType) -> RealtimeScheduleLink | None:
        return db.session.scalars(
            select(RealtimeScheduleLink).where(RealtimeScheduleLink.team_type == team_type)
        ).first()

    def upsert(self, data: dict[str, Any]) -> tuple[RealtimeScheduleLink, bool]:
        """Create the team's link, or overwrite it if one exists. Returns ``(link, created)``."""
        existing = self.get_for_team(data['team_type'])
        if existing is None:
            return self.create(data), True
        return self.update(existing, data), False

    def _validate_update(self, instance: RealtimeScheduleLink, data: dict[str, Any]) -> None:
        team_type = data.get('team_type')
        if team_type is None or team_type == instance.team_type:
            return
        other = self.get_for_team(team_type)
        if other is not None and other.id != instance.id:
            raise ConflictError(f"A real-time schedule link for {team_type.value} already exists")


schedule_service = ScheduleService()
realtime_link_service = RealtimeLinkService()


__all__ = [
    'RealtimeLinkService',
    'ScheduleService',
    'bucket_conflict_message',
    'realtime_link_service',
    'schedule_service',
]
