"""ISO-8601 week arithmetic used to validate weekly schedules."""

from __future__ import annotations

import calendar
from datetime import date

from opsportal.models import ScheduleType
from opsportal.services.errors import ValidationError

# Last year the calendar can represent
MAX_YEAR = date.max.year


def iso_week(day: date) -> int:
    """ISO week number (1-53) of ``day``."""
    return day.isocalendar()[1]


def iso_week_year(day: date) -> tuple[int, int]:
    """Return ``(week, iso_year)``; early January may belong to the previous ISO year."""
    iso_year, week, _ = day.isocalendar()
    return week, iso_year


def weeks_in_year(year: int) -> int:
    """53 when Jan 1 is a Thursday, or a Wednesday in a leap year; otherwise 52."""
    jan_first = date(year, 1, 1).weekday()
    if jan_first == 3 or (calendar.isleap(year) and jan_first == 2):
        return 53
    return 52


def validate_week(week: int, year: int) -> None:
    """Reject a week/year pair the ISO calendar does not have."""
    if not 1 <= year <= MAX_YEAR:
        raise ValidationError(f"Year must be between 1 and {MAX_YEAR}")
    if not 1 <= week <= weeks_in_year(year):
        raise ValidationError(f"Week number must be between 1 and {weeks_in_year(year)} for {year}")


def next_week(week: int, year: int) -> tuple[int, int]:
    if week >= weeks_in_year(year):
        return 1, year + 1
    return week + 1, year


def expected_week(schedule_type: ScheduleType | str, today: date | None = None) -> tuple[int, int]:
    """Week/year a schedule of ``schedule_type`` must target as of ``today``."""
    schedule_type = ScheduleType(schedule_type)
    week, year = iso_week_year(today or date.today())
    if schedule_type is ScheduleType.NEXT_WEEK:
        return next_week(week, year)
    return week, year


__all__ = ['MAX_YEAR', 'expected_week', 'iso_week', 'iso_week_year', 'next_week', 'validate_week', 'weeks_in_year']
