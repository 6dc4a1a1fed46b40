"""Weekly operations/maintenance schedules and real-time schedule links."""

from __future__ import annotations

from flask import jsonify, request

from opsportal.blueprints.api import api_bp
from opsportal.blueprints.api.helpers import (
    json_body,
    optional_text,
    parse_enum,
    parse_flag,
    parse_int,
    require_fields,
    success,
)
from opsportal.models import OperationSchedule, RealtimeScheduleLink, ScheduleType, TeamType
from opsportal.services.schedules import realtime_link_service, schedule_service
from opsportal.services.serialization import enum_value, iso_timestamp
from opsportal.services.uploads import validate_schedule_file
from opsportal.services.weeks import MAX_YEAR

SCHEDULE_TYPE_MESSAGE = "Schedule type must be 'this_week' or 'next_week'"
TEAM_TYPE_MESSAGE = "Team type must be 'operations' or 'maintenance'"


def serialize_schedule(schedule: OperationSchedule | None) -> dict | None:
    if schedule is None:
        return None
    return {
        'id': str(schedule.id),
        'weekNumber': schedule.week_number,
        'year': schedule.year,
        'title': schedule.title,
        'description': schedule.description,
        'excelData': schedule.excel_data,
        'excelFilename': schedule.excel_filename,
        'scheduleType': enum_value(schedule.schedule_type),
        'teamType': enum_value(schedule.team_type),
        'isActive': schedule.is_active,
        'createdAt': iso_timestamp(schedule.created_at),
        'updatedAt': iso_timestamp(schedule.updated_at),
    }


def _schedule_fields(data: dict) -> dict:
    fields = {
        'week_number': parse_int(data['weekNumber'], 'weekNumber', minimum=1),
        'year': parse_int(data['year'], 'year', minimum=1, maximum=MAX_YEAR),
        'title': optional_text(data, 'title'),
        'description': optional_text(data, 'description'),
        'excel_data': validate_schedule_file(data.get('excelData'), 'excelData'),
        'excel_filename': optional_text(data, 'excelFilename'),
    }
    if data.get('scheduleType'):
        fields['schedule_type'] = parse_enum(ScheduleType, data['scheduleType'], SCHEDULE_TYPE_MESSAGE)
    if data.get('teamType'):
        fields['team_type'] = parse_enum(TeamType, data['teamType'], TEAM_TYPE_MESSAGE)
    return fields


@api_bp.route('/operations', methods=['GET'])
def list_operations():
    schedule_type = request.args.get('scheduleType')
    team_type = request.args.get('teamType')
    schedules = schedule_service.list_schedules(
        schedule_type=parse_enum(ScheduleType, schedule_type, SCHEDULE_TYPE_MESSAGE) if schedule_type else None,
        team_type=parse_enum(TeamType, team_type, TEAM_TYPE_MESSAGE) if team_type else None,
    )
    return jsonify([serialize_schedule(s) for s in schedules])


@api_bp.route('/operations/current', methods=['GET'])
def current_operations():
    overview = schedule_service.current_overview()
    for bucket in overview.values():
        bucket['schedules'] = {team: serialize_schedule(s) for team, s in bucket['schedules'].items()}
    return jsonify(overview)


@api_bp.route('/operations', methods=['POST'])
def create_operation():
    data = json_body()
    require_fields(
        data,
        ('weekNumber', 'year', 'title', 'scheduleType'),
        "Week number, year, title, and schedule type are required",
    )
    schedule = schedule_service.create(_schedule_fields(data))
    return jsonify(serialize_schedule(schedule)), 201


@api_bp.route('/operations/<int:schedule_id>', methods=['GET'])
def get_operation(schedule_id: int):
    return jsonify(serialize_schedule(schedule_service.get_or_404(schedule_id)))


@api_bp.route('/operations/<int:schedule_id>', methods=['PUT'])
def update_operation(schedule_id: int):
    schedule = schedule_service.get_or_404(schedule_id)
    data = json_body()
    require_fields(data, ('weekNumber', 'year', 'title'), "Week number, year, and title are required")
    schedule = schedule_service.update(schedule, _schedule_fields(data))
    return jsonify(serialize_schedule(schedule))


@api_bp.route('/operations/<int:schedule_id>', methods=['PATCH'])
def set_operation_active(schedule_id: int):
    schedule = schedule_service.get_or_404(schedule_id)
    schedule = schedule_service.set_active(schedule, parse_flag(json_body()))
    return jsonify(serialize_schedule(schedule))


@api_bp.route('/operations/<int:schedule_id>', methods=['DELETE'])
def delete_operation(schedule_id: int):
    schedule_service.delete(schedule_service.get_or_404(schedule_id))
    return jsonify(success())


# ------------------------------------------------------ real-time schedules

def serialize_link(link: RealtimeScheduleLink) -> dict:
    return {
        'id': str(link.id),
        'teamType': enum_value(link.team_type),
        'title': link.title,
        'linkUrl': link.link_url,
        'description': link.description,
        'isActive': link.is_active,
        'createdAt': iso_timestamp(link.created_at),
        'updatedAt': iso_timestamp(link.updated_at),
    }


def _link_fields(data: dict) -> dict:
    require_fields(data, ('teamType', 'title', 'linkUrl'), "Team type, title, and link URL are required")
    fields = {
        'team_type': parse_enum(TeamType, data['teamType'], TEAM_TYPE_MESSAGE),
        'title': optional_text(data, 'title'),
        'link_url': optional_text(data, 'linkUrl'),
        'description': optional_text(data, 'description'),
    }
    if 'isActive' in data:
        fields['is_active'] = parse_flag(data)
    return fields


@api_bp.route('/realtime-schedule-links', methods=['GET'])
def list_realtime_links():
    return jsonify([serialize_link(link) for link in realtime_link_service.list_links()])


@api_bp.route('/realtime-schedule-links', methods=['POST'])
def save_realtime_link():
    link, created = realtime_link_service.upsert(_link_fields(json_body()))
    return jsonify(serialize_link(link)), 201 if created else 200


@api_bp.route('/realtime-schedule-links/<int:link_id>', methods=['GET'])
def get_realtime_link(link_id: int):
    return jsonify(serialize_link(realtime_link_service.get_or_404(link_id)))


@api_bp.route('/realtime-schedule-links/<int:link_id>', methods=['PUT'])
def update_realtime_link(link_id: int):
    link = realtime_link_service.get_or_404(link_id)
    link = realtime_link_service.update(link, _link_fields(json_body()))
    return jsonify(serialize_link(link))


@api_bp.route('/realtime-schedule-links/<int:link_id>', methods=['PATCH'])
def set_realtime_link_active(link_id: int):
    link = realtime_link_service.get_or_404(link_id)
    link = realtime_link_service.set_active(link, parse_flag(json_body()))
    return jsonify(serialize_link(link))


@api_bp.route('/realtime-schedule-links/<int:link_id>', methods=['DELETE'])
def delete_realtime_link(link_id: int):
    realtime_link_service.delete(realtime_link_service.get_or_404(link_id))
    return jsonify(success())
