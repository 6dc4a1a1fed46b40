"""Visitor check-in endpoints."""

from __future__ import annotations

from flask import jsonify

from opsportal.blueprints.api import api_bp
from opsportal.blueprints.api.helpers import json_body, optional_text, parse_enum, require_fields, success
from opsportal.models import CheckInRecord, CheckInStatus
from opsportal.services.content import checkin_service
from opsportal.services.serialization import enum_value, iso_timestamp


def serialize_checkin(record: CheckInRecord) -> dict:
    return {
        'id': str(record.id),
        'name': record.name,
        'company': record.company,
        'reason': record.reason,
        'checkInTime': iso_timestamp(record.check_in_time),
        'checkOutTime': iso_timestamp(record.check_out_time),
        'status': enum_value(record.status),
        'createdAt': iso_timestamp(record.created_at),
    }


@api_bp.route('/checkins', methods=['GET'])
def list_checkins():
    return jsonify([serialize_checkin(r) for r in checkin_service.list_recent()])


@api_bp.route('/checkins', methods=['POST'])
def create_checkin():
    data = json_body()
    require_fields(data, ('name',), "Name is required")
    record = checkin_service.check_in(
        name=optional_text(data, 'name'),
        company=optional_text(data, 'company', ''),
        reason=optional_text(data, 'reason', ''),
    )
    return jsonify(serialize_checkin(record)), 201


@api_bp.route('/checkins/<int:record_id>', methods=['GET'])
def get_checkin(record_id: int):
    return jsonify(serialize_checkin(checkin_service.get_or_404(record_id)))


@api_bp.route('/checkins/<int:record_id>', methods=['PUT'])
def update_checkin(record_id: int):
    record = checkin_service.get_or_404(record_id)
    data = json_body()
    require_fields(data, ('name',), "Name is required")
    status = CheckInStatus.CHECKED_IN
    if data.get('status'):
        status = parse_enum(CheckInStatus, data['status'], "Status must be 'checked_in' or 'checked_out'")

    record = checkin_service.update(record, {
        'name': optional_text(data, 'name'),
        'company': optional_text(data, 'company', ''),
        'reason': optional_text(data, 'reason', ''),
        'status': status,
    })
    return jsonify(serialize_checkin(record))


@api_bp.route('/checkins/<int:record_id>', methods=['PATCH'])
def check_out(record_id: int):
    record = checkin_service.check_out(checkin_service.get_or_404(record_id))
    return jsonify(serialize_checkin(record))


@api_bp.route('/checkins/<int:record_id>', methods=['DELETE'])
def delete_checkin(record_id: int):
    checkin_service.delete(checkin_service.get_or_404(record_id))
    return jsonify(success())
