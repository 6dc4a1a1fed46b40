"""Weekly safety alerts."""

from __future__ import annotations

from flask import jsonify

from opsportal.blueprints.api import api_bp
from opsportal.blueprints.api.helpers import (
    json_body,
    optional_text,
    parse_flag,
    parse_int,
    require_fields,
    success,
)
from opsportal.models import SafetyAlert
from opsportal.services.content import safety_alert_service
from opsportal.services.errors import ValidationError
from opsportal.services.serialization import iso_timestamp
from opsportal.services.uploads import validate_image, validate_pdf
from opsportal.services.weeks import MAX_YEAR

REQUIRED_MESSAGE = "Week number, year, category, title, and content are required"


def serialize_alert(alert: SafetyAlert) -> dict:
    return {
        'id': str(alert.id),
        'weekNumber': alert.week_number,
        'year': alert.year,
        'category': alert.category,
        'title': alert.title,
        'content': alert.content,
        'thumbnailData': alert.thumbnail_data,
        'pdfData': alert.pdf_data,
        'pdfFilename': alert.pdf_filename,
        'pdfFiles': alert.pdf_files or [],
        'isActive': alert.is_active,
        'createdAt': iso_timestamp(alert.created_at),
        'updatedAt': iso_timestamp(alert.updated_at),
    }


def _pdf_files(value) -> list[dict] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError("pdfFiles must be a list")
    files = []
    for entry in value:
        if not isinstance(entry, dict) or not entry.get('filename') or not entry.get('data'):
            raise ValidationError("Each PDF needs a filename and data")
        files.append({
            'filename': str(entry['filename']),
            'data': validate_pdf(entry['data'], 'pdfFiles'),
        })
    return files


def _alert_fields(data: dict) -> dict:
    require_fields(data, ('weekNumber', 'year', 'category', 'title', 'content'), REQUIRED_MESSAGE)
    fields = {
        'week_number': parse_int(data['weekNumber'], 'weekNumber', minimum=1),
        'year': parse_int(data['year'], 'year', minimum=1, maximum=MAX_YEAR),
        'category': optional_text(data, 'category'),
        'title': optional_text(data, 'title'),
        'content': optional_text(data, 'content'),
        'thumbnail_data': validate_image(data.get('thumbnailData'), 'thumbnailData'),
        'pdf_data': validate_pdf(data.get('pdfData'), 'pdfData'),
        'pdf_filename': optional_text(data, 'pdfFilename'),
    }
    files = _pdf_files(data.get('pdfFiles'))
    if files is not None:
        fields['pdf_files'] = files
    return fields


@api_bp.route('/safety-alerts', methods=['GET'])
def list_safety_alerts():
    return jsonify([serialize_alert(a) for a in safety_alert_service.list_by_week()])


@api_bp.route('/safety-alerts', methods=['POST'])
def create_safety_alert():
    fields = _alert_fields(json_body())
    fields['is_active'] = True
    alert = safety_alert_service.create(fields)
    return jsonify(serialize_alert(alert)), 201


@api_bp.route('/safety-alerts/upload-pdf', methods=['POST'])
def upload_safety_alert_pdf():
    data = json_body()
    require_fields(data, ('alertId', 'filename', 'data'), "Alert ID, filename, and data are required")
    alert = safety_alert_service.get_or_404(parse_int(data['alertId'], 'alertId'))
    alert = safety_alert_service.attach_pdf(
        alert,
        filename=optional_text(data, 'filename'),
        data=validate_pdf(data['data'], 'data'),
    )
    return jsonify(success(pdfCount=len(alert.pdf_files or []), id=str(alert.id)))


@api_bp.route('/safety-alerts/<int:alert_id>', methods=['GET'])
def get_safety_alert(alert_id: int):
    return jsonify(serialize_alert(safety_alert_service.get_or_404(alert_id)))


@api_bp.route('/safety-alerts/<int:alert_id>', methods=['PUT'])
def update_safety_alert(alert_id: int):
    alert = safety_alert_service.get_or_404(alert_id)
    alert = safety_alert_service.update(alert, _alert_fields(json_body()))
    return jsonify(serialize_alert(alert))


@api_bp.route('/safety-alerts/<int:alert_id>', methods=['PATCH'])
def set_safety_alert_active(alert_id: int):
    alert = safety_alert_service.get_or_404(alert_id)
    alert = safety_alert_service.set_active(alert, parse_flag(json_body()))
    return jsonify(serialize_alert(alert))


@api_bp.route('/safety-alerts/<int:alert_id>', methods=['DELETE'])
def delete_safety_alert(alert_id: int):
    safety_alert_service.delete(safety_alert_service.get_or_404(alert_id))
    return jsonify(success())
