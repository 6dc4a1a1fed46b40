"""Document library and training content."""

from __future__ import annotations

from flask import jsonify

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
from opsportal.models import Document, TrainingContent, TrainingContentType
from opsportal.services.content import document_service, training_content_service
from opsportal.services.serialization import enum_value, iso_date, iso_timestamp, parse_bool
from opsportal.services.uploads import TRAINING_PDF_MAX_BYTES, decoded_size, parse_data_url, validate_document, validate_pdf


def serialize_document(document: Document, include_file: bool = True) -> dict:
    payload = {
        'id': str(document.id),
        'title': document.title,
        'description': document.description,
        'category': document.category,
        'documentType': document.document_type,
        'fileSize': document.file_size,
        'isActive': document.is_active,
        'downloadCount': document.download_count,
        'uploadedBy': document.uploaded_by,
        'createdAt': iso_date(document.created_at),
        'updatedAt': iso_timestamp(document.updated_at),
    }
    if include_file:
        payload['file'] = document.file
    return payload


def _document_fields(data: dict) -> dict:
    require_fields(data, ('title',), "Title is required")
    file = validate_document(data.get('file'), 'file') or ''
    if data.get('fileSize') not in (None, ''):
        file_size = parse_int(data['fileSize'], 'fileSize', minimum=0)
    elif file:
        file_size = decoded_size(parse_data_url(file, 'file')[1])
    else:
        file_size = 0
    return {
        'title': optional_text(data, 'title'),
        'description': optional_text(data, 'description', ''),
        'category': optional_text(data, 'category', 'general'),
        'document_type': optional_text(data, 'documentType', 'pdf'),
        'file': file,
        'file_size': file_size,
        'uploaded_by': optional_text(data, 'uploadedBy', 'Admin'),
    }


@api_bp.route('/documents', methods=['GET'])
def list_documents():
    return jsonify([serialize_document(d) for d in document_service.list_recent()])


@api_bp.route('/documents', methods=['POST'])
def create_document():
    fields = _document_fields(json_body())
    fields.update(is_active=True, download_count=0)
    document = document_service.create(fields)
    return jsonify(serialize_document(document)), 201


@api_bp.route('/documents/<int:document_id>', methods=['GET'])
def get_document(document_id: int):
    return jsonify(serialize_document(document_service.get_or_404(document_id)))


@api_bp.route('/documents/<int:document_id>', methods=['PUT'])
def update_document(document_id: int):
    document = document_service.get_or_404(document_id)
    data = json_body()
    fields = _document_fields(data)
    if not fields['file']:
        # Metadata-only edits keep the stored file
        fields.pop('file')
        fields.pop('file_size')
    fields['is_active'] = parse_bool(data.get('isActive'), default=True)
    document = document_service.update(document, fields)
    return jsonify(serialize_document(document))


@api_bp.route('/documents/<int:document_id>', methods=['PATCH'])
def toggle_document(document_id: int):
    document = document_service.toggle_active(document_service.get_or_404(document_id))
    return jsonify(serialize_document(document, include_file=False))


@api_bp.route('/documents/<int:document_id>/download', methods=['POST'])
def download_document(document_id: int):
    document = document_service.record_download(document_service.get_or_404(document_id))
    return jsonify(serialize_document(document))


@api_bp.route('/documents/<int:document_id>', methods=['DELETE'])
def delete_document(document_id: int):
    document_service.delete(document_service.get_or_404(document_id))
    return jsonify(success())


# ---------------------------------------------------------- training content

CONTENT_TYPE_MESSAGE = "Invalid content type"


def serialize_training(item: TrainingContent) -> dict:
    return {
        'id': str(item.id),
        'contentType': enum_value(item.content_type),
        'title': item.title,
        'description': item.description,
        'linkUrl': item.link_url,
        'pdfData': item.pdf_data,
        'pdfFilename': item.pdf_filename,
        'displayOrder': item.display_order,
        'isActive': item.is_active,
        'createdAt': iso_timestamp(item.created_at),
        'updatedAt': iso_timestamp(item.updated_at),
    }


def _training_fields(data: dict) -> dict:
    require_fields(data, ('contentType', 'title'), "Content type and title are required")
    display_order = data.get('displayOrder')
    return {
        'content_type': parse_enum(TrainingContentType, data['contentType'], CONTENT_TYPE_MESSAGE),
        'title': optional_text(data, 'title'),
        'description': optional_text(data, 'description'),
        'link_url': optional_text(data, 'linkUrl'),
        'pdf_data': validate_pdf(data.get('pdfData'), 'pdfData', max_bytes=TRAINING_PDF_MAX_BYTES),
        'pdf_filename': optional_text(data, 'pdfFilename'),
        'display_order': parse_int(display_order, 'displayOrder') if display_order not in (None, '') else 0,
    }


@api_bp.route('/training-content', methods=['GET'])
def list_training_content():
    return jsonify([serialize_training(i) for i in training_content_service.list_ordered()])


@api_bp.route('/training-content', methods=['POST'])
def create_training_content():
    fields = _training_fields(json_body())
    fields['is_active'] = True
    item = training_content_service.create(fields)
    return jsonify(serialize_training(item)), 201


@api_bp.route('/training-content/<int:item_id>', methods=['GET'])
def get_training_content(item_id: int):
    return jsonify(serialize_training(training_content_service.get_or_404(item_id)))


@api_bp.route('/training-content/<int:item_id>', methods=['PUT'])
def update_training_content(item_id: int):
    item = training_content_service.get_or_404(item_id)
    item = training_content_service.update(item, _training_fields(json_body()))
    return jsonify(serialize_training(item))


@api_bp.route('/training-content/<int:item_id>', methods=['PATCH'])
def set_training_content_active(item_id: int):
    item = training_content_service.get_or_404(item_id)
    item = training_content_service.set_active(item, parse_flag(json_body()))
    return jsonify(serialize_training(item))


@api_bp.route('/training-content/<int:item_id>', methods=['DELETE'])
def delete_training_content(item_id: int):
    training_content_service.delete(training_content_service.get_or_404(item_id))
    return jsonify(success())
