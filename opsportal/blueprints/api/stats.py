"""Dashboard statistics."""

from flask import jsonify

from opsportal.blueprints.api import api_bp
from opsportal.services.stats import dashboard


@api_bp.route('/stats', methods=['GET'])
def get_stats():
    return jsonify(dashboard())
