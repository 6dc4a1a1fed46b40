"""Admin JSON API blueprint."""

from __future__ import annotations

from flask import Blueprint
from flask_login import login_required

api_bp = Blueprint('api', __name__)


@api_bp.before_request
@login_required
def require_admin_session():
    """Every entity endpoint needs a signed-in admin."""


from opsportal.blueprints.api import (  # noqa: E402,F401
    checkins,
    documents,
    media,
    news,
    operations,
    safety_alerts,
    settings,
    stats,
    users,
)

__all__ = ['api_bp']
