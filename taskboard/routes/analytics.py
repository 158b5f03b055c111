"""
Analytics endpoints.

Endpoints:
    GET /api/analytics       - Global account, project and task counts (public)
    GET /api/user-analytics  - Task breakdown for the authenticated account
"""

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from taskboard.analytics import global_stats, user_stats
from taskboard.auth import require_auth
from taskboard.store import get_store

analytics_bp = Blueprint("analytics", __name__)


@analytics_bp.route("/analytics", methods=["GET"])
def get_global_analytics() -> tuple[Response, int]:
    """Return totals across all owners.  Deliberately unauthenticated."""
    return jsonify(global_stats(get_store())), 200


@analytics_bp.route("/user-analytics", methods=["GET"])
@require_auth
def get_user_analytics() -> tuple[Response, int]:
    """Return total, completed, remaining and per-priority task counts."""
    return jsonify(user_stats(get_store(), g.account_id)), 200
