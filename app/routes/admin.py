"""Admin routes for translation cache monitoring."""
from functools import wraps
import hmac
import logging

from flask import Blueprint, jsonify, request, current_app

from app.errors import CacheError
from app.services import translation_cache

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)


def check_admin_secret():
    """Check if request has valid admin secret via header only.

    Uses hmac.compare_digest for timing-safe comparison. Returns False when
    ADMIN_SECRET is not configured.
    """
    admin_secret = current_app.config.get('ADMIN_SECRET')
    if not admin_secret:
        return False
    secret = request.headers.get('X-Admin-Secret', '')
    return hmac.compare_digest(secret.encode('utf-8'), admin_secret.encode('utf-8'))


def admin_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        if not check_admin_secret():
            return jsonify({'error': 'Admin access required'}), 403
        return f(*args, **kwargs)
    return decorated


# ============================================================================
# TRANSLATION STATS
# ============================================================================

@admin_bp.route('/translations/stats', methods=['GET'])
@admin_required
def get_translation_stats():
    """Get translation cache stats: per language, total, expired and active."""
    try:
        stats = translation_cache.get_stats()
    except CacheError as e:
        logger.error(f"Translation stats error: {e}")
        return jsonify({'error': 'Failed to fetch stats'}), 500

    return jsonify(stats), 200
