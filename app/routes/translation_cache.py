"""Translation cache routes - lookup, store and clean up cached translations."""

import logging

from flask import Blueprint, request, jsonify, current_app

from app.errors import CacheError, ValidationError
from app.services import translation_cache

logger = logging.getLogger(__name__)

translation_cache_bp = Blueprint('translation_cache', __name__)


@translation_cache_bp.route('', methods=['GET'])
def get_cached_translation():
    """Look up a cached translation.

    Query params:
    - text: Source text
    - source: Source language (default: auto)
    - target: Target language

    A hit counts as a use of the entry.
    """
    source_text = request.args.get('text')
    source_language = request.args.get('source') or 'auto'
    target_language = request.args.get('target')

    if not source_text or not target_language:
        raise ValidationError('Missing required parameters')

    try:
        cached = translation_cache.lookup(source_text, source_language, target_language)
        if cached is None:
            return jsonify({'cached': False}), 404
        translation_cache.touch(cached)
    except CacheError as e:
        logger.error(f"Cache lookup error: {e}")
        return jsonify({'error': 'Cache lookup failed'}), 500

    payload = cached.to_dict()
    payload['cached'] = True
    return jsonify(payload), 200


@translation_cache_bp.route('', methods=['POST'])
def store_translation():
    """Store a translation in the cache (upsert on text/source/target)."""
    data = request.get_json(silent=True) or {}
    source_text = data.get('sourceText')
    source_language = data.get('sourceLanguage') or 'auto'
    target_language = data.get('targetLanguage')
    translated_text = data.get('translatedText')

    if not source_text or not target_language or not translated_text:
        raise ValidationError('Missing required fields')

    try:
        entry = translation_cache.upsert(
            source_text, source_language, target_language, translated_text,
            ttl_days=current_app.config.get('TRANSLATION_CACHE_DAYS', translation_cache.CACHE_TTL_DAYS)
        )
    except CacheError as e:
        logger.error(f"Cache storage error: {e}")
        return jsonify({'error': 'Failed to cache translation'}), 500

    return jsonify({'success': True, 'cached': entry.to_dict()}), 200


@translation_cache_bp.route('', methods=['DELETE'])
def cleanup_expired():
    """Delete all expired translations."""
    try:
        deleted = translation_cache.sweep_expired()
    except CacheError as e:
        logger.error(f"Cache cleanup error: {e}")
        return jsonify({'error': 'Cleanup failed'}), 500

    return jsonify({
        'success': True,
        'message': 'Expired translations cleaned up',
        'deleted': deleted,
    }), 200
