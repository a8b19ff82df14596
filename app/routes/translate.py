"""Translation routes - translate text and post fields for signed-in users."""

import logging

from flask import Blueprint, request, jsonify

from app.constants import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, get_language_name
from app.errors import ValidationError
from app.services.translation import translate_text, translate_post_fields
from app.utils.auth import token_required

logger = logging.getLogger(__name__)

translate_bp = Blueprint('translate', __name__)


@translate_bp.route('', methods=['POST'])
@token_required
def translate(current_user_id):
    """Translate a piece of text.

    Body: {text, targetLanguage, sourceLanguage?}
    sourceLanguage is accepted but translations always use the fixed source.
    """
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    target_language = data.get('targetLanguage')

    if not text or not target_language:
        raise ValidationError('Text and target language are required')
    if not isinstance(text, str) or not isinstance(target_language, str):
        raise ValidationError('Text and target language must be strings')

    try:
        result = translate_text(text, target_language, data.get('sourceLanguage'))
    except Exception:
        logger.exception(f"Translation API error for user {current_user_id}")
        return jsonify({
            'error': 'Translation service temporarily unavailable',
            'translatedText': None,
            'fallback': True,
        }), 500

    logger.debug(f"User {current_user_id} translated {len(text)} chars to {result.target_language} via {result.service}")
    return jsonify(result.to_dict()), 200


@translate_bp.route('/post', methods=['POST'])
@token_required
def translate_post(current_user_id):
    """Translate species name, description and caption of a post.

    Body: {post: {...}, targetLanguage}
    """
    data = request.get_json(silent=True) or {}
    post = data.get('post')
    target_language = data.get('targetLanguage')

    if not isinstance(post, dict) or not target_language:
        raise ValidationError('Post and target language are required')
    if not isinstance(target_language, str):
        raise ValidationError('Target language must be a string')

    translated = translate_post_fields(post, target_language)

    return jsonify({
        'post': translated if translated is not None else post,
        'translated': translated is not None,
    }), 200


@translate_bp.route('/languages', methods=['GET'])
def list_languages():
    """List supported target languages with their native names."""
    return jsonify({
        'languages': [
            {'code': code, 'name': name, 'nativeName': get_language_name(code)}
            for code, (name, _) in SUPPORTED_LANGUAGES.items()
        ],
        'default': DEFAULT_LANGUAGE,
    }), 200
