"""Error types shared by the translation services and routes.

Service code raises these; routes and the handlers registered here turn
them into ``{"error": message}`` JSON envelopes.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class TranslationAppError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message}


class AuthError(TranslationAppError):
    """Missing or invalid bearer token."""
    status_code = 401
    default_message = 'Authorization token required'


class ValidationError(TranslationAppError):
    """Missing or malformed request fields."""
    status_code = 400
    default_message = 'Invalid request'


class CacheError(TranslationAppError):
    """Translation cache store unreachable or write failed."""
    default_message = 'Translation cache unavailable'


class InternalError(TranslationAppError):
    default_message = 'Internal server error'


def register_error_handlers(app):
    """Attach JSON error handlers to the Flask app."""

    @app.errorhandler(TranslationAppError)
    def handle_app_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        # Never leak stack traces to the caller
        logger.exception(f"Unhandled error: {error}")
        return jsonify(InternalError().to_dict()), 500
