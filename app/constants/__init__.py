"""Shared constants for the application."""

from app.constants.languages import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    normalize_language,
    is_supported_language,
    get_language_name,
)

__all__ = [
    'DEFAULT_LANGUAGE',
    'SUPPORTED_LANGUAGES',
    'normalize_language',
    'is_supported_language',
    'get_language_name',
]
