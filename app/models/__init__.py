"""Database models for the translation backend."""

from .translation_cache import TranslationCache

__all__ = ['TranslationCache']
