"""Translation pipeline: cache, then providers in order, then a mock.

translate_text() never raises because of a provider. Provider errors move
on to the next provider, and when every provider fails the caller gets a
placeholder translation that is never written to the cache. Cache
failures are logged: a failed read is a miss, a failed write is ignored.
"""
import logging
from dataclasses import dataclass

from flask import current_app

from app.constants import DEFAULT_LANGUAGE, normalize_language
from app.errors import CacheError
from app.services import translation_cache
from app.services.translation_providers import ProviderError, build_providers

logger = logging.getLogger(__name__)

# Anything shorter is not worth a provider call
MIN_TEXT_LENGTH = 3

SERVICE_NONE = 'none'
SERVICE_CACHE = 'cache'
SERVICE_MOCK = 'mock'

# Language pairs with a known mock translation (development/fallback)
MOCK_TRANSLATIONS = {
    'en': {
        'es': 'This is a mock Spanish translation',
        'fr': 'This is a mock French translation',
        'de': 'This is a mock German translation',
        'it': 'This is a mock Italian translation',
        'pt': 'This is a mock Portuguese translation',
        'ru': 'This is a mock Russian translation',
        'ja': 'This is a mock Japanese translation',
        'ko': 'This is a mock Korean translation',
        'zh': 'This is a mock Chinese translation',
        'ar': 'This is a mock Arabic translation',
        'hi': 'This is a mock Hindi translation',
    },
}

# Post fields translated by translate_post_fields, in order
POST_FIELDS = ('species_name', 'description', 'caption')


@dataclass
class TranslationResult:
    translated_text: str
    source_language: str
    target_language: str
    original_text: str
    cached: bool = False
    service: str = SERVICE_NONE

    @property
    def is_mock(self) -> bool:
        return self.service == SERVICE_MOCK

    def to_dict(self):
        """Response body of POST /translate."""
        return {
            'translatedText': self.translated_text,
            'sourceLanguage': self.source_language,
            'targetLanguage': self.target_language,
            'originalText': self.original_text,
            'cached': self.cached,
            'service': self.service,
        }


def get_source_language() -> str:
    """The fixed source language every translation is made from."""
    return current_app.config.get('TRANSLATION_SOURCE_LANGUAGE', DEFAULT_LANGUAGE)


def get_mock_translation(text: str, target_language: str, source_language: str = DEFAULT_LANGUAGE) -> str:
    """Deterministic placeholder used when every provider failed."""
    if target_language in MOCK_TRANSLATIONS.get(source_language, {}):
        return f'[{target_language.upper()}] {text} (Mock translation)'
    return f'[{target_language.upper()}] {text} (Untranslated)'


def _read_cache(text, source_language, target_language):
    try:
        entry = translation_cache.lookup(text, source_language, target_language)
    except CacheError as e:
        logger.warning(f"Cache lookup failed, treating as miss: {e}")
        return None

    if entry is None:
        return None

    translated = entry.translated_text
    try:
        translation_cache.touch(entry)
    except CacheError as e:
        logger.warning(f"Cache usage update failed: {e}")
    return translated


def _write_cache(text, source_language, target_language, translated_text):
    try:
        translation_cache.upsert(
            text, source_language, target_language, translated_text,
            ttl_days=current_app.config.get('TRANSLATION_CACHE_DAYS', translation_cache.CACHE_TTL_DAYS)
        )
    except CacheError as e:
        logger.warning(f"Cache storage error: {e}")


def _run_providers(providers, text, target_language, source_language):
    """Try each provider once, in order. Returns (translation, provider name)."""
    for provider in providers:
        try:
            logger.debug(f"Attempting translation with {provider.name}...")
            translated = provider.translate(text, target_language, source_language)
        except ProviderError as e:
            logger.warning(f"{e.provider} translation failed ({e.reason}): {e.message}")
            continue
        if not translated:
            logger.warning(f"{provider.name} returned an empty translation")
            continue
        logger.info(f"Translation successful with {provider.name}")
        return translated, provider.name
    return None, None


def translate_text(text: str, target_language: str, source_language: str = None,
                   providers=None) -> TranslationResult:
    """
    Translate text with caching and provider fallback.

    FAST PATHS (no cache or provider access):
    - Text shorter than 3 characters
    - Target language equals the source language

    Args:
        text: Text to translate
        target_language: Target language code ('es', 'pt-BR', ...)
        source_language: Accepted for compatibility; translations are always
            made from the configured source language
        providers: Provider chain in priority order (defaults to config)

    Returns:
        TranslationResult, with service 'mock' when every provider failed
    """
    source = get_source_language()
    target = normalize_language(target_language)

    # Fast path 1: too short to be worth translating
    if len(text) < MIN_TEXT_LENGTH:
        return TranslationResult(text, source, target, text, cached=False, service=SERVICE_NONE)

    # Fast path 2: nothing to do
    if target == source:
        return TranslationResult(text, source, target, text, cached=False, service=SERVICE_NONE)

    cached = _read_cache(text, source, target)
    if cached is not None:
        logger.debug("Using cached translation")
        return TranslationResult(cached, source, target, text, cached=True, service=SERVICE_CACHE)

    if providers is None:
        providers = build_providers(current_app.config)

    translated, service = _run_providers(providers, text, target, source)

    if translated is None:
        logger.info("All translation services failed, using mock translation")
        return TranslationResult(
            get_mock_translation(text, target, source), source, target, text,
            cached=False, service=SERVICE_MOCK
        )

    _write_cache(text, source, target, translated)

    return TranslationResult(translated, source, target, text, cached=False, service=service)


def translate_post_fields(record: dict, target_language: str, translate=None):
    """
    Translate the species name, description and caption of a post.

    Each field is translated on its own; a failing field is left as-is and
    does not stop the others.

    Args:
        record: Post dict
        target_language: Target language code
        translate: Callable (text, target_language) returning an object with
            ``translated_text`` or None. Defaults to translate_text.

    Returns:
        The record with translated fields overwritten, or None when no
        field could be translated
    """
    translate = translate or translate_text
    translations = {}

    for field in POST_FIELDS:
        value = record.get(field)
        if not value:
            continue
        try:
            result = translate(value, target_language)
        except Exception as e:
            logger.warning(f"Post field '{field}' translation failed: {e}")
            continue
        if result is not None and result.translated_text is not None:
            translations[field] = result.translated_text

    if not translations:
        return None
    return {**record, **translations}
