"""Client for the translation API, used by other services and scripts.

Lookup order: short-lived cache, then GET /translations/cache, then
POST /translate. Fresh results are written back to both caches. Every
method returns None instead of raising so callers can show the original
text.
"""
import logging

import requests

from app.constants import DEFAULT_LANGUAGE, is_supported_language, normalize_language
from app.services.short_cache import get_short_cache, make_key
from app.services.translation import TranslationResult, translate_post_fields

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class TranslationClient:
    def __init__(self, base_url: str, access_token: str = None, preferred_language: str = DEFAULT_LANGUAGE,
                 cache=None, session=None, timeout: float = DEFAULT_TIMEOUT, cache_ttl: int = None):
        self.base_url = base_url.rstrip('/')
        self.access_token = access_token
        # Unsupported preferences fall back to the default language
        self.preferred_language = (
            normalize_language(preferred_language) if is_supported_language(preferred_language) else DEFAULT_LANGUAGE
        )
        self.cache = cache if cache is not None else get_short_cache(ttl=cache_ttl)
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path):
        return f'{self.base_url}/api{path}'

    def _headers(self):
        headers = {'Content-Type': 'application/json'}
        if self.access_token:
            headers['Authorization'] = f'Bearer {self.access_token}'
        return headers

    def _check_database_cache(self, text, target_language, source_language):
        try:
            response = self.session.get(
                self._url('/translations/cache'),
                params={'text': text, 'source': source_language, 'target': target_language},
                timeout=self.timeout,
            )
            if not response.ok:
                return None
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Database cache check error: {e}")
            return None

        return data if data.get('cached') else None

    def _store_database_cache(self, source_text, source_language, target_language, translated_text):
        try:
            self.session.post(
                self._url('/translations/cache'),
                json={
                    'sourceText': source_text,
                    'sourceLanguage': source_language,
                    'targetLanguage': target_language,
                    'translatedText': translated_text,
                },
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Database cache storage error: {e}")

    def translate(self, text: str, target_language: str = None, source_language: str = 'auto'):
        """
        Translate text through the API.

        Returns:
            TranslationResult, or None when no translation is needed or the
            request failed
        """
        target = target_language or self.preferred_language

        # Source text is assumed to be in the default language
        if target == DEFAULT_LANGUAGE and source_language == 'auto':
            return None

        key = make_key(text, target, source_language)
        cached = self.cache.get(key)
        if cached is not None:
            return _result_from_payload(cached, text, target, cached_hit=True)

        db_cached = self._check_database_cache(text, target, source_language)
        if db_cached:
            self.cache.set(key, db_cached)
            return _result_from_payload(db_cached, text, target, cached_hit=True)

        try:
            response = self.session.post(
                self._url('/translate'),
                json={'text': text, 'targetLanguage': target, 'sourceLanguage': source_language},
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Translation service error: {e}")
            return None

        if payload.get('translatedText') is None:
            return None

        # Mock placeholders must never reach either cache
        if payload.get('service') != 'mock':
            self.cache.set(key, payload)
            self._store_database_cache(text, source_language, target, payload['translatedText'])

        return _result_from_payload(payload, text, target)

    def translate_post(self, post: dict, target_language: str = None):
        """Translate a post's fields, returning the original post on failure."""
        translated = translate_post_fields(
            post,
            target_language,
            translate=lambda text, target: self.translate(text, target),
        )
        return translated if translated is not None else post

    def cleanup_database_cache(self) -> bool:
        try:
            response = self.session.delete(self._url('/translations/cache'), timeout=self.timeout)
            return response.ok
        except requests.RequestException as e:
            logger.error(f"Database cache cleanup error: {e}")
            return False


def _result_from_payload(payload, text, target, cached_hit=False):
    return TranslationResult(
        translated_text=payload.get('translatedText'),
        source_language=payload.get('sourceLanguage', DEFAULT_LANGUAGE),
        target_language=payload.get('targetLanguage', target),
        original_text=payload.get('originalText', text),
        cached=cached_hit or bool(payload.get('cached')),
        service=payload.get('service', 'cache' if cached_hit else 'translation-api'),
    )
