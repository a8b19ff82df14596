"""
Tests for the translation API client.
"""

from unittest.mock import MagicMock

import pytest
import requests

from app.services.short_cache import MemoryCache
from app.services.translation_client import TranslationClient

BASE_URL = 'https://naturespot.example.com'


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    if not response.ok:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} error')
    return response


def _translated(text, target='es', service='mymemory'):
    return {
        'translatedText': f'{target}:{text}',
        'sourceLanguage': 'en',
        'targetLanguage': target,
        'originalText': text,
        'cached': False,
        'service': service,
    }


@pytest.fixture
def session():
    session = MagicMock()
    session.get.return_value = _response({'cached': False}, status_code=404)

    def post(url, json=None, **kwargs):
        if url.endswith('/api/translate'):
            return _response(_translated(json['text'], json['targetLanguage']))
        return _response({'success': True})

    session.post.side_effect = post
    return session


@pytest.fixture
def client_api(session):
    return TranslationClient(BASE_URL, access_token='token-123', cache=MemoryCache(), session=session)


def _posted_urls(session):
    return [call.args[0] for call in session.post.call_args_list]


class TestTranslate:

    def test_default_language_is_skipped(self, client_api, session):
        assert client_api.translate('Hello there', 'en') is None
        session.get.assert_not_called()
        session.post.assert_not_called()

    def test_uses_preferred_language(self, session):
        api = TranslationClient(BASE_URL, preferred_language='de', cache=MemoryCache(), session=session)

        result = api.translate('Hello there')

        assert result.translated_text == 'de:Hello there'

    def test_miss_calls_api_and_stores(self, client_api, session):
        result = client_api.translate('Hello there', 'es')

        assert result.translated_text == 'es:Hello there'
        assert result.cached is False
        assert _posted_urls(session) == [
            f'{BASE_URL}/api/translate',
            f'{BASE_URL}/api/translations/cache',
        ]
        translate_call = session.post.call_args_list[0]
        assert translate_call.kwargs['headers']['Authorization'] == 'Bearer token-123'
        store_call = session.post.call_args_list[1]
        assert store_call.kwargs['json'] == {
            'sourceText': 'Hello there',
            'sourceLanguage': 'auto',
            'targetLanguage': 'es',
            'translatedText': 'es:Hello there',
        }

    def test_second_call_served_from_memory(self, client_api, session):
        client_api.translate('Hello there', 'es')
        result = client_api.translate('Hello there', 'es')

        assert result.cached is True
        assert result.translated_text == 'es:Hello there'
        assert session.post.call_count == 2
        assert session.get.call_count == 1

    def test_database_cache_hit(self, client_api, session):
        payload = _translated('Hello there')
        payload['cached'] = True
        session.get.return_value = _response(payload)

        result = client_api.translate('Hello there', 'es')

        assert result.cached is True
        assert result.translated_text == 'es:Hello there'
        session.post.assert_not_called()
        assert client_api.cache.get('auto-es-Hello there') == payload

    def test_mock_result_not_stored(self, client_api, session):
        session.post.side_effect = lambda url, json=None, **kw: _response(
            _translated(json['text'], service='mock')
        )

        result = client_api.translate('Hello there', 'es')

        assert result.service == 'mock'
        assert _posted_urls(session) == [f'{BASE_URL}/api/translate']
        assert client_api.cache.get('auto-es-Hello there') is None

    def test_recovered_provider_replaces_mock(self, client_api, session):
        session.post.side_effect = lambda url, json=None, **kw: _response(
            _translated(json['text'], service='mock')
        )
        client_api.translate('Hello there', 'es')

        session.post.side_effect = lambda url, json=None, **kw: _response(
            _translated(json['text']) if url.endswith('/api/translate') else {'success': True}
        )
        result = client_api.translate('Hello there', 'es')

        assert result.service == 'mymemory'
        assert result.cached is False

    def test_request_failure_returns_none(self, client_api, session):
        session.post.side_effect = requests.ConnectionError('offline')

        assert client_api.translate('Hello there', 'es') is None

    def test_server_error_returns_none(self, client_api, session):
        session.post.side_effect = lambda url, **kw: _response(
            {'error': 'boom', 'translatedText': None, 'fallback': True}, status_code=500
        )

        assert client_api.translate('Hello there', 'es') is None

    def test_cache_check_failure_falls_through(self, client_api, session):
        session.get.side_effect = requests.Timeout('slow')

        result = client_api.translate('Hello there', 'es')

        assert result.translated_text == 'es:Hello there'


class TestTranslatePost:

    def test_merges_translated_fields(self, client_api):
        post = {'id': 1, 'species_name': 'Barn owl', 'description': 'Hunting at dusk.'}

        result = client_api.translate_post(post, 'fr')

        assert result == {'id': 1, 'species_name': 'fr:Barn owl', 'description': 'fr:Hunting at dusk.'}

    def test_returns_original_on_failure(self, client_api, session):
        session.post.side_effect = requests.ConnectionError('offline')
        post = {'id': 1, 'species_name': 'Barn owl', 'description': 'Hunting at dusk.'}

        assert client_api.translate_post(post, 'fr') == post


class TestCleanup:

    def test_cleanup(self, client_api, session):
        session.delete.return_value = _response({'success': True})

        assert client_api.cleanup_database_cache() is True
        session.delete.assert_called_once()
        assert session.delete.call_args.args[0] == f'{BASE_URL}/api/translations/cache'

    def test_cleanup_failure(self, client_api, session):
        session.delete.side_effect = requests.ConnectionError('offline')

        assert client_api.cleanup_database_cache() is False
