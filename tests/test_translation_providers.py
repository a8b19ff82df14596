"""
Tests for the HTTP translation providers.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from app.services.translation_providers import (
    ProviderError,
    MyMemoryProvider,
    LibreTranslateProvider,
    build_providers,
)


def _response(payload=None, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    return response


def _mymemory_ok(text):
    return _response({'responseStatus': 200, 'responseData': {'translatedText': text}})


class TestMyMemoryProvider:

    def test_translate_single_request(self):
        session = MagicMock()
        session.request.return_value = _mymemory_ok('Hola, mundo!')
        provider = MyMemoryProvider(session=session, chunk_delay=0)

        assert provider.translate('Hello, world!', 'es', 'en') == 'Hola, mundo!'

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == 'GET'
        assert url == 'https://api.mymemory.translated.net/get'
        assert kwargs['params'] == {'q': 'Hello, world!', 'langpair': 'en|es'}
        assert kwargs['headers']['User-Agent'] == 'NatureSpot-App'
        assert kwargs['timeout'] == 10

    def test_long_text_is_chunked_and_joined_in_order(self):
        session = MagicMock()
        session.request.side_effect = lambda method, url, **kw: _mymemory_ok(f"<{kw['params']['q']}>")
        provider = MyMemoryProvider(session=session, chunk_size=30, chunk_delay=0)

        text = 'The owl sat on a branch. The fox ran past it. A crow watched both.'
        result = provider.translate(text, 'fr', 'en')

        assert session.request.call_count == 3
        assert result == '<The owl sat on a branch.> <The fox ran past it.> <A crow watched both.>'

    def test_delay_between_chunk_requests(self):
        session = MagicMock()
        session.request.return_value = _mymemory_ok('ok')
        provider = MyMemoryProvider(session=session, chunk_size=30, chunk_delay=0.1)

        text = 'The owl sat on a branch. The fox ran past it. A crow watched both.'
        with patch('app.services.translation_providers.time.sleep') as sleep:
            provider.translate(text, 'fr', 'en')

        assert sleep.call_count == 2
        sleep.assert_called_with(0.1)

    def test_no_translation_payload(self):
        session = MagicMock()
        session.request.return_value = _response({
            'responseStatus': 403,
            'responseData': {'translatedText': None},
            'responseDetails': "'XX' IS AN INVALID TARGET LANGUAGE",
        })
        provider = MyMemoryProvider(session=session)

        with pytest.raises(ProviderError) as exc:
            provider.translate('Hello there', 'xx', 'en')

        assert exc.value.reason == 'no_translation'
        assert 'INVALID TARGET LANGUAGE' in exc.value.message

    def test_http_error_status(self):
        session = MagicMock()
        session.request.return_value = _response({}, status_code=503)
        provider = MyMemoryProvider(session=session)

        with pytest.raises(ProviderError) as exc:
            provider.translate('Hello there', 'es', 'en')

        assert exc.value.reason == 'http_status'
        assert exc.value.provider == 'mymemory'

    def test_timeout(self):
        session = MagicMock()
        session.request.side_effect = requests.Timeout('read timed out')
        provider = MyMemoryProvider(session=session)

        with pytest.raises(ProviderError) as exc:
            provider.translate('Hello there', 'es', 'en')

        assert exc.value.reason == 'timeout'

    def test_network_error(self):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError('connection refused')
        provider = MyMemoryProvider(session=session)

        with pytest.raises(ProviderError) as exc:
            provider.translate('Hello there', 'es', 'en')

        assert exc.value.reason == 'network'

    def test_invalid_json(self):
        session = MagicMock()
        response = _response()
        response.json.side_effect = ValueError('Expecting value')
        session.request.return_value = response
        provider = MyMemoryProvider(session=session)

        with pytest.raises(ProviderError) as exc:
            provider.translate('Hello there', 'es', 'en')

        assert exc.value.reason == 'no_translation'

    def test_failing_chunk_fails_whole_translation(self):
        session = MagicMock()
        session.request.side_effect = [_mymemory_ok('one'), _response({}, status_code=429)]
        provider = MyMemoryProvider(session=session, chunk_size=30, chunk_delay=0)

        with pytest.raises(ProviderError):
            provider.translate('The owl sat on a branch. The fox ran past it.', 'es', 'en')

    def test_blank_long_text_is_not_a_translation(self):
        session = MagicMock()
        provider = MyMemoryProvider(session=session, chunk_size=30, chunk_delay=0)

        with pytest.raises(ProviderError) as exc:
            provider.translate(' ' * 45, 'es', 'en')

        assert exc.value.reason == 'no_translation'
        session.request.assert_not_called()


class TestLibreTranslateProvider:

    def test_translate(self):
        session = MagicMock()
        session.request.return_value = _response({'translatedText': 'Bonjour'})
        provider = LibreTranslateProvider(url='https://libre.example.com/', api_key='secret', session=session)

        assert provider.translate('Hello', 'fr', 'en') == 'Bonjour'

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == 'POST'
        assert url == 'https://libre.example.com/translate'
        assert kwargs['json'] == {
            'q': 'Hello', 'source': 'en', 'target': 'fr', 'format': 'text', 'api_key': 'secret'
        }
        assert kwargs['timeout'] == 10

    def test_missing_translation(self):
        session = MagicMock()
        session.request.return_value = _response({'error': 'Visit portal to get an API key'})
        provider = LibreTranslateProvider(session=session)

        with pytest.raises(ProviderError) as exc:
            provider.translate('Hello', 'fr', 'en')

        assert exc.value.reason == 'no_translation'
        assert 'API key' in exc.value.message


class TestBuildProviders:

    def test_order_follows_config(self):
        providers = build_providers({'TRANSLATION_PROVIDERS': 'libretranslate, mymemory'})
        assert [p.name for p in providers] == ['libretranslate', 'mymemory']

    def test_unknown_names_skipped(self):
        providers = build_providers({'TRANSLATION_PROVIDERS': 'mymemory,bogus'})
        assert [p.name for p in providers] == ['mymemory']

    def test_config_values_applied(self):
        providers = build_providers({
            'TRANSLATION_PROVIDERS': 'mymemory',
            'TRANSLATION_TIMEOUT': 3,
            'TRANSLATION_CHUNK_SIZE': 250,
            'TRANSLATION_CHUNK_DELAY': 0,
        })
        provider = providers[0]
        assert provider.timeout == 3
        assert provider.chunk_size == 250
        assert provider.chunk_delay == 0

    def test_default_chain(self):
        providers = build_providers({})
        assert [p.name for p in providers] == ['mymemory', 'libretranslate']
