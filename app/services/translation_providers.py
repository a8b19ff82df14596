"""Translation providers behind a common interface.

Each provider wraps one HTTP translation API. Failures of any kind
(network error, timeout, non-OK status, response without a translation)
raise ProviderError so the orchestrator can move on to the next provider.
"""
import logging
import time

import requests

from app.services.chunking import chunk_text, DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
DEFAULT_CHUNK_DELAY = 0.1
USER_AGENT = 'NatureSpot-App'


class ProviderError(Exception):
    """A translation provider failed to return a translation.

    ``reason`` is one of 'network', 'timeout', 'http_status' or
    'no_translation'.
    """

    def __init__(self, provider: str, reason: str, message: str):
        super().__init__(f'{provider} {reason}: {message}')
        self.provider = provider
        self.reason = reason
        self.message = message


class TranslationProvider:
    """Base class for HTTP translation providers."""
    name = 'provider'

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session=None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def translate(self, text: str, target_language: str, source_language: str) -> str:
        raise NotImplementedError

    def _request(self, method: str, url: str, **kwargs):
        """Send a request and return the decoded JSON body."""
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise ProviderError(self.name, 'timeout', str(e)) from e
        except requests.RequestException as e:
            raise ProviderError(self.name, 'network', str(e)) from e

        if not response.ok:
            raise ProviderError(self.name, 'http_status', f'HTTP {response.status_code}')

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(self.name, 'no_translation', f'invalid JSON body: {e}') from e

        if not isinstance(data, dict):
            raise ProviderError(self.name, 'no_translation', 'unexpected response format')
        return data


class ChunkedProvider(TranslationProvider):
    """Provider with a request length limit.

    Text is chunked before sending, chunks are translated one by one with a
    short pause between calls and joined back with single spaces.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE,
                 chunk_delay: float = DEFAULT_CHUNK_DELAY, **kwargs):
        super().__init__(**kwargs)
        self.chunk_size = chunk_size
        self.chunk_delay = chunk_delay

    def translate(self, text: str, target_language: str, source_language: str) -> str:
        chunks = chunk_text(text, self.chunk_size)
        if not chunks:
            raise ProviderError(self.name, 'no_translation', 'nothing to translate')
        if len(chunks) == 1:
            return self.translate_chunk(chunks[0], target_language, source_language)

        logger.debug(f'{self.name}: translating {len(chunks)} chunks')
        translated = []
        for index, chunk in enumerate(chunks):
            if index and self.chunk_delay:
                time.sleep(self.chunk_delay)
            translated.append(self.translate_chunk(chunk, target_language, source_language))
        return ' '.join(translated)

    def translate_chunk(self, text: str, target_language: str, source_language: str) -> str:
        raise NotImplementedError


class MyMemoryProvider(ChunkedProvider):
    """MyMemory API (GET, 500 char limit per query)."""
    name = 'mymemory'

    def __init__(self, url: str = 'https://api.mymemory.translated.net/get',
                 email: str = '', **kwargs):
        super().__init__(**kwargs)
        self.url = url
        self.email = email

    def translate_chunk(self, text, target_language, source_language):
        params = {
            'q': text,
            'langpair': f'{source_language}|{target_language}',
        }
        if self.email:
            params['de'] = self.email

        data = self._request('GET', self.url, params=params, headers={'User-Agent': USER_AGENT})

        translated = (data.get('responseData') or {}).get('translatedText')
        if data.get('responseStatus') == 200 and translated:
            return translated

        raise ProviderError(self.name, 'no_translation', str(data.get('responseDetails') or 'Unknown error'))


class LibreTranslateProvider(ChunkedProvider):
    """LibreTranslate API (POST JSON)."""
    name = 'libretranslate'

    def __init__(self, url: str = 'https://libretranslate.com', api_key: str = '', **kwargs):
        kwargs.setdefault('chunk_delay', 0)
        super().__init__(**kwargs)
        self.url = url.rstrip('/') + '/translate'
        self.api_key = api_key

    def translate_chunk(self, text, target_language, source_language):
        payload = {
            'q': text,
            'source': source_language,
            'target': target_language,
            'format': 'text',
        }
        if self.api_key:
            payload['api_key'] = self.api_key

        data = self._request('POST', self.url, json=payload)

        translated = data.get('translatedText')
        if translated:
            return translated

        raise ProviderError(self.name, 'no_translation', str(data.get('error') or 'LibreTranslate translation failed'))


def build_providers(config) -> list:
    """Build the provider chain, in priority order, from app config."""
    names = config.get('TRANSLATION_PROVIDERS', 'mymemory,libretranslate')
    if isinstance(names, str):
        names = [n.strip() for n in names.split(',') if n.strip()]

    common = {
        'timeout': config.get('TRANSLATION_TIMEOUT', DEFAULT_TIMEOUT),
        'chunk_size': config.get('TRANSLATION_CHUNK_SIZE', DEFAULT_CHUNK_SIZE),
    }

    providers = []
    for name in names:
        if name == MyMemoryProvider.name:
            providers.append(MyMemoryProvider(
                url=config.get('MYMEMORY_URL', 'https://api.mymemory.translated.net/get'),
                email=config.get('MYMEMORY_EMAIL', ''),
                chunk_delay=config.get('TRANSLATION_CHUNK_DELAY', DEFAULT_CHUNK_DELAY),
                **common
            ))
        elif name == LibreTranslateProvider.name:
            providers.append(LibreTranslateProvider(
                url=config.get('LIBRETRANSLATE_URL', 'https://libretranslate.com'),
                api_key=config.get('LIBRETRANSLATE_API_KEY', ''),
                **common
            ))
        else:
            logger.warning(f'Unknown translation provider "{name}", skipping')
    return providers
