"""Language constants, single source of truth for the backend.

Must stay in sync with:
  frontend: lib/language-utils.ts
"""

DEFAULT_LANGUAGE = 'en'

# code -> (English name, native name)
SUPPORTED_LANGUAGES = {
    'en': ('English', 'English'),
    'es': ('Spanish', 'Español'),
    'fr': ('French', 'Français'),
    'de': ('German', 'Deutsch'),
    'it': ('Italian', 'Italiano'),
    'pt': ('Portuguese', 'Português'),
    'ru': ('Russian', 'Русский'),
    'ja': ('Japanese', '日本語'),
    'ko': ('Korean', '한국어'),
    'zh': ('Chinese', '中文'),
    'ar': ('Arabic', 'العربية'),
    'hi': ('Hindi', 'हिन्दी'),
}


def normalize_language(code: str) -> str:
    """Normalize a language code.

    - Lowercases and strips whitespace
    - Drops the region part ('en-US' -> 'en', 'pt_BR' -> 'pt')
    """
    key = code.lower().strip().replace('_', '-')
    return key.split('-', 1)[0]


def is_supported_language(code: str) -> bool:
    return normalize_language(code) in SUPPORTED_LANGUAGES


def get_language_name(code: str) -> str:
    """Native name for a language code, 'English' when unknown."""
    names = SUPPORTED_LANGUAGES.get(normalize_language(code))
    return names[1] if names else 'English'
