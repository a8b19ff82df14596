"""Configuration classes selected by FLASK_ENV."""
import os


def _env_bool(name, default='false'):
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


def _database_url(default):
    url = os.getenv('DATABASE_URL', default)
    # Handle Render's postgres:// vs postgresql:// issue
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    SQLALCHEMY_DATABASE_URI = _database_url('sqlite:///naturespot.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    JWT_ACCESS_TOKEN_EXPIRES = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 2592000))

    # Admin secret for stats. No default, the endpoint is disabled without it
    ADMIN_SECRET = os.getenv('ADMIN_SECRET')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    REDIS_URL = os.getenv('REDIS_URL')

    # Translation pipeline
    TRANSLATION_PROVIDERS = os.getenv('TRANSLATION_PROVIDERS', 'mymemory,libretranslate')
    TRANSLATION_SOURCE_LANGUAGE = os.getenv('TRANSLATION_SOURCE_LANGUAGE', 'en')
    TRANSLATION_TIMEOUT = float(os.getenv('TRANSLATION_TIMEOUT', 10))
    TRANSLATION_CHUNK_SIZE = int(os.getenv('TRANSLATION_CHUNK_SIZE', 400))
    TRANSLATION_CHUNK_DELAY = float(os.getenv('TRANSLATION_CHUNK_DELAY', 0.1))
    TRANSLATION_CACHE_DAYS = int(os.getenv('TRANSLATION_CACHE_DAYS', 30))
    SHORT_CACHE_TTL = int(os.getenv('SHORT_CACHE_TTL', 24 * 60 * 60))

    MYMEMORY_URL = os.getenv('MYMEMORY_URL', 'https://api.mymemory.translated.net/get')
    MYMEMORY_EMAIL = os.getenv('MYMEMORY_EMAIL', '')
    LIBRETRANSLATE_URL = os.getenv('LIBRETRANSLATE_URL', 'https://libretranslate.com')
    LIBRETRANSLATE_API_KEY = os.getenv('LIBRETRANSLATE_API_KEY', '')

    # Background sweeps of the short-lived and persistent caches
    CACHE_SWEEP_ENABLED = _env_bool('CACHE_SWEEP_ENABLED', 'true')
    SHORT_CACHE_SWEEP_INTERVAL = 60 * 60
    PERSISTENT_CACHE_SWEEP_INTERVAL = 24 * 60 * 60


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'test-secret-key-for-testing'
    ADMIN_SECRET = 'test-admin-secret'
    REDIS_URL = None
    TRANSLATION_CHUNK_DELAY = 0
    CACHE_SWEEP_ENABLED = False


CONFIGS = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}


def get_config(config_name):
    return CONFIGS.get(config_name, DevelopmentConfig)
