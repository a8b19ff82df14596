"""
Pytest configuration and fixtures for testing the translation API.
"""

import os
import sys
import pytest
from faker import Faker
from flask_jwt_extended import create_access_token

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app, db
from app.services.short_cache import reset_short_cache
from app.services.translation_providers import ProviderError

fake = Faker()


class FakeProvider:
    """Provider double: returns '<target>:<text>' or raises ProviderError."""

    def __init__(self, name='fake', fail=False, reason='network', prefix=None):
        self.name = name
        self.fail = fail
        self.reason = reason
        self.prefix = prefix
        self.calls = []

    def translate(self, text, target_language, source_language):
        self.calls.append((text, target_language, source_language))
        if self.fail:
            raise ProviderError(self.name, self.reason, 'simulated failure')
        return f'{self.prefix or target_language}:{text}'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture(autouse=True)
def fresh_short_cache():
    """The short-lived cache is process-wide, start every test empty."""
    reset_short_cache()
    yield
    reset_short_cache()


@pytest.fixture
def primary():
    return FakeProvider(name='primary')


@pytest.fixture
def secondary():
    return FakeProvider(name='secondary', prefix='secondary')


@pytest.fixture
def providers(monkeypatch, primary, secondary):
    """Replace the configured provider chain with fakes."""
    chain = [primary, secondary]
    monkeypatch.setattr('app.services.translation.build_providers', lambda config: chain)
    return chain


@pytest.fixture
def test_user_id():
    return fake.random_int(min=1, max=10000)


@pytest.fixture
def auth_headers(app, test_user_id):
    """Get authentication headers for a test user."""
    with app.app_context():
        token = create_access_token(
            identity=str(test_user_id),
            additional_claims={'user_id': test_user_id}
        )
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def sample_text():
    return fake.sentence(nb_words=8)


@pytest.fixture
def make_provider():
    """Factory for extra provider doubles."""
    return FakeProvider
