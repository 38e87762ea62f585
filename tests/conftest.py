"""
Pytest configuration and shared fixtures.
"""

import pytest
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set DATABASE_URL before Config class is imported (it validates at class-definition time)
os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')


@pytest.fixture
def app():
    """Create application for testing."""
    from pauta import create_app
    app = create_app('testing')
    app.config['CRON_SECRET'] = None
    return app


@pytest.fixture
def app_context(app):
    """Application context for testing."""
    with app.app_context():
        yield


@pytest.fixture
def db(app, app_context):
    """Database for testing."""
    from pauta import db as _db

    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture
def client(app, db):
    """Flask test client with database tables created."""
    return app.test_client()


@pytest.fixture
def make_proposition(db):
    """Factory for persisted propositions; camara_id and number auto-increment."""
    from pauta.models import Proposition
    from pauta.lib.time import utcnow_naive

    counter = {'n': 0}

    def _make(presentation_date=None, **overrides):
        counter['n'] += 1
        n = counter['n']
        values = {
            'camara_id': 900000 + n,
            'type': 'PL',
            'sigla_tipo': 'PL',
            'number': 1000 + n,
            'year': 2025,
            'title': f'Dispõe sobre o tema {n}',
            'presentation_date': presentation_date or utcnow_naive().date(),
            'status': 'Em tramitação',
        }
        values.update(overrides)
        proposition = Proposition(**values)
        db.session.add(proposition)
        db.session.commit()
        return proposition

    return _make
