from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from app import create_app
from app.config import TestingConfig
from app.extensions import db
from journal.enrichment import Analysis
from journal.models import Journal


class FakeEnrichment:
    """Stand-in for EnrichmentClient that records every call."""

    def __init__(self):
        self.result = Analysis(summary='A calm walk in the park.', mood='calm')
        self.facts = None
        self.calls = []
        self.prompts = []

    def analyze(self, content):
        self.calls.append(content)
        return self.result

    def generate_json(self, prompt):
        self.prompts.append(prompt)
        return self.facts


@pytest.fixture
def enrichment():
    return FakeEnrichment()


@pytest.fixture
def app(enrichment):
    app = create_app(TestingConfig, enrichment_client=enrichment)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, username, email, password='secret123'):
    resp = client.post('/api/auth/register', json={
        'username': username,
        'email': email,
        'password': password
    })
    assert resp.status_code == 201, resp.get_json()
    body = resp.get_json()
    return SimpleNamespace(
        id=body['user']['id'],
        headers={'Authorization': f"Bearer {body['token']}"}
    )


@pytest.fixture
def alice(client):
    return register(client, 'alice', 'alice@example.com')


@pytest.fixture
def bob(client):
    return register(client, 'bob', 'bob@example.com')


@pytest.fixture
def make_journal(app):
    """Insert a journal directly, backdated by ``days_ago``."""

    def _make(user_id, days_ago=0, mood='neutral', title='Entry', content='Some words'):
        created = datetime.utcnow() - timedelta(days=days_ago)
        journal = Journal(
            user_id=user_id,
            title=title,
            content=content,
            mood=mood,
            ai_mood=mood,
            ai_summary='summary',
            tags=[],
            created_at=created,
            updated_at=created
        )
        db.session.add(journal)
        db.session.commit()
        return journal

    return _make
