from datetime import date, timedelta

import pytest

from app.errors import Conflict, ValidationFailure
from challenge import services
from challenge.models import ChallengeRecord
from challenge.questions import QUESTIONS, question_for
from journal.enrichment import EnrichmentClient


# ==================== Question selection ====================


def test_question_is_stable_for_a_day():
    day = date(2026, 10, 18)
    assert question_for(day) == question_for(day)
    assert question_for(day) in QUESTIONS


def test_questions_vary_across_days():
    start = date(2026, 1, 1)
    picked = {question_for(start + timedelta(days=i)) for i in range(60)}
    assert len(picked) > 1


# ==================== Daily challenge routes ====================


def test_get_daily_unanswered(client, alice):
    body = client.get('/api/challenges/daily', headers=alice.headers).get_json()

    expected = question_for(services.today())
    assert body['date'] == services.today().isoformat()
    assert body['question'] == expected.text
    assert body['question_type'] == expected.type
    assert body['answered'] is False
    assert body['answer'] is None


def test_submit_answer_then_read_only(client, alice):
    resp = client.post('/api/challenges/daily', json={'answer': '  The moon landing  '}, headers=alice.headers)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body['success'] is True
    assert body['points'] == services.POINTS_PER_CHALLENGE
    assert body['challenge']['answer'] == 'The moon landing'

    daily = client.get('/api/challenges/daily', headers=alice.headers).get_json()
    assert daily['answered'] is True
    assert daily['answer'] == 'The moon landing'

    again = client.post('/api/challenges/daily', json={'answer': 'Changed my mind'}, headers=alice.headers)
    assert again.status_code == 409
    assert ChallengeRecord.query.count() == 1


def test_submit_requires_answer(client, alice):
    resp = client.post('/api/challenges/daily', json={'answer': '   '}, headers=alice.headers)
    assert resp.status_code == 400


@pytest.mark.parametrize('body', [['a'], 3, 'answer'])
def test_submit_rejects_non_object_body(client, alice, body):
    resp = client.post('/api/challenges/daily', json=body, headers=alice.headers)

    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Request body must be a JSON object'}
    assert ChallengeRecord.query.count() == 0


def test_answers_are_per_user(client, alice, bob):
    assert client.post('/api/challenges/daily', json={'answer': 'a'}, headers=alice.headers).status_code == 201
    assert client.post('/api/challenges/daily', json={'answer': 'b'}, headers=bob.headers).status_code == 201

    bob_daily = client.get('/api/challenges/daily', headers=bob.headers).get_json()
    assert bob_daily['answer'] == 'b'


def test_history_newest_first(app, client, alice):
    today = services.today()
    services.submit_answer(alice.id, 'older', day=today - timedelta(days=2))
    services.submit_answer(alice.id, 'newer', day=today - timedelta(days=1))

    body = client.get('/api/challenges/history', headers=alice.headers).get_json()
    assert [c['answer'] for c in body['challenges']] == ['newer', 'older']


# ==================== Service rules ====================


def test_new_day_gets_new_record(app, alice):
    today = services.today()
    services.submit_answer(alice.id, 'yesterday', day=today - timedelta(days=1))
    record = services.submit_answer(alice.id, 'today', day=today)

    assert record.date == today
    assert record.question == question_for(today).text
    assert ChallengeRecord.query.filter_by(user_id=alice.id).count() == 2


def test_second_answer_same_day_conflicts(app, alice):
    day = date(2026, 3, 14)
    services.submit_answer(alice.id, 'first', day=day)

    with pytest.raises(Conflict):
        services.submit_answer(alice.id, 'second', day=day)


def test_non_string_answer_rejected(app, alice):
    with pytest.raises(ValidationFailure):
        services.submit_answer(alice.id, 42)


# ==================== Trivia ====================


def test_trivia_falls_back_without_ai(client, alice, enrichment):
    body = client.get('/api/challenges/trivia', headers=alice.headers).get_json()

    assert body['events'] == list(services.FALLBACK_FACTS)
    assert body['date'] == f'{services.today():%B} {services.today().day}'
    assert len(enrichment.prompts) == 1


def test_trivia_uses_ai_events(client, alice, enrichment):
    enrichment.facts = {'event1': 'A treaty was signed.', 'event2': '  ', 'event3': 'A poet was born.'}

    body = client.get('/api/challenges/trivia', headers=alice.headers).get_json()
    assert body['events'] == ['A treaty was signed.', 'A poet was born.']


def test_daily_facts_prompt_names_the_day():
    class Provider:
        def __init__(self):
            self.prompts = []

        def generate(self, prompt):
            self.prompts.append(prompt)
            raise RuntimeError('service unavailable')

    provider = Provider()
    result = services.daily_facts(EnrichmentClient(provider=provider), day=date(2026, 7, 4))

    assert result == {'date': 'July 4', 'events': list(services.FALLBACK_FACTS)}
    assert 'July 4' in provider.prompts[0]
