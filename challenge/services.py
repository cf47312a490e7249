from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.errors import Conflict, StoreFailure, ValidationFailure
from app.extensions import db
from .models import ChallengeRecord
from .questions import question_for

POINTS_PER_CHALLENGE = 10

FALLBACK_FACTS = (
    'Every day is a chance to write your story.',
    'Journaling has been practiced for thousands of years.',
    'Today is a perfect day to reflect on your journey.',
)

TRIVIA_PROMPT = (
    "Provide 3 concise interesting historical events, fun facts, or notable "
    "birthdays that happened on {label}. Return valid JSON with keys "
    '"event1", "event2", "event3".'
)


def today():
    return datetime.utcnow().date()


def find_record(user_id, day):
    return ChallengeRecord.query.filter_by(user_id=user_id, date=day).first()


def daily_challenge(user_id, day=None):
    """Today's question plus the caller's answer, if they already gave one."""
    day = day or today()
    record = find_record(user_id, day)
    if record is not None:
        return {
            'date': day.isoformat(),
            'question': record.question,
            'question_type': record.question_type,
            'answered': True,
            'answer': record.answer
        }

    question = question_for(day)
    return {
        'date': day.isoformat(),
        'question': question.text,
        'question_type': question.type,
        'answered': False,
        'answer': None
    }


def submit_answer(user_id, answer, day=None):
    """Record the answer for ``day``; a day can only be answered once."""
    if not isinstance(answer, str) or not answer.strip():
        raise ValidationFailure('Answer is required')

    day = day or today()
    if find_record(user_id, day) is not None:
        raise Conflict('Challenge already completed for today')

    question = question_for(day)
    record = ChallengeRecord(
        user_id=user_id,
        date=day,
        question=question.text,
        question_type=question.type,
        answer=answer.strip()
    )

    try:
        db.session.add(record)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise Conflict('Challenge already completed for today') from e
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error saving challenge answer: {str(e)}')
        raise StoreFailure('Failed to save challenge answer') from e

    return record


def history(user_id, limit=30):
    return ChallengeRecord.query.filter_by(user_id=user_id)\
        .order_by(ChallengeRecord.date.desc())\
        .limit(limit)\
        .all()


def daily_facts(client, day=None):
    """Three facts about the calendar day, from AI or the fixed fallback."""
    day = day or today()
    label = f'{day:%B} {day.day}'

    data = client.generate_json(TRIVIA_PROMPT.format(label=label)) or {}
    events = []
    for key in ('event1', 'event2', 'event3'):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            events.append(value.strip())

    return {'date': label, 'events': events or list(FALLBACK_FACTS)}
