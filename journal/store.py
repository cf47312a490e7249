"""Persistence helpers for Journal entities.

Ownership is checked per request by reading the row and comparing
``user_id``; there is no cross-request locking.
"""

from datetime import datetime, time, timedelta

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.errors import Forbidden, NotFound, StoreFailure
from app.extensions import db
from .models import Journal


def get_owned(journal_id, user_id):
    """Load a journal the caller owns.

    Raises NotFound when the id does not exist and Forbidden when it belongs
    to someone else."""
    journal = db.session.get(Journal, journal_id)
    if journal is None:
        raise NotFound('Journal not found')
    if journal.user_id != user_id:
        raise Forbidden('Not authorized')
    return journal


def query_for_owner(user_id):
    return Journal.query.filter_by(user_id=user_id).order_by(Journal.created_at.desc(), Journal.id.desc())


def list_for_owner(user_id):
    """All of a user's journals, newest first."""
    return query_for_owner(user_id).all()


def list_between(user_id, start, end):
    """Journals created on calendar days ``start`` through ``end`` inclusive."""
    lower = datetime.combine(start, time.min)
    upper = datetime.combine(end + timedelta(days=1), time.min)
    return query_for_owner(user_id)\
        .filter(Journal.created_at >= lower, Journal.created_at < upper)\
        .all()


def save(journal):
    try:
        db.session.add(journal)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error saving journal: {str(e)}')
        raise StoreFailure('Failed to save journal entry') from e
    return journal


def remove(journal):
    try:
        db.session.delete(journal)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting journal: {str(e)}')
        raise StoreFailure('Failed to delete journal entry') from e
