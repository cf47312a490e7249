"""Create/update/delete flows for journals, including AI enrichment.

Enrichment runs before the write and its result is merged into the entity in
one step (`Journal.apply_analysis`), so ``mood``, ``ai_mood`` and
``ai_summary`` always describe the stored ``content``.
"""

from app.errors import ValidationFailure
from . import store
from .models import Journal


def _clean_text(value, field):
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationFailure(f'{field} must be a string')
    return value


def normalize_tags(tags):
    """Trim tags, drop blanks, keep order."""
    if tags is None:
        return []
    if not isinstance(tags, (list, tuple)):
        raise ValidationFailure('tags must be a list of strings')
    cleaned = []
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationFailure('tags must be a list of strings')
        tag = tag.strip()
        if tag:
            cleaned.append(tag)
    return cleaned


def create_journal(user_id, data, client):
    title = _clean_text(data.get('title'), 'title').strip()
    content = _clean_text(data.get('content'), 'content')

    if not title:
        raise ValidationFailure('Title is required')
    if not content.strip():
        raise ValidationFailure('Content is required')

    tags = normalize_tags(data.get('tags'))
    analysis = client.analyze(content)

    journal = Journal(user_id=user_id, title=title, content=content, tags=tags)
    journal.apply_analysis(analysis)
    return store.save(journal)


def update_journal(journal_id, user_id, data, client):
    """Partial update; enrichment re-runs only when content actually changes."""
    journal = store.get_owned(journal_id, user_id)

    title = _clean_text(data.get('title'), 'title').strip()
    content = _clean_text(data.get('content'), 'content')
    tags = normalize_tags(data.get('tags'))

    analysis = None
    if content.strip() and content != journal.content:
        analysis = client.analyze(content)

    if title:
        journal.title = title
    if content.strip():
        journal.content = content
    if tags:
        journal.tags = tags
    if analysis is not None:
        journal.apply_analysis(analysis)

    return store.save(journal)


def delete_journal(journal_id, user_id):
    journal = store.get_owned(journal_id, user_id)
    store.remove(journal)
