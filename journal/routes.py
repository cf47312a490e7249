from datetime import date, datetime
from flask import request, jsonify, current_app
from flask_jwt_extended import jwt_required
from flasgger import swag_from
from app.errors import ValidationFailure, json_body
from auth.utils import current_user_id
from . import analytics, services, store
from . import journal_bp

JOURNAL_ID_PARAM = {
    'name': 'journal_id',
    'in': 'path',
    'type': 'integer',
    'required': True,
    'description': 'ID of the journal entry'
}

JOURNAL_BODY_PARAM = {
    'name': 'body',
    'in': 'body',
    'required': True,
    'schema': {
        'type': 'object',
        'properties': {
            'title': {'type': 'string', 'example': 'A good day'},
            'content': {'type': 'string', 'example': 'Went for a long walk and called my sister.'},
            'tags': {'type': 'array', 'items': {'type': 'string'}, 'example': ['family', 'outdoors']}
        }
    }
}


def _enrichment():
    return current_app.extensions['enrichment']


def _parse_day(value, name):
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationFailure(f'{name} must be a date in YYYY-MM-DD format')


@journal_bp.route('', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Create a journal entry; the summary and mood are filled in by AI analysis',
    'security': [{'Bearer': []}],
    'parameters': [JOURNAL_BODY_PARAM],
    'responses': {
        '201': {
            'description': 'Journal entry created successfully',
            'schema': {'$ref': '#/definitions/Journal'}
        },
        '400': {'description': 'Title or content missing'},
        '401': {'description': 'Unauthorized'}
    }
})
def create_journal():
    """Create a new journal entry."""
    data = json_body()
    journal = services.create_journal(current_user_id(), data, _enrichment())
    return jsonify(journal.to_dict()), 201


@journal_bp.route('', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Get journal entries for the current user, newest first',
    'security': [{'Bearer': []}],
    'parameters': [
        {'name': 'page', 'in': 'query', 'type': 'integer', 'default': 1},
        {'name': 'per_page', 'in': 'query', 'type': 'integer', 'default': 20}
    ],
    'responses': {
        '200': {
            'description': 'List of journal entries',
            'schema': {
                'type': 'object',
                'properties': {
                    'journals': {
                        'type': 'array',
                        'items': {'$ref': '#/definitions/Journal'}
                    },
                    'total': {'type': 'integer'},
                    'pages': {'type': 'integer'},
                    'current_page': {'type': 'integer'}
                }
            }
        },
        '401': {'description': 'Unauthorized'}
    }
})
def get_journals():
    """Get all journal entries for the current user."""
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', 20, type=int)

    journals = store.query_for_owner(current_user_id())\
        .paginate(page=page, per_page=per_page, error_out=False)

    return jsonify({
        'journals': [journal.to_dict() for journal in journals.items],
        'total': journals.total,
        'pages': journals.pages,
        'current_page': journals.page
    })


@journal_bp.route('/range', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Get journal entries created between two calendar days (inclusive)',
    'security': [{'Bearer': []}],
    'parameters': [
        {'name': 'start', 'in': 'query', 'type': 'string', 'format': 'date', 'required': True},
        {'name': 'end', 'in': 'query', 'type': 'string', 'format': 'date', 'required': True}
    ],
    'responses': {
        '200': {'description': 'Journal entries in range'},
        '400': {'description': 'Invalid dates'},
        '401': {'description': 'Unauthorized'}
    }
})
def get_journals_in_range():
    start = _parse_day(request.args.get('start'), 'start')
    end = _parse_day(request.args.get('end'), 'end')
    if end < start:
        raise ValidationFailure('end must not be before start')

    journals = store.list_between(current_user_id(), start, end)
    return jsonify({'journals': [journal.to_dict() for journal in journals]})


@journal_bp.route('/<int:journal_id>', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Get a specific journal entry',
    'security': [{'Bearer': []}],
    'parameters': [JOURNAL_ID_PARAM],
    'responses': {
        '200': {
            'description': 'Journal entry details',
            'schema': {'$ref': '#/definitions/Journal'}
        },
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Journal belongs to another user'},
        '404': {'description': 'Journal not found'}
    }
})
def get_journal(journal_id):
    """Get a specific journal entry by ID."""
    journal = store.get_owned(journal_id, current_user_id())
    return jsonify(journal.to_dict())


@journal_bp.route('/<int:journal_id>', methods=['PUT'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Update a journal entry. Omitted or empty fields keep their value; '
                   'AI analysis re-runs only when the content changes',
    'security': [{'Bearer': []}],
    'parameters': [JOURNAL_ID_PARAM, JOURNAL_BODY_PARAM],
    'responses': {
        '200': {
            'description': 'Journal entry updated',
            'schema': {'$ref': '#/definitions/Journal'}
        },
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Journal belongs to another user'},
        '404': {'description': 'Journal not found'}
    }
})
def update_journal(journal_id):
    """Update a journal entry."""
    data = json_body()
    journal = services.update_journal(journal_id, current_user_id(), data, _enrichment())
    return jsonify(journal.to_dict())


@journal_bp.route('/<int:journal_id>', methods=['DELETE'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Delete a journal entry',
    'security': [{'Bearer': []}],
    'parameters': [JOURNAL_ID_PARAM],
    'responses': {
        '200': {'description': 'Journal entry deleted successfully'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Journal belongs to another user'},
        '404': {'description': 'Journal not found'}
    }
})
def delete_journal(journal_id):
    """Delete a journal entry."""
    services.delete_journal(journal_id, current_user_id())
    return jsonify({'message': 'Journal entry deleted successfully'})


# ----------------------------------------------------------------------------------
# Stats
# ----------------------------------------------------------------------------------

@journal_bp.route('/stats/weekly', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Stats'],
    'description': 'Entries per day over the last 7 days',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {
            'description': 'Sparse per-date counts and a zero-filled 7 day series',
            'schema': {
                'type': 'object',
                'properties': {
                    'counts': {'type': 'object', 'additionalProperties': {'type': 'integer'}},
                    'series': {
                        'type': 'array',
                        'items': {
                            'type': 'object',
                            'properties': {
                                'date': {'type': 'string', 'format': 'date'},
                                'day': {'type': 'string'},
                                'entries': {'type': 'integer'}
                            }
                        }
                    }
                }
            }
        }
    }
})
def weekly_stats():
    now = datetime.utcnow()
    journals = store.list_between(current_user_id(), (now - analytics.WEEK).date(), now.date())
    return jsonify({
        'counts': analytics.weekly_activity(journals, now=now),
        'series': analytics.weekly_series(journals, now=now)
    })


@journal_bp.route('/stats/moods', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Stats'],
    'description': 'Number of entries per mood across all entries',
    'security': [{'Bearer': []}],
    'responses': {'200': {'description': 'Mapping of mood to count'}}
})
def mood_stats():
    return jsonify(analytics.mood_distribution(store.list_for_owner(current_user_id())))


@journal_bp.route('/stats/streak', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Stats'],
    'description': 'Current writing streak in days',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {
            'description': 'Streak length',
            'schema': {'type': 'object', 'properties': {'streak': {'type': 'integer'}}}
        }
    }
})
def streak_stats():
    return jsonify({'streak': analytics.writing_streak(store.list_for_owner(current_user_id()))})


@journal_bp.route('/stats/achievements', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Stats'],
    'description': 'Achievements unlocked by entry count, streak and moods',
    'security': [{'Bearer': []}],
    'responses': {'200': {'description': 'Unlocked achievements'}}
})
def achievement_stats():
    journals = store.list_for_owner(current_user_id())
    streak = analytics.writing_streak(journals)
    return jsonify({
        'achievements': analytics.achievements(journals, streak=streak),
        'streak': streak,
        'total': len(journals)
    })


@journal_bp.route('/stats/summary', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Stats'],
    'description': 'Dashboard summary: totals, streak, moods and achievements',
    'security': [{'Bearer': []}],
    'responses': {'200': {'description': 'Summary statistics'}}
})
def summary_stats():
    return jsonify(analytics.summary(store.list_for_owner(current_user_id())))
