from flask import request, jsonify, current_app
from flask_jwt_extended import jwt_required
from flasgger import swag_from
from app.errors import json_body
from auth.utils import current_user_id
from . import services
from . import challenge_bp


@challenge_bp.route('/daily', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Daily Challenge'],
    'description': "Get today's question and the current user's answer, if any",
    'security': [{'Bearer': []}],
    'responses': {
        '200': {
            'description': "Today's challenge",
            'schema': {
                'type': 'object',
                'properties': {
                    'date': {'type': 'string', 'format': 'date'},
                    'question': {'type': 'string'},
                    'question_type': {'type': 'string'},
                    'answered': {'type': 'boolean'},
                    'answer': {'type': 'string'}
                }
            }
        },
        '401': {'description': 'Unauthorized'}
    }
})
def get_daily_challenge():
    return jsonify(services.daily_challenge(current_user_id()))


@challenge_bp.route('/daily', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Daily Challenge'],
    'description': "Answer today's question. Each day can be answered once",
    'security': [{'Bearer': []}],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'answer': {'type': 'string', 'example': 'The moon landing'}
            },
            'required': ['answer']
        }
    }],
    'responses': {
        '201': {
            'description': 'Challenge completed',
            'schema': {
                'type': 'object',
                'properties': {
                    'success': {'type': 'boolean'},
                    'message': {'type': 'string'},
                    'points': {'type': 'integer'},
                    'challenge': {'$ref': '#/definitions/Challenge'}
                }
            }
        },
        '400': {'description': 'Answer missing'},
        '401': {'description': 'Unauthorized'},
        '409': {'description': 'Already answered today'}
    }
})
def submit_daily_challenge():
    data = json_body()
    record = services.submit_answer(current_user_id(), data.get('answer'))
    return jsonify({
        'success': True,
        'message': 'Challenge completed!',
        'points': services.POINTS_PER_CHALLENGE,
        'challenge': record.to_dict()
    }), 201


@challenge_bp.route('/history', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Daily Challenge'],
    'description': 'Past challenge answers, newest first',
    'security': [{'Bearer': []}],
    'parameters': [{'name': 'limit', 'in': 'query', 'type': 'integer', 'default': 30}],
    'responses': {'200': {'description': 'Challenge history'}}
})
def get_challenge_history():
    limit = min(max(request.args.get('limit', 30, type=int), 1), 365)
    records = services.history(current_user_id(), limit=limit)
    return jsonify({'challenges': [record.to_dict() for record in records]})


@challenge_bp.route('/trivia', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Daily Challenge'],
    'description': 'Interesting facts about today',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {
            'description': 'Facts for today',
            'schema': {
                'type': 'object',
                'properties': {
                    'date': {'type': 'string'},
                    'events': {'type': 'array', 'items': {'type': 'string'}}
                }
            }
        }
    }
})
def get_daily_trivia():
    return jsonify(services.daily_facts(current_app.extensions['enrichment']))
