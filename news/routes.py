import requests
from flask import request, jsonify, current_app
from flask_jwt_extended import jwt_required
from flasgger import swag_from
from . import news_bp

PAGE_SIZE = 5
REQUEST_TIMEOUT = 10

PLACEHOLDER_ARTICLE = {
    'title': 'Stay informed about your world',
    'description': 'Add NEWS_API_KEY to .env to see real news',
    'url': '#'
}

ARTICLES_RESPONSE = {
    '200': {
        'description': 'Top headlines',
        'schema': {
            'type': 'object',
            'properties': {
                'articles': {
                    'type': 'array',
                    'items': {
                        'type': 'object',
                        'properties': {
                            'title': {'type': 'string'},
                            'description': {'type': 'string'},
                            'url': {'type': 'string'}
                        }
                    }
                }
            }
        }
    },
    '401': {'description': 'Unauthorized'},
    '502': {'description': 'News provider unavailable'}
}


def fetch_headlines(**params):
    """Query NewsAPI top headlines; raises requests.RequestException on failure."""
    response = requests.get(
        current_app.config['NEWS_API_URL'],
        params={'pageSize': PAGE_SIZE, 'apiKey': current_app.config['NEWS_API_KEY'], **params},
        timeout=REQUEST_TIMEOUT
    )
    response.raise_for_status()
    return response.json().get('articles') or []


def _headlines_response(**params):
    try:
        articles = fetch_headlines(**params)
    except (requests.RequestException, ValueError) as e:
        current_app.logger.error(f'News request failed: {str(e)}')
        return jsonify({'error': 'Failed to fetch news'}), 502
    return jsonify({'articles': articles})


@news_bp.route('/local', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['News'],
    'description': 'Top headlines for a country',
    'security': [{'Bearer': []}],
    'parameters': [{'name': 'country', 'in': 'query', 'type': 'string', 'default': 'us'}],
    'responses': ARTICLES_RESPONSE
})
def local_news():
    if not current_app.config.get('NEWS_API_KEY'):
        return jsonify({'articles': [PLACEHOLDER_ARTICLE]})
    country = request.args.get('country', 'us').lower()
    return _headlines_response(country=country)


@news_bp.route('/trending', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['News'],
    'description': 'Trending general headlines',
    'security': [{'Bearer': []}],
    'responses': ARTICLES_RESPONSE
})
def trending_news():
    if not current_app.config.get('NEWS_API_KEY'):
        return jsonify({'articles': []})
    return _headlines_response(category='general')
