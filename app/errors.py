"""Error types shared by the journal, challenge and auth blueprints.

Every error renders as ``{"error": <message>}`` with the status code of its
class, which is the response shape all routes already use.
"""

from flask import jsonify, request


class APIError(Exception):
    """Base class for caller-visible failures."""

    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {'error': self.message}


class ValidationFailure(APIError):
    status_code = 400
    message = 'Invalid input'


class Forbidden(APIError):
    status_code = 403
    message = 'Not authorized'


class NotFound(APIError):
    status_code = 404
    message = 'Not found'


class Conflict(APIError):
    status_code = 409
    message = 'Conflict'


class StoreFailure(APIError):
    status_code = 500
    message = 'Storage operation failed'


def json_body():
    """Decoded JSON request body; anything but an object is a ValidationFailure."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationFailure('Request body must be a JSON object')
    return data


def register_error_handlers(app):
    """Render every APIError as JSON."""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        if error.status_code >= 500:
            app.logger.error('%s: %s', type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code
