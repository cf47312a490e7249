from flask import jsonify, current_app
from flask_jwt_extended import jwt_required
from flasgger import swag_from
from sqlalchemy.exc import SQLAlchemyError
from .models import User
from app.errors import json_body
from app.extensions import db
from auth.utils import validate_email, validate_password, current_user_id
from . import auth_bp

@auth_bp.route('/register', methods=['POST'])
@swag_from({
    'tags': ['Authentication'],
    'description': 'Register a new user',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'username': {'type': 'string', 'example': 'johndoe'},
                'email': {'type': 'string', 'example': 'john@example.com'},
                'password': {'type': 'string', 'example': 'securepassword123'}
            },
            'required': ['username', 'email', 'password']
        }
    }],
    'responses': {
        '201': {
            'description': 'User registered successfully',
            'schema': {
                'type': 'object',
                'properties': {
                    'message': {'type': 'string'},
                    'user': {'$ref': '#/definitions/User'},
                    'token': {'type': 'string'}
                }
            }
        },
        '400': {'description': 'Invalid input data'},
        '409': {'description': 'Username or email already exists'}
    }
})
def register():
    """Register a new user."""
    data = json_body()

    # Validate input
    if not all(data.get(k) for k in ['username', 'email', 'password']):
        return jsonify({'error': 'Missing required fields'}), 400

    if not isinstance(data['username'], str):
        return jsonify({'error': 'Username must be a string'}), 400

    ok, error = validate_email(data['email'])
    if not ok:
        return jsonify({'error': error}), 400

    ok, error = validate_password(data['password'])
    if not ok:
        return jsonify({'error': error}), 400

    # Check if user already exists
    if User.query.filter_by(username=data['username']).first():
        return jsonify({'error': 'Username already exists'}), 409

    if User.query.filter_by(email=data['email']).first():
        return jsonify({'error': 'Email already registered'}), 409

    try:
        user = User(
            username=data['username'],
            email=data['email'],
            password=data['password']
        )

        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Registration error: {str(e)}')
        return jsonify({'error': 'Failed to register user'}), 500

    return jsonify({
        'message': 'User registered successfully',
        'user': user.to_dict(),
        'token': user.generate_auth_token()
    }), 201

@auth_bp.route('/login', methods=['POST'])
@swag_from({
    'tags': ['Authentication'],
    'description': 'Login with email and password',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'email': {'type': 'string', 'example': 'john@example.com'},
                'password': {'type': 'string', 'example': 'securepassword123'}
            },
            'required': ['email', 'password']
        }
    }],
    'responses': {
        '200': {
            'description': 'Login successful',
            'schema': {
                'type': 'object',
                'properties': {
                    'message': {'type': 'string'},
                    'user': {'$ref': '#/definitions/User'},
                    'token': {'type': 'string'}
                }
            }
        },
        '400': {'description': 'Invalid input data'},
        '401': {'description': 'Invalid credentials'}
    }
})
def login():
    """Login user and return JWT token."""
    data = json_body()

    if not all(data.get(k) for k in ['email', 'password']):
        return jsonify({'error': 'Missing email or password'}), 400

    if not all(isinstance(data[k], str) for k in ['email', 'password']):
        return jsonify({'error': 'Invalid email or password'}), 400

    user = User.query.filter_by(email=data['email']).first()

    if user and user.check_password(data['password']):
        return jsonify({
            'message': 'Login successful',
            'user': user.to_dict(),
            'token': user.generate_auth_token()
        })

    return jsonify({'error': 'Invalid email or password'}), 401

@auth_bp.route('/me')
@jwt_required()
@swag_from({
    'security': [{'Bearer': []}],
    'tags': ['Authentication'],
    'description': 'Get current user profile',
    'responses': {
        '200': {
            'description': 'User profile',
            'schema': {'$ref': '#/definitions/User'}
        },
        '401': {'description': 'Invalid or missing token'},
        '404': {'description': 'User not found'}
    }
})
def get_current_user():
    """Get current user's profile."""
    user = db.session.get(User, current_user_id())

    if not user:
        return jsonify({'error': 'User not found'}), 404

    return jsonify(user.to_dict())
