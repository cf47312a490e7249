from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flasgger import Swagger

# Initialize extensions
db = SQLAlchemy()
jwt = JWTManager()

# Configure Swagger
swagger = Swagger(
    template={
        "swagger": "2.0",
        "info": {
            "title": "Inkwell API",
            "description": "API for the Inkwell AI journal",
            "version": "1.0.0"
        },
        "securityDefinitions": {
            "Bearer": {
                "type": "apiKey",
                "name": "Authorization",
                "in": "header",
                "description": "JWT Authorization header using the Bearer scheme. Example: \"Authorization: Bearer {token}\""
            }
        },
        "security": [{"Bearer": []}],
        "schemes": ["http", "https"],
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "definitions": {
            "User": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "username": {"type": "string"},
                    "email": {"type": "string", "format": "email"},
                    "created_at": {"type": "string", "format": "date-time"}
                }
            },
            "Journal": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "user_id": {"type": "integer", "format": "int64"},
                    "title": {"type": "string"},
                    "content": {"type": "string"},
                    "mood": {"type": "string"},
                    "ai_summary": {"type": "string"},
                    "ai_mood": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "created_at": {"type": "string", "format": "date-time"},
                    "updated_at": {"type": "string", "format": "date-time"}
                }
            },
            "Challenge": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "date": {"type": "string", "format": "date"},
                    "question": {"type": "string"},
                    "question_type": {"type": "string"},
                    "answer": {"type": "string"},
                    "completed": {"type": "boolean"}
                }
            },
            "Error": {
                "type": "object",
                "properties": {
                    "error": {"type": "string", "description": "Error message"}
                }
            }
        }
    },
    config={
        "headers": [],
        "specs": [
            {
                "endpoint": 'apispec',
                "route": '/apispec.json',
                "rule_filter": lambda rule: True,
                "model_filter": lambda tag: True,
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/apidocs/"
    }
)

def init_app(app):
    """Initialize all extensions with the app."""
    db.init_app(app)
    jwt.init_app(app)
    swagger.init_app(app)
