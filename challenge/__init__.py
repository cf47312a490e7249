from flask import Blueprint

# Create blueprint
challenge_bp = Blueprint('challenge', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
