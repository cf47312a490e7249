from flask import Blueprint

# Create blueprint
news_bp = Blueprint('news', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
