import logging

from flask import Flask
from app.config import config


def create_app(config_class='default', enrichment_client=None):
    app = Flask(__name__)
    if isinstance(config_class, str):
        config_class = config[config_class]
    app.config.from_object(config_class)
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Initialize extensions
    from app.extensions import init_app
    init_app(app)

    from app.errors import register_error_handlers
    register_error_handlers(app)

    # AI enrichment is injected so tests can swap in a double
    if enrichment_client is None:
        from journal.enrichment import build_enrichment_client
        enrichment_client = build_enrichment_client(app.config, logger=app.logger)
    app.extensions['enrichment'] = enrichment_client

    # Register blueprints
    from auth import auth_bp
    from journal import journal_bp
    from challenge import challenge_bp
    from news import news_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(journal_bp, url_prefix='/api/journals')
    app.register_blueprint(challenge_bp, url_prefix='/api/challenges')
    app.register_blueprint(news_bp, url_prefix='/api/news')

    from app.extensions import db
    with app.app_context():
        db.create_all()

    # Simple root endpoint for quick check
    @app.route('/')
    def index():
        return {'message': 'Inkwell Journal API is running', 'docs': '/apidocs/'}

    return app
