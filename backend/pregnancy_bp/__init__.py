import os
import logging
import click
from flask import Flask, request, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    app = Flask(__name__)

    is_testing = config_name == 'testing'
    is_production = os.getenv('FLASK_ENV') == 'production'

    if is_testing:
        app.config['TESTING'] = True

    # Require SECRET_KEY outside tests
    secret_key = os.getenv('SECRET_KEY') or ('test-secret' if is_testing else None)
    if not secret_key:
        raise RuntimeError('SECRET_KEY environment variable is required')
    app.config['SECRET_KEY'] = secret_key

    if not os.getenv('JWT_SECRET_KEY'):
        raise RuntimeError('JWT_SECRET_KEY environment variable is required')

    # Database configuration
    if is_testing:
        database_url = os.getenv('TEST_DATABASE_URL', 'sqlite:///:memory:')
    else:
        database_url = os.getenv('DATABASE_URL')
    if not database_url:
        raise RuntimeError('DATABASE_URL environment variable is required')

    app.config['SQLALCHEMY_DATABASE_URI'] = database_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    if not database_url.startswith('sqlite'):
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
            'pool_pre_ping': True,
            'pool_recycle': 300,
        }

    # Request size limit (1 MB)
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024

    # Classification rules and time source
    from pregnancy_bp.core.classifier import PREGNANCY, check_ruleset
    from pregnancy_bp.core.clock import SystemClock
    app.config['BP_RULESET'] = check_ruleset(os.getenv('BP_RULESET', PREGNANCY).strip().lower())
    app.config['CLOCK'] = SystemClock()

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # CORS: restrict origins
    allowed_origins = os.getenv('ALLOWED_ORIGINS', '')
    if allowed_origins:
        origins_list = [o.strip() for o in allowed_origins.split(',') if o.strip()]
    elif is_production:
        raise RuntimeError(
            'ALLOWED_ORIGINS environment variable is required in production'
        )
    else:
        # Development: allow localhost variants
        origins_list = [
            'http://localhost:*',
            'http://127.0.0.1:*',
        ]

    CORS(app, resources={
        r"/consumer/*": {"origins": origins_list},
    })

    # Security headers
    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        response.headers['Referrer-Policy'] = 'no-referrer'
        if is_production or request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    # Validate Content-Type on POST/PUT requests
    @app.before_request
    def validate_content_type():
        if request.method in ('POST', 'PUT'):
            content_type = request.content_type or ''
            if 'application/json' not in content_type:
                return jsonify({'error': 'Content-Type must be application/json'}), 415

    from pregnancy_bp.utils.logging_config import setup_logging
    setup_logging(app)

    # Register blueprints
    from pregnancy_bp.routes.tracker import tracker_bp
    app.register_blueprint(tracker_bp, url_prefix='/consumer')

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy'}, 200

    @app.cli.command('issue-dev-token')
    @click.argument('user_id')
    @click.option('--name', default='', help='Display name carried in the token.')
    def issue_dev_token(user_id, name):
        """Mint an identity token for local development."""
        if is_production:
            raise click.ClickException('Refusing to mint tokens in production.')
        from pregnancy_bp.utils.auth import generate_session_token
        print(generate_session_token(user_id, name))

    @app.cli.command('clear-user-data')
    @click.argument('user_id')
    def clear_user_data(user_id):
        """Remove the stored readings and profile for one identity."""
        from pregnancy_bp.storage import ProfileStore, ReadingStore, SqlBlobStore
        blobs = SqlBlobStore(user_id)
        ReadingStore(blobs).clear()
        ProfileStore(blobs).clear()
        print(f'Cleared stored data for {user_id}.')

    logger.info(f"App created with ruleset={app.config['BP_RULESET']}")
    return app


