from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_restx import Api
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
jwt = JWTManager()

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    app = Flask(__name__)

    # Config
    from app.config import get_config
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    app.config.from_object(get_config(config_name))

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    CORS(app)

    # Create API
    Api(app, version='1.0', title='NatureSpot Translation API', doc='/api/docs')

    # Create tables with error handling
    with app.app_context():
        from app import models  # noqa: F401 - registers tables
        try:
            db.create_all()
        except Exception as e:
            logger.warning(f"Could not create database tables: {e}")

    # Register routes
    from app.routes import register_routes
    register_routes(app)

    from app.errors import register_error_handlers
    register_error_handlers(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    @app.route('/api/health', methods=['GET'])
    def api_health():
        return jsonify({'status': 'ok'}), 200

    if app.config.get('CACHE_SWEEP_ENABLED'):
        from app.services.scheduler import start_cache_sweeper
        start_cache_sweeper(app)

    return app
