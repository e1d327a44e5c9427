"""
Rent Schedule Application
Flask app serving billing schedules for leased storage units
"""

from flask import Flask, jsonify
from flask_cors import CORS
import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Import configuration
from rent_application.config import Config, config

# Import blueprints
from rent_application.schedule_backend import schedule_bp


def setup_logging(log_dir: Path, log_to_file: bool = True):
    """Setup application logging"""
    log_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # create_app() may run more than once per process (tests)
    if getattr(root_logger, '_rent_handlers_installed', False):
        return root_logger

    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)

        # File handler with rotation
        log_file = log_dir / 'rent_app.log'
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=Config.LOG_MAX_BYTES,
            backupCount=Config.LOG_BACKUP_COUNT
        )
        file_handler.setFormatter(log_formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.INFO)
    root_logger.addHandler(console_handler)

    root_logger._rent_handlers_installed = True
    return root_logger


def create_app(config_name=None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.environ.get('FLASK_ENV', 'default')
    app.config.from_object(config[config_name])

    # Setup logging
    logger = setup_logging(Path(app.config['LOG_DIR']), app.config.get('LOG_TO_FILE', True))
    logger.info("🚀 Initializing Rent Schedule Application...")

    # Initialize CORS
    cors_origins = app.config.get('CORS_ORIGINS', ['*'])
    if isinstance(cors_origins, str):
        cors_origins = cors_origins.split(',')

    CORS(app,
         resources={r"/api/*": {"origins": cors_origins, "methods": ["GET", "POST", "OPTIONS"], "allow_headers": ["Content-Type"]}})

    # Register blueprints
    app.register_blueprint(schedule_bp)
    logger.info("✅ Blueprints registered")

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    logger.info("✅ Application created successfully")
    return app


if __name__ == '__main__':
    app = create_app()
    logger = logging.getLogger(__name__)

    logger.info("══════════════════════════════════════════════════════════════")
    logger.info("   📊 Rent Schedule Service - Starting Server")
    logger.info("══════════════════════════════════════════════════════════════")
    logger.info(f"📍 API Endpoint: http://{Config.API_HOST}:{Config.API_PORT}/api/")
    logger.info("   - /api/rent_schedule - Billing schedule for one unit")
    logger.info("   - /api/health - Health check")
    if Config.LOG_TO_FILE:
        logger.info(f"📝 Logs: {Config.LOG_DIR}/rent_app.log")
    logger.info("══════════════════════════════════════════════════════════════")

    app.run(
        debug=Config.DEBUG,
        host=Config.API_HOST,
        port=Config.API_PORT
    )
