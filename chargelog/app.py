"""
ChargeLog - Flask Application

Personal EV charging and parking expense log: record entry, dashboard
metrics and spreadsheet import/export over a JSON API.
"""

import logging

from flask import Flask, jsonify

from chargelog import database
from chargelog.config import Config
from chargelog.exceptions import ConfigurationError
from chargelog.routes import register_blueprints, register_error_handlers

logger = logging.getLogger(__name__)


def configure_logging(level_name: str):
    """Configure root logging with the application format."""
    level = getattr(logging, str(level_name).upper(), None)
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {level_name}", config_key='LOG_LEVEL')

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(config_overrides=None):
    """
    Create and configure the Flask application.

    Args:
        config_overrides: Optional dict merged over Config, e.g.
            {'DATABASE_URL': 'sqlite:///:memory:', 'TESTING': True}

    Returns:
        Flask app with the record store, blueprints and error handlers
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    app.config['MAX_CONTENT_LENGTH'] = app.config['MAX_UPLOAD_BYTES']

    configure_logging(app.config['LOG_LEVEL'])

    database.init_app(app)
    register_blueprints(app)
    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    logger.info(f"ChargeLog app created (env={app.config['FLASK_ENV']})")
    return app


if __name__ == '__main__':
    application = create_app()
    application.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.DEBUG)
