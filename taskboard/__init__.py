"""
Flask application factory module.

Creates and configures the Taskboard API using the factory pattern, so that
each configuration (development, testing, production) and each test run gets
its own application with its own in-memory store.

Key Concepts Demonstrated:
- Application factory pattern (create_app)
- Flask extension initialisation (SQLAlchemy)
- Per-application store injected through ``app.extensions``
- Blueprint-based route registration
"""

from __future__ import annotations

import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from taskboard.config import get_config

# Shared SQLAlchemy instance, bound to a concrete app inside create_app()
db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.  If None, the
            ``FLASK_ENV`` environment variable is used.

    Returns:
        Configured Flask application with its store, error handlers and
        blueprints registered and the database tables created.
    """
    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating app with config: %s", config_class.__name__)

    db.init_app(app)

    # Imported here because these modules reference ``db`` from this package
    from taskboard.errors import register_error_handlers
    from taskboard.routes.analytics import analytics_bp
    from taskboard.routes.auth import auth_bp
    from taskboard.routes.resources import resources_bp
    from taskboard.store import Store

    app.extensions["taskboard.store"] = Store(db)
    register_error_handlers(app)

    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(resources_bp, url_prefix="/api")
    app.register_blueprint(analytics_bp, url_prefix="/api")

    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app
