"""
FieldWatch - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance, including the per-app
classification engine (alert store, aggregator, threshold monitor).
"""

import logging
import os

from flask import Flask, jsonify, session
from fieldwatch.extensions import db, login_manager
from fieldwatch.config import Config


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.getLogger('fieldwatch').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    _init_engine(app)

    # Register blueprints
    from fieldwatch.auth import auth_bp
    from fieldwatch.dashboard import dashboard_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from fieldwatch.auth.routes import SESSION_USER_KEY
        from fieldwatch.models import SessionUser
        data = session.get(SESSION_USER_KEY)
        if data and str(data.get('id')) == str(user_id):
            return SessionUser.from_dict(data)
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    # Create database tables
    with app.app_context():
        from fieldwatch import models  # noqa: F401
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and not app.testing:
            os.makedirs(os.path.join(Config.basedir, 'instance'), exist_ok=True)
        db.create_all()

    return app


def _init_engine(app):
    """Create the alert store, aggregator, threshold monitor and identity client."""
    from fieldwatch.services import (
        AlertStore, FieldAggregator, IdentityClient, ThresholdMonitor, Thresholds,
    )

    alert_store = AlertStore()
    app.extensions['fieldwatch.alerts'] = alert_store
    app.extensions['fieldwatch.aggregator'] = FieldAggregator(alert_store=alert_store)
    app.extensions['fieldwatch.thresholds'] = ThresholdMonitor(
        alert_store, Thresholds.from_config(app.config))
    app.extensions['fieldwatch.identity'] = IdentityClient(
        app.config['IDENTITY_PROVIDER_URL'], timeout=app.config['IDENTITY_TIMEOUT'])
