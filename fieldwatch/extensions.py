"""
Flask Extensions

The classification engine (alert store, aggregator, threshold monitor) is
created per application in ``create_app`` and kept in ``app.extensions``;
the accessors below fetch it for the current app.
"""

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance (reading history only)
db = SQLAlchemy()

# Login manager for identity-provider sessions
login_manager = LoginManager()


def get_alert_store():
    return current_app.extensions['fieldwatch.alerts']


def get_aggregator():
    return current_app.extensions['fieldwatch.aggregator']


def get_threshold_monitor():
    return current_app.extensions['fieldwatch.thresholds']


def get_identity_client():
    return current_app.extensions['fieldwatch.identity']
