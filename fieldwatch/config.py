"""
Configuration settings for the FieldWatch dashboard backend
"""
import os


def _env_float(name, default):
    raw = os.environ.get(name)
    return float(raw) if raw else default


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration (reading history)
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'fieldwatch.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # External identity provider
    IDENTITY_PROVIDER_URL = os.environ.get('IDENTITY_PROVIDER_URL') or 'http://localhost:8080'
    IDENTITY_TIMEOUT = _env_float('IDENTITY_TIMEOUT', 6.0)

    # Application settings
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    DEFAULT_ALERT_LIMIT = int(os.environ.get('DEFAULT_ALERT_LIMIT') or 50)
    HISTORY_LIMIT = 100

    # Alert thresholds
    MOISTURE_CRITICAL = _env_float('MOISTURE_CRITICAL', 30.0)
    MOISTURE_WARNING = _env_float('MOISTURE_WARNING', 50.0)
    NDVI_CRITICAL = _env_float('NDVI_CRITICAL', 0.3)
    NDVI_WARNING = _env_float('NDVI_WARNING', 0.5)
    NUTRIENT_WARNING = _env_float('NUTRIENT_WARNING', 45.0)
    PH_MIN = _env_float('PH_MIN', 5.5)
    PH_MAX = _env_float('PH_MAX', 7.5)
    TEMPERATURE_MAX = _env_float('TEMPERATURE_MAX', 35.0)


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    IDENTITY_PROVIDER_URL = 'http://identity.test'
    LOG_LEVEL = 'DEBUG'
