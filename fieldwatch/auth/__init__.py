"""
Auth Blueprint

Credentials are checked by the external identity provider; this blueprint
only keeps the resulting session.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

from fieldwatch.auth import routes  # noqa: E402, F401
