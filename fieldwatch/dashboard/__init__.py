"""
Dashboard Blueprint

JSON endpoints the presentation layer reads summary cards, field grids,
alert feeds and trend series from.
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__)

from fieldwatch.dashboard import routes  # noqa: E402, F401
