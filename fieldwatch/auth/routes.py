"""
Auth Routes

Session handling around the identity provider using Flask-Login.
"""

import logging

from flask import jsonify, request, session
from flask_login import current_user, login_required, login_user, logout_user

from fieldwatch.auth import auth_bp
from fieldwatch.extensions import get_identity_client
from fieldwatch.models import SessionUser

logger = logging.getLogger(__name__)

SESSION_USER_KEY = 'identity_user'
SESSION_TOKEN_KEY = 'identity_token'


def _read_credentials():
    data = request.get_json(silent=True) or request.form
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''
    return data, email, password


def _start_session(result):
    user = SessionUser.from_dict(result.user)
    session[SESSION_USER_KEY] = user.to_dict()
    session[SESSION_TOKEN_KEY] = result.token
    login_user(user)
    return user


@auth_bp.route('/login', methods=['POST'])
def login():
    """Log in through the identity provider"""
    _, email, password = _read_credentials()
    if not email or not password:
        return jsonify({'success': False, 'error': 'Please fill in all required fields'}), 400

    result = get_identity_client().login(email, password)
    if not result.success:
        return jsonify(result.to_dict()), 401

    user = _start_session(result)
    logger.info('User %s logged in', user.id)
    return jsonify(result.to_dict())


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Register through the identity provider and start a session"""
    data, email, password = _read_credentials()
    name = (data.get('name') or data.get('full_name') or '').strip()
    confirm = data.get('confirm_password')

    if not email or not password:
        return jsonify({'success': False, 'error': 'Please fill in all required fields'}), 400
    if confirm is not None and confirm != password:
        return jsonify({'success': False, 'error': 'Passwords do not match'}), 400

    result = get_identity_client().signup(email, password, name)
    if not result.success:
        return jsonify(result.to_dict()), 401

    user = _start_session(result)
    logger.info('User %s signed up', user.id)
    return jsonify(result.to_dict()), 201


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    session.pop(SESSION_USER_KEY, None)
    session.pop(SESSION_TOKEN_KEY, None)
    logout_user()
    return jsonify({'success': True})


@auth_bp.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})
