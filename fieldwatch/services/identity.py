"""
Identity Provider Client

Login and signup are delegated to an external identity provider. The client
turns its response into an AuthResult; any failure is reported as an opaque
unsuccessful result and is not retried.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    success: bool
    token: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self):
        data = {'success': self.success}
        if self.success:
            data['user'] = dict(self.user)
        else:
            data['error'] = self.error
        return data


class IdentityClient:
    """Request/response client for the identity provider's auth endpoints."""

    def __init__(self, base_url, timeout=6.0, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._http = session or requests

    def login(self, email, password):
        return self._call('/api/auth/login', {'email': email, 'password': password}, 'Login failed')

    def signup(self, email, password, name):
        payload = {'email': email, 'password': password, 'name': name}
        return self._call('/api/auth/signup', payload, 'Signup failed')

    def _call(self, path, payload, failure_message):
        url = f'{self.base_url}{path}'
        try:
            resp = self._http.post(url, json=payload, timeout=self.timeout)
            if resp.status_code < 200 or resp.status_code >= 300:
                logger.warning('Identity provider returned %s for %s', resp.status_code, path)
                return AuthResult(success=False, error=failure_message)

            data = resp.json()
        except requests.exceptions.Timeout:
            logger.warning('Identity provider timed out for %s', path)
            return AuthResult(success=False, error=failure_message)
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning('Identity provider error for %s: %s', path, e)
            return AuthResult(success=False, error=failure_message)

        token = data.get('token') if isinstance(data, dict) else None
        user = data.get('user') if isinstance(data, dict) else None
        if not token or not isinstance(user, dict) or user.get('id') is None:
            logger.warning('Identity provider response for %s had no token or user', path)
            return AuthResult(success=False, error=failure_message)

        return AuthResult(
            success=True,
            token=token,
            user={'id': str(user['id']), 'email': user.get('email', ''), 'name': user.get('name', '')},
        )
