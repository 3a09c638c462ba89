"""
Session User

Users are owned by the external identity provider. This is the in-session
view of one, rebuilt from the Flask session on each request.
"""

from flask_login import UserMixin


class SessionUser(UserMixin):
    """User model for Flask-Login, backed by the identity provider's record"""

    def __init__(self, id, email, name=None):
        self.id = str(id)
        self.email = email
        self.name = name or email

    @classmethod
    def from_dict(cls, data):
        return cls(id=data.get('id'), email=data.get('email'), name=data.get('name'))

    def to_dict(self):
        return {'id': self.id, 'email': self.email, 'name': self.name}

    def __repr__(self):
        return f'<SessionUser {self.email}>'
