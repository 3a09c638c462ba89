"""
Alert Model
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AlertKind(str, Enum):
    CRITICAL = 'critical'
    WARNING = 'warning'
    INFO = 'info'


class Severity(str, Enum):
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


@dataclass(frozen=True)
class Alert:
    """An entry in the live alert feed. Alerts are never mutated, only dismissed."""
    id: int
    kind: AlertKind
    severity: Severity
    message: str
    location: str
    created_at: datetime

    def to_dict(self):
        return {
            'id': self.id,
            'kind': self.kind.value,
            'severity': self.severity.value,
            'message': self.message,
            'location': self.location,
            'created_at': self.created_at.isoformat(),
        }
