"""
Alert Store

Live alert feed, most recent first. Ids come from a monotonic counter and
are never reused, even after dismissal. One lock guards the counter and the
sequence, so the store can be shared by request threads.
"""

import itertools
import logging
import threading
from datetime import datetime, timezone

from fieldwatch.models import Alert, AlertKind
from fieldwatch.services.classifier import classify_severity

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc)


class AlertStore:
    """Ordered set of active alerts."""

    def __init__(self, clock=None):
        self._clock = clock or _utcnow
        self._ids = itertools.count(1)
        self._alerts = []  # newest first
        self._lock = threading.Lock()

    def raise_alert(self, kind, message, location):
        """Create an alert and put it at the head of the feed.

        Args:
            kind: AlertKind or its name
            message: human-readable text
            location: field or section the alert refers to

        Returns:
            The new Alert
        """
        kind = AlertKind(getattr(kind, 'value', kind))
        with self._lock:
            alert = Alert(
                id=next(self._ids),
                kind=kind,
                severity=classify_severity(kind),
                message=message,
                location=location,
                created_at=self._clock(),
            )
            self._alerts.insert(0, alert)
        logger.info('Raised %s alert #%d at %s: %s', kind.value, alert.id, location, message)
        return alert

    def dismiss(self, alert_id):
        """Remove an alert. Returns False, without error, if it is not present."""
        with self._lock:
            for idx, alert in enumerate(self._alerts):
                if alert.id == alert_id:
                    del self._alerts[idx]
                    break
            else:
                return False
        logger.info('Dismissed alert #%d', alert_id)
        return True

    def count(self):
        with self._lock:
            return len(self._alerts)

    def list_alerts(self, limit=None):
        """Snapshot of the feed, most recent first, at most ``limit`` entries."""
        with self._lock:
            if limit is None:
                return list(self._alerts)
            return self._alerts[:max(0, int(limit))]

    def get(self, alert_id):
        with self._lock:
            for alert in self._alerts:
                if alert.id == alert_id:
                    return alert
        return None

    def find_active(self, message, location):
        """Return the newest active alert with this message and location, if any."""
        with self._lock:
            for alert in self._alerts:
                if alert.message == message and alert.location == location:
                    return alert
        return None

    def clear(self):
        """Dismiss every alert. The id counter keeps running."""
        with self._lock:
            removed = len(self._alerts)
            self._alerts = []
        return removed

    def __len__(self):
        return self.count()

    def __iter__(self):
        return iter(self.list_alerts())
