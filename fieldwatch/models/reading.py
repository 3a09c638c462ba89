"""
Reading Models

A Reading is one timestamped sensor measurement for one field and one metric.
ReadingRecord is its persisted row in the append-only history table.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from fieldwatch.extensions import db


class Metric(str, Enum):
    """Closed set of metrics a field can report."""
    PH = 'ph'
    MOISTURE = 'moisture'
    NITROGEN = 'nitrogen'
    PHOSPHORUS = 'phosphorus'
    POTASSIUM = 'potassium'
    NDVI = 'ndvi'
    TEMPERATURE = 'temperature'


# Metrics that decide a field's health tier
CORE_METRICS = (Metric.MOISTURE, Metric.NITROGEN, Metric.PHOSPHORUS, Metric.POTASSIUM)


class InvalidReading(ValueError):
    """Raised when an ingest payload cannot be turned into a Reading."""


def utcnow():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Reading:
    field_id: str
    metric: Metric
    value: float
    timestamp: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        # Naive timestamps are taken as UTC; everything is stored in UTC
        if self.timestamp.tzinfo is None:
            timestamp = self.timestamp.replace(tzinfo=timezone.utc)
        else:
            timestamp = self.timestamp.astimezone(timezone.utc)
        object.__setattr__(self, 'timestamp', timestamp)

    def to_dict(self):
        return {
            'field_id': self.field_id,
            'metric': self.metric.value,
            'value': self.value,
            'timestamp': self.timestamp.isoformat(),
        }


def parse_reading(payload):
    """Build a Reading from a JSON-like dict.

    Args:
        payload: dict with ``field_id``, ``metric``, ``value`` and an
            optional ISO-8601 ``timestamp``

    Returns:
        Reading

    Raises:
        InvalidReading: if any part of the payload is missing or malformed
    """
    if not isinstance(payload, dict):
        raise InvalidReading('Reading must be a JSON object')

    field_id = str(payload.get('field_id') or '').strip()
    if not field_id:
        raise InvalidReading('field_id is required')

    try:
        metric = Metric(str(payload.get('metric', '')).lower())
    except ValueError:
        raise InvalidReading(f"Unknown metric: {payload.get('metric')!r}")

    raw_value = payload.get('value')
    if isinstance(raw_value, bool):
        raise InvalidReading('value must be numeric')
    try:
        value = float(raw_value)
    except (TypeError, ValueError):
        raise InvalidReading('value must be numeric')
    if not math.isfinite(value):
        raise InvalidReading('value must be a finite number')

    raw_ts = payload.get('timestamp')
    if raw_ts is None:
        timestamp = utcnow()
    else:
        try:
            timestamp = datetime.fromisoformat(str(raw_ts).replace('Z', '+00:00'))
        except ValueError:
            raise InvalidReading(f'Invalid timestamp: {raw_ts!r}')

    return Reading(field_id=field_id, metric=metric, value=value, timestamp=timestamp)


class ReadingRecord(db.Model):
    """Persisted reading for trend charts"""
    __tablename__ = 'reading_history'

    id = db.Column(db.Integer, primary_key=True)
    field_id = db.Column(db.String(64), nullable=False, index=True)
    metric = db.Column(db.String(32), nullable=False, index=True)
    value = db.Column(db.Float, nullable=False)
    timestamp = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)

    def __repr__(self):
        return f'<ReadingRecord Field:{self.field_id} {self.metric}:{self.value}>'
