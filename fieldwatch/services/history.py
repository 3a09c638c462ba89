"""
Reading History

Append-only log of every ingested reading, used for the temporal trend
charts. Rows are never updated or deleted here.
"""

from datetime import timezone

from fieldwatch.extensions import db
from fieldwatch.models import Metric, ReadingRecord


def append_reading(reading, commit=True):
    """Persist one reading."""
    record = ReadingRecord(
        field_id=reading.field_id,
        metric=reading.metric.value,
        value=reading.value,
        timestamp=reading.timestamp,
    )
    db.session.add(record)
    if commit:
        db.session.commit()
    return record


def _as_utc(ts):
    # SQLite hands back naive datetimes; stored values are always UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def get_series(field_id, metric, limit=100):
    """Return the newest ``limit`` points for a field and metric, oldest first."""
    metric = Metric(getattr(metric, 'value', metric))
    rows = ReadingRecord.query.filter_by(field_id=field_id, metric=metric.value)\
        .order_by(ReadingRecord.timestamp.desc(), ReadingRecord.id.desc()).limit(limit).all()
    rows.reverse()
    return [{'t': _as_utc(r.timestamp).isoformat(), 'value': r.value} for r in rows]


def count_readings(field_id=None):
    query = ReadingRecord.query
    if field_id is not None:
        query = query.filter_by(field_id=field_id)
    return query.count()
