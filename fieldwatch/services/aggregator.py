"""
Field Aggregation Services

Keeps the latest value per (field, metric) and derives per-field summaries
and the fleet-wide rollup shown on the summary cards. A newer reading for the
same field and metric replaces the older one; history lives in
``fieldwatch.services.history``, not here.
"""

import logging
import threading

from fieldwatch.models import CORE_METRICS, FieldSummary, FleetSummary, HealthTier, Metric
from fieldwatch.services.classifier import (
    classify_health, classify_risk, risk_score_from_health, soil_health_pct,
)

logger = logging.getLogger(__name__)


class FieldNotFound(LookupError):
    """Raised when a summary is requested for a field with no readings."""

    def __init__(self, field_id):
        super().__init__(f'No readings recorded for field {field_id!r}')
        self.field_id = field_id


def _average(values):
    return round(sum(values) / len(values), 4) if values else 0.0


def _has_core_metric(summary):
    return any(metric.value in summary.values for metric in CORE_METRICS)


class FieldAggregator:
    """Latest-value table plus lazily rebuilt field summaries."""

    def __init__(self, alert_store=None):
        self._alert_store = alert_store
        self._latest = {}   # field_id -> {Metric: Reading}
        self._summaries = {}
        self._dirty = set()
        self._lock = threading.Lock()

    def record_reading(self, reading):
        """Upsert the latest value for the reading's field and metric.

        A reading older than the stored one for the same key is ignored.
        The field summary is rebuilt on the next read, not here.

        Returns:
            True if the reading became the latest value, False if it was stale
        """
        with self._lock:
            metrics = self._latest.setdefault(reading.field_id, {})
            current = metrics.get(reading.metric)
            if current is not None and reading.timestamp < current.timestamp:
                logger.debug('Ignoring stale %s reading for %s', reading.metric.value, reading.field_id)
                return False
            metrics[reading.metric] = reading
            self._dirty.add(reading.field_id)
            return True

    def has_field(self, field_id):
        with self._lock:
            return field_id in self._latest

    def field_ids(self):
        with self._lock:
            return sorted(self._latest)

    def summary_for(self, field_id):
        """Return the FieldSummary for a field.

        Raises:
            FieldNotFound: if the field has no recorded readings
        """
        with self._lock:
            return self._summary_locked(field_id)

    def summaries(self):
        """All field summaries, ordered by field id."""
        with self._lock:
            return [self._summary_locked(field_id) for field_id in sorted(self._latest)]

    def _summary_locked(self, field_id):
        if field_id not in self._latest:
            raise FieldNotFound(field_id)
        if field_id in self._dirty or field_id not in self._summaries:
            self._summaries[field_id] = self._build_summary(field_id)
            self._dirty.discard(field_id)
        return self._summaries[field_id]

    def _build_summary(self, field_id):
        readings = self._latest[field_id]
        values = {metric.value: reading.value for metric, reading in readings.items()}
        health_pct = soil_health_pct(values)
        risk_score = risk_score_from_health(health_pct)
        return FieldSummary(
            field_id=field_id,
            values=values,
            health_tier=classify_health(values),
            soil_health_pct=health_pct,
            risk_score=risk_score,
            risk_tier=classify_risk(risk_score),
            updated_at=max(reading.timestamp for reading in readings.values()),
        )

    def fleet_summary(self, previous=None):
        """Compute the fleet-wide rollup.

        Args:
            previous: optional earlier FleetSummary; when given, ``deltas``
                holds current minus previous for each stat

        Returns:
            FleetSummary. An empty fleet yields zeros, not an error.
        """
        summaries = self.summaries()

        ndvi_values = [s.values[Metric.NDVI.value] for s in summaries if Metric.NDVI.value in s.values]
        # fields reporting no core metric have no soil health to average
        health_values = [s.soil_health_pct for s in summaries if _has_core_metric(s)]

        tier_counts = {tier.value: 0 for tier in HealthTier}
        for s in summaries:
            tier_counts[s.health_tier.value] += 1

        active_alerts = self._alert_store.count() if self._alert_store is not None else 0

        current = {
            'field_count': len(summaries),
            'avg_ndvi': _average(ndvi_values),
            'active_alert_count': active_alerts,
            'avg_soil_health_pct': round(_average(health_values), 2),
        }

        deltas = {}
        if previous is not None:
            for stat in FleetSummary.DELTA_STATS:
                deltas[stat] = round(current[stat] - getattr(previous, stat), 4)

        return FleetSummary(deltas=deltas, tier_counts=tier_counts, **current)
