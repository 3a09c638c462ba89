"""
Threshold Monitoring

Checks each incoming reading against the configured limits and raises alerts
in the alert store. An identical alert that is still active is not raised a
second time.
"""

import logging
from dataclasses import dataclass

from fieldwatch.models import AlertKind, Metric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Thresholds:
    moisture_critical: float = 30.0
    moisture_warning: float = 50.0
    ndvi_critical: float = 0.3
    ndvi_warning: float = 0.5
    nutrient_warning: float = 45.0
    ph_min: float = 5.5
    ph_max: float = 7.5
    temperature_max: float = 35.0

    @classmethod
    def from_config(cls, config):
        return cls(
            moisture_critical=config['MOISTURE_CRITICAL'],
            moisture_warning=config['MOISTURE_WARNING'],
            ndvi_critical=config['NDVI_CRITICAL'],
            ndvi_warning=config['NDVI_WARNING'],
            nutrient_warning=config['NUTRIENT_WARNING'],
            ph_min=config['PH_MIN'],
            ph_max=config['PH_MAX'],
            temperature_max=config['TEMPERATURE_MAX'],
        )


NUTRIENTS = (Metric.NITROGEN, Metric.PHOSPHORUS, Metric.POTASSIUM)


def check_reading(reading, thresholds):
    """Return the (kind, message) breaches for one reading. Empty when in range."""
    value = reading.value
    metric = reading.metric
    breaches = []

    if metric == Metric.MOISTURE:
        if value < thresholds.moisture_critical:
            breaches.append((AlertKind.CRITICAL, f'Severe drought detected in {reading.field_id}'))
        elif value < thresholds.moisture_warning:
            breaches.append((AlertKind.WARNING, 'Soil moisture below optimal threshold'))

    elif metric == Metric.NDVI:
        if value < thresholds.ndvi_critical:
            breaches.append((AlertKind.CRITICAL, f'Vegetation stress detected in {reading.field_id}'))
        elif value < thresholds.ndvi_warning:
            breaches.append((AlertKind.WARNING, 'Vegetation index declining'))

    elif metric in NUTRIENTS:
        if value < thresholds.nutrient_warning:
            breaches.append((AlertKind.WARNING, f'{metric.value.capitalize()} deficiency detected'))

    elif metric == Metric.PH:
        if value < thresholds.ph_min or value > thresholds.ph_max:
            breaches.append((AlertKind.WARNING, f'Soil pH out of range ({value:.1f})'))

    elif metric == Metric.TEMPERATURE:
        if value > thresholds.temperature_max:
            breaches.append((AlertKind.WARNING, 'Heat stress risk elevated'))

    return breaches


class ThresholdMonitor:
    """Feeds the alert store from threshold breaches."""

    def __init__(self, alert_store, thresholds=None):
        self.alert_store = alert_store
        self.thresholds = thresholds or Thresholds()

    def evaluate(self, reading):
        """Raise alerts for any breaches in ``reading``; return the new alerts."""
        raised = []
        for kind, message in check_reading(reading, self.thresholds):
            if self.alert_store.find_active(message, reading.field_id):
                logger.debug('Alert already active for %s: %s', reading.field_id, message)
                continue
            raised.append(self.alert_store.raise_alert(kind, message, reading.field_id))
        return raised
