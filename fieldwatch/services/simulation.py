"""
Field Data Simulation Service

Generates plausible readings for demo fields. This is the only place where
randomness enters the system; classification stays deterministic.
"""

import logging
import random
from datetime import datetime, timedelta, timezone

from fieldwatch.models import Metric, Reading
from fieldwatch.services.ingest import ingest_readings

logger = logging.getLogger(__name__)


# Field-specific baselines for simulation
FIELD_CHARACTERISTICS = {
    'A-1': {'ph': 6.8, 'moisture': 72, 'nitrogen': 85, 'phosphorus': 78, 'potassium': 92, 'ndvi': 0.82},
    'A-2': {'ph': 7.2, 'moisture': 68, 'nitrogen': 82, 'phosphorus': 85, 'potassium': 88, 'ndvi': 0.78},
    'B-1': {'ph': 6.5, 'moisture': 75, 'nitrogen': 90, 'phosphorus': 72, 'potassium': 85, 'ndvi': 0.80},
    'B-2': {'ph': 7.0, 'moisture': 71, 'nitrogen': 88, 'phosphorus': 80, 'potassium': 90, 'ndvi': 0.84},
    'C-1': {'ph': 6.2, 'moisture': 45, 'nitrogen': 65, 'phosphorus': 68, 'potassium': 72, 'ndvi': 0.55},
    'C-2': {'ph': 6.9, 'moisture': 78, 'nitrogen': 87, 'phosphorus': 83, 'potassium': 89, 'ndvi': 0.85},
}

DEFAULT_CHARACTERISTICS = {'ph': 6.8, 'moisture': 65, 'nitrogen': 75, 'phosphorus': 75, 'potassium': 80, 'ndvi': 0.7}

# Uniform jitter applied around each baseline
JITTER = {'ph': 0.3, 'moisture': 8.0, 'nitrogen': 6.0, 'phosphorus': 6.0, 'potassium': 6.0, 'ndvi': 0.06}

LIMITS = {
    'ph': (4.0, 9.0),
    'moisture': (0.0, 100.0),
    'nitrogen': (0.0, 100.0),
    'phosphorus': (0.0, 100.0),
    'potassium': (0.0, 100.0),
    'ndvi': (0.0, 1.0),
}


def _clamp(x, lo, hi):
    return max(lo, min(hi, x))


def generate_readings(field_ids=None, num_readings=5, rng=None, now=None):
    """
    Generate simulated readings for each field.

    Args:
        field_ids: fields to simulate (default: all known demo fields)
        num_readings: readings per metric per field, spaced ten minutes apart
        rng: random.Random to draw from (default: module random)
        now: timestamp of the newest reading

    Returns:
        list of Reading, oldest first within each field
    """
    rng = rng or random
    now = now or datetime.now(timezone.utc)
    field_ids = list(field_ids or FIELD_CHARACTERISTICS)

    readings = []
    for field_id in field_ids:
        characteristics = FIELD_CHARACTERISTICS.get(field_id, DEFAULT_CHARACTERISTICS)

        for i in range(num_readings):
            timestamp = now - timedelta(minutes=10 * (num_readings - i - 1))

            # Midday heat
            hour = timestamp.hour
            base_temp = 30.0 if 11 <= hour <= 15 else 22.0
            temperature = base_temp + rng.uniform(-4, 6)
            readings.append(Reading(field_id, Metric.TEMPERATURE, round(temperature, 1), timestamp))

            for name, base in characteristics.items():
                lo, hi = LIMITS[name]
                value = _clamp(base + rng.uniform(-JITTER[name], JITTER[name]), lo, hi)
                digits = 3 if name == 'ndvi' else 2
                readings.append(Reading(field_id, Metric(name), round(value, digits), timestamp))

    return readings


def simulate_field_data(field_ids=None, num_readings=5, rng=None):
    """Generate readings and push them through the ingest path."""
    readings = generate_readings(field_ids, num_readings=num_readings, rng=rng)
    alerts = ingest_readings(readings)
    logger.info('Simulated %d readings for %d fields, %d alerts raised',
                len(readings), len(field_ids or FIELD_CHARACTERISTICS), len(alerts))
    return readings, alerts
