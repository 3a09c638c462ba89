"""
Models Package

Exports all models for easy importing.
"""

from fieldwatch.models.reading import (
    Metric, CORE_METRICS, Reading, ReadingRecord, InvalidReading, parse_reading,
)
from fieldwatch.models.alert import Alert, AlertKind, Severity
from fieldwatch.models.summary import FieldSummary, FleetSummary, HealthTier, RiskTier
from fieldwatch.models.user import SessionUser

__all__ = [
    'Metric', 'CORE_METRICS', 'Reading', 'ReadingRecord', 'InvalidReading', 'parse_reading',
    'Alert', 'AlertKind', 'Severity',
    'FieldSummary', 'FleetSummary', 'HealthTier', 'RiskTier',
    'SessionUser',
]
