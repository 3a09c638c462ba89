"""
Services Package

Exports all services for easy importing.
"""

from fieldwatch.services.classifier import (
    classify_health, classify_risk, classify_severity,
    soil_health_pct, risk_score_from_health,
    health_status, risk_status, severity_status,
)
from fieldwatch.services.alerts import AlertStore
from fieldwatch.services.aggregator import FieldAggregator, FieldNotFound
from fieldwatch.services.thresholds import ThresholdMonitor, Thresholds
from fieldwatch.services.identity import IdentityClient, AuthResult

__all__ = [
    'classify_health',
    'classify_risk',
    'classify_severity',
    'soil_health_pct',
    'risk_score_from_health',
    'health_status',
    'risk_status',
    'severity_status',
    'AlertStore',
    'FieldAggregator',
    'FieldNotFound',
    'ThresholdMonitor',
    'Thresholds',
    'IdentityClient',
    'AuthResult',
]
