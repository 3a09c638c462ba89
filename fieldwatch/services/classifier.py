"""
Metric Classification Services

Fixed-threshold tiering for field health, risk and alert severity, plus the
status helpers the dashboard uses for badges. Every function here is pure.
"""

from fieldwatch.models import AlertKind, CORE_METRICS, HealthTier, RiskTier, Severity


# Minimum value every core metric must reach, best tier first
HEALTH_THRESHOLDS = (
    (HealthTier.EXCELLENT, 80.0),
    (HealthTier.GOOD, 65.0),
    (HealthTier.FAIR, 45.0),
)

RISK_HIGH = 0.7
RISK_MEDIUM = 0.4


def _enum_value(value):
    return getattr(value, 'value', value)


def _core_values(values):
    """Return the core metric values present in ``values``, keyed by name."""
    found = {}
    for metric in CORE_METRICS:
        for key in (metric, metric.value):
            if key in values and values[key] is not None:
                found[metric.value] = float(values[key])
                break
    return found


def classify_health(values):
    """Classify a field's health tier from its latest metric values.

    Tiers are checked from best to worst and the first one whose floor is
    met by every core metric wins. A missing core metric meets no floor.

    Args:
        values: mapping of metric (enum or name) to value

    Returns:
        HealthTier
    """
    core = _core_values(values)
    if len(core) < len(CORE_METRICS):
        return HealthTier.POOR

    lowest = min(core.values())
    for tier, floor in HEALTH_THRESHOLDS:
        if lowest >= floor:
            return tier
    return HealthTier.POOR


def classify_risk(score):
    """Classify a normalized risk score. Upper bounds are inclusive: 0.7 is medium."""
    if score > RISK_HIGH:
        return RiskTier.HIGH
    if score > RISK_MEDIUM:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def classify_severity(kind):
    """Map an alert kind to its severity."""
    if kind == AlertKind.CRITICAL:
        return Severity.HIGH
    if kind == AlertKind.WARNING:
        return Severity.MEDIUM
    return Severity.LOW


def soil_health_pct(values):
    """Mean of the core metrics present, as a percentage. 0.0 when none are."""
    core = _core_values(values)
    if not core:
        return 0.0
    return round(sum(core.values()) / len(core), 2)


def risk_score_from_health(health_pct):
    """Normalized risk in [0, 1]; the inverse of soil health."""
    score = 1.0 - (health_pct / 100.0)
    return round(max(0.0, min(1.0, score)), 4)


def health_status(tier):
    """Get a display status for a health tier"""
    tier = HealthTier(_enum_value(tier))
    if tier == HealthTier.EXCELLENT:
        return {
            'level': 'Excellent',
            'color': 'success',
            'description': 'All soil indicators are in the optimal range'
        }
    elif tier == HealthTier.GOOD:
        return {
            'level': 'Good',
            'color': 'info',
            'description': 'Soil indicators are healthy'
        }
    elif tier == HealthTier.FAIR:
        return {
            'level': 'Fair',
            'color': 'warning',
            'description': 'At least one soil indicator needs attention'
        }
    else:
        return {
            'level': 'Poor',
            'color': 'danger',
            'description': 'Soil indicators are below acceptable levels'
        }


def risk_status(tier):
    """Get a display status for a risk tier"""
    tier = RiskTier(_enum_value(tier))
    if tier == RiskTier.HIGH:
        return {'level': 'High Risk', 'color': 'danger', 'description': 'Intervention recommended'}
    if tier == RiskTier.MEDIUM:
        return {'level': 'Medium Risk', 'color': 'warning', 'description': 'Monitor closely'}
    return {'level': 'Low Risk', 'color': 'success', 'description': 'No action needed'}


def severity_status(severity):
    """Get a display status for an alert severity"""
    severity = Severity(_enum_value(severity))
    if severity == Severity.HIGH:
        return {'level': 'High', 'color': 'danger', 'description': 'Immediate attention required'}
    if severity == Severity.MEDIUM:
        return {'level': 'Medium', 'color': 'warning', 'description': 'Review soon'}
    return {'level': 'Low', 'color': 'info', 'description': 'For information'}
