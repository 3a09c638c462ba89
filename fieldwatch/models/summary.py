"""
Summary Models

FieldSummary and FleetSummary are derived values; the aggregator rebuilds
them from the latest readings and never stores them as source data.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional


class HealthTier(str, Enum):
    EXCELLENT = 'excellent'
    GOOD = 'good'
    FAIR = 'fair'
    POOR = 'poor'


class RiskTier(str, Enum):
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


@dataclass(frozen=True)
class FieldSummary:
    field_id: str
    values: Dict[str, float]
    health_tier: HealthTier
    soil_health_pct: float
    risk_score: float
    risk_tier: RiskTier
    updated_at: Optional[datetime] = None

    def to_dict(self):
        return {
            'field_id': self.field_id,
            'values': dict(self.values),
            'health_tier': self.health_tier.value,
            'soil_health_pct': self.soil_health_pct,
            'risk_score': self.risk_score,
            'risk_tier': self.risk_tier.value,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class FleetSummary:
    field_count: int
    avg_ndvi: float
    active_alert_count: int
    avg_soil_health_pct: float
    deltas: Dict[str, float] = field(default_factory=dict)
    tier_counts: Dict[str, int] = field(default_factory=dict)

    # Stats that get a signed delta against a previous snapshot
    DELTA_STATS = ('field_count', 'avg_ndvi', 'active_alert_count', 'avg_soil_health_pct')

    def to_dict(self):
        return {
            'field_count': self.field_count,
            'avg_ndvi': self.avg_ndvi,
            'active_alert_count': self.active_alert_count,
            'avg_soil_health_pct': self.avg_soil_health_pct,
            'deltas': dict(self.deltas),
            'tier_counts': dict(self.tier_counts),
        }
