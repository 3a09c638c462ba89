from datetime import datetime, timedelta, timezone

import pytest

from fieldwatch.models import HealthTier, Metric, Reading, RiskTier
from fieldwatch.services.aggregator import FieldAggregator, FieldNotFound
from fieldwatch.services.alerts import AlertStore

T0 = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)


def _record(aggregator, field_id, ts=T0, **values):
    for name, value in values.items():
        aggregator.record_reading(Reading(field_id, Metric(name), value, ts))


@pytest.fixture()
def alerts():
    return AlertStore()


@pytest.fixture()
def aggregator(alerts):
    return FieldAggregator(alert_store=alerts)


def test_unknown_field_raises_not_found(aggregator):
    with pytest.raises(FieldNotFound):
        aggregator.summary_for('Z-9')


def test_latest_value_wins(aggregator):
    _record(aggregator, 'A-1', moisture=82, nitrogen=85, phosphorus=88, potassium=92)
    assert aggregator.summary_for('A-1').health_tier == HealthTier.EXCELLENT

    _record(aggregator, 'A-1', ts=T0 + timedelta(minutes=5), potassium=40)
    summary = aggregator.summary_for('A-1')
    assert summary.health_tier == HealthTier.POOR
    assert summary.values['potassium'] == 40
    assert summary.updated_at == T0 + timedelta(minutes=5)


def test_field_a1_ends_poor_after_potassium_drop(aggregator):
    _record(aggregator, 'A-1', moisture=72, nitrogen=85, phosphorus=78, potassium=92)
    assert aggregator.summary_for('A-1').health_tier == HealthTier.GOOD
    _record(aggregator, 'A-1', potassium=40)
    assert aggregator.summary_for('A-1').health_tier == HealthTier.POOR


def test_stale_reading_is_ignored(aggregator):
    _record(aggregator, 'A-1', ts=T0, moisture=70)
    _record(aggregator, 'A-1', ts=T0 - timedelta(hours=1), moisture=20)
    assert aggregator.summary_for('A-1').values['moisture'] == 70


def test_record_reading_reports_whether_applied(aggregator):
    assert aggregator.record_reading(Reading('A-1', Metric.MOISTURE, 70.0, T0)) is True
    assert aggregator.record_reading(Reading('A-1', Metric.MOISTURE, 10.0, T0 - timedelta(days=3))) is False
    # equal timestamps: the later arrival wins
    assert aggregator.record_reading(Reading('A-1', Metric.MOISTURE, 71.0, T0)) is True
    assert aggregator.summary_for('A-1').values['moisture'] == 71.0


def test_naive_timestamps_are_treated_as_utc(aggregator):
    aggregator.record_reading(Reading('A-1', Metric.MOISTURE, 50.0))
    naive = Reading('A-1', Metric.MOISTURE, 60.0, datetime(2030, 1, 1))
    assert naive.timestamp == datetime(2030, 1, 1, tzinfo=timezone.utc)

    assert aggregator.record_reading(naive) is True
    assert aggregator.summary_for('A-1').values['moisture'] == 60.0


def test_timestamps_are_normalised_to_utc():
    plus_two = timezone(timedelta(hours=2))
    reading = Reading('A-1', Metric.MOISTURE, 60.0, datetime(2025, 6, 1, 10, 0, tzinfo=plus_two))
    assert reading.timestamp.tzinfo == timezone.utc
    assert reading.timestamp == T0


def test_summary_is_recomputed_lazily(aggregator, monkeypatch):
    calls = []
    real_build = aggregator._build_summary

    def counting_build(field_id):
        calls.append(field_id)
        return real_build(field_id)

    monkeypatch.setattr(aggregator, '_build_summary', counting_build)

    _record(aggregator, 'B-1', moisture=75, nitrogen=90, phosphorus=72, potassium=85)
    assert calls == []

    aggregator.summary_for('B-1')
    aggregator.summary_for('B-1')
    assert calls == ['B-1']

    _record(aggregator, 'B-1', moisture=76)
    aggregator.summary_for('B-1')
    assert calls == ['B-1', 'B-1']


def test_risk_derived_from_soil_health(aggregator):
    _record(aggregator, 'C-1', moisture=20, nitrogen=30, phosphorus=25, potassium=25)
    summary = aggregator.summary_for('C-1')
    assert summary.soil_health_pct == 25.0
    assert summary.risk_score == pytest.approx(0.75)
    assert summary.risk_tier == RiskTier.HIGH


def test_empty_fleet_is_zero(aggregator):
    fleet = aggregator.fleet_summary()
    assert fleet.field_count == 0
    assert fleet.avg_ndvi == 0
    assert fleet.avg_soil_health_pct == 0
    assert fleet.active_alert_count == 0
    assert fleet.deltas == {}


def test_fleet_rollup(aggregator, alerts):
    _record(aggregator, 'A-1', moisture=80, nitrogen=80, phosphorus=80, potassium=80, ndvi=0.8)
    _record(aggregator, 'A-2', moisture=60, nitrogen=60, phosphorus=60, potassium=60, ndvi=0.6)
    _record(aggregator, 'B-1', moisture=50, nitrogen=50, phosphorus=50, potassium=50)
    alerts.raise_alert('warning', 'Soil moisture below optimal threshold', 'B-1')

    fleet = aggregator.fleet_summary()
    assert fleet.field_count == 3
    # only fields with an ndvi reading count toward the average
    assert fleet.avg_ndvi == pytest.approx(0.7)
    assert fleet.avg_soil_health_pct == pytest.approx(63.33, abs=0.01)
    assert fleet.active_alert_count == 1
    assert fleet.tier_counts == {'excellent': 1, 'good': 0, 'fair': 2, 'poor': 0}


def test_fleet_deltas_against_previous(aggregator, alerts):
    _record(aggregator, 'A-1', moisture=80, nitrogen=80, phosphorus=80, potassium=80, ndvi=0.7)
    previous = aggregator.fleet_summary()

    _record(aggregator, 'A-2', moisture=90, nitrogen=90, phosphorus=90, potassium=90, ndvi=0.9)
    alerts.raise_alert('critical', 'Severe drought detected in A-3', 'A-3')
    alerts.raise_alert('info', 'Irrigation cycle completed successfully', 'All Fields')

    current = aggregator.fleet_summary(previous=previous)
    assert current.deltas['field_count'] == 1
    assert current.deltas['avg_ndvi'] == pytest.approx(0.1)
    assert current.deltas['active_alert_count'] == 2
    assert current.deltas['avg_soil_health_pct'] == pytest.approx(5.0)


def test_negative_delta(aggregator):
    _record(aggregator, 'A-1', moisture=90, nitrogen=90, phosphorus=90, potassium=90)
    previous = aggregator.fleet_summary()
    _record(aggregator, 'A-1', ts=T0 + timedelta(minutes=1), moisture=50)
    current = aggregator.fleet_summary(previous=previous)
    assert current.deltas['avg_soil_health_pct'] == pytest.approx(-10.0)


def test_aggregator_without_alert_store():
    aggregator = FieldAggregator()
    _record(aggregator, 'A-1', ndvi=0.5)
    fleet = aggregator.fleet_summary()
    assert fleet.active_alert_count == 0
    assert fleet.avg_soil_health_pct == 0
    assert aggregator.field_ids() == ['A-1']


def test_soil_health_average_skips_fields_without_core_metrics(aggregator):
    _record(aggregator, 'A-1', moisture=80, nitrogen=80, phosphorus=80, potassium=80)
    _record(aggregator, 'A-2', moisture=60)
    _record(aggregator, 'B-1', ndvi=0.7, ph=6.5)

    fleet = aggregator.fleet_summary()
    assert fleet.field_count == 3
    assert fleet.avg_soil_health_pct == pytest.approx(70.0)
    assert fleet.avg_ndvi == pytest.approx(0.7)
