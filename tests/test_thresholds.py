import pytest

from fieldwatch.config import TestConfig
from fieldwatch.models import AlertKind, Metric, Reading, Severity
from fieldwatch.services.alerts import AlertStore
from fieldwatch.services.thresholds import ThresholdMonitor, Thresholds, check_reading


@pytest.fixture()
def monitor():
    return ThresholdMonitor(AlertStore())


@pytest.mark.parametrize('metric, value, kind', [
    (Metric.MOISTURE, 25.0, AlertKind.CRITICAL),
    (Metric.MOISTURE, 45.0, AlertKind.WARNING),
    (Metric.NDVI, 0.2, AlertKind.CRITICAL),
    (Metric.NDVI, 0.45, AlertKind.WARNING),
    (Metric.NITROGEN, 30.0, AlertKind.WARNING),
    (Metric.PH, 8.2, AlertKind.WARNING),
    (Metric.PH, 5.0, AlertKind.WARNING),
    (Metric.TEMPERATURE, 38.0, AlertKind.WARNING),
])
def test_breaches(metric, value, kind):
    breaches = check_reading(Reading('A-3', metric, value), Thresholds())
    assert [b[0] for b in breaches] == [kind]


@pytest.mark.parametrize('metric, value', [
    (Metric.MOISTURE, 72.0),
    (Metric.NDVI, 0.8),
    (Metric.POTASSIUM, 90.0),
    (Metric.PH, 6.8),
    (Metric.TEMPERATURE, 25.0),
])
def test_in_range_readings_raise_nothing(metric, value):
    assert check_reading(Reading('A-1', metric, value), Thresholds()) == []


def test_drought_alert_is_raised_once(monitor):
    raised = monitor.evaluate(Reading('A-3', Metric.MOISTURE, 25.0))
    assert len(raised) == 1
    alert = raised[0]
    assert alert.kind == AlertKind.CRITICAL
    assert alert.severity == Severity.HIGH
    assert alert.location == 'A-3'
    assert alert.message == 'Severe drought detected in A-3'

    # same condition again while the alert is active
    assert monitor.evaluate(Reading('A-3', Metric.MOISTURE, 22.0)) == []
    assert monitor.alert_store.count() == 1


def test_alert_raised_again_after_dismissal(monitor):
    first = monitor.evaluate(Reading('C-1', Metric.MOISTURE, 45.0))[0]
    monitor.alert_store.dismiss(first.id)
    second = monitor.evaluate(Reading('C-1', Metric.MOISTURE, 44.0))[0]
    assert second.id != first.id
    assert second.message == 'Soil moisture below optimal threshold'


def test_nutrient_message_names_metric(monitor):
    alert = monitor.evaluate(Reading('C-1', Metric.PHOSPHORUS, 30.0))[0]
    assert alert.message == 'Phosphorus deficiency detected'


def test_thresholds_from_config():
    config = {key: getattr(TestConfig, key) for key in dir(TestConfig) if key.isupper()}
    config['MOISTURE_WARNING'] = 60.0
    thresholds = Thresholds.from_config(config)
    assert thresholds.moisture_warning == 60.0
    assert thresholds.ph_max == 7.5
