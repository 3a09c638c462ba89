"""
Dashboard Routes

Main dashboard API for field monitoring.
"""

import logging

from flask import current_app, jsonify, request
from flask_login import login_required

from fieldwatch.dashboard import dashboard_bp
from fieldwatch.dashboard.services import alert_feed, build_stat_cards, field_card, risk_grid
from fieldwatch.extensions import get_aggregator, get_alert_store
from fieldwatch.models import InvalidReading, Metric, parse_reading
from fieldwatch.services.aggregator import FieldNotFound
from fieldwatch.services.history import get_series
from fieldwatch.services.ingest import ingest_readings
from fieldwatch.services.simulation import simulate_field_data

logger = logging.getLogger(__name__)

BASELINE_KEY = 'fieldwatch.baseline'


@dashboard_bp.errorhandler(FieldNotFound)
def field_not_found(e):
    return jsonify({'error': str(e)}), 404


@dashboard_bp.errorhandler(InvalidReading)
def invalid_reading(e):
    return jsonify({'error': str(e)}), 400


@dashboard_bp.route('/healthz')
def healthz():
    return jsonify({'ok': True})


@dashboard_bp.route('/api/summary')
@login_required
def summary():
    """Fleet rollup and stat cards, with deltas against the stored baseline"""
    baseline = current_app.extensions.get(BASELINE_KEY)
    fleet = get_aggregator().fleet_summary(previous=baseline)
    return jsonify({
        'summary': fleet.to_dict(),
        'cards': build_stat_cards(fleet),
        'has_baseline': baseline is not None,
    })


@dashboard_bp.route('/api/summary/baseline', methods=['POST'])
@login_required
def capture_baseline():
    """Snapshot the current rollup as the comparison baseline"""
    fleet = get_aggregator().fleet_summary()
    current_app.extensions[BASELINE_KEY] = fleet
    logger.info('Captured fleet baseline over %d fields', fleet.field_count)
    return jsonify({'baseline': fleet.to_dict()})


@dashboard_bp.route('/api/fields')
@login_required
def fields():
    return jsonify([field_card(s) for s in get_aggregator().summaries()])


@dashboard_bp.route('/api/fields/<field_id>')
@login_required
def field_detail(field_id):
    return jsonify(field_card(get_aggregator().summary_for(field_id)))


@dashboard_bp.route('/api/fields/<field_id>/history')
@login_required
def field_history(field_id):
    """Trend series for one metric of one field"""
    aggregator = get_aggregator()
    if not aggregator.has_field(field_id):
        raise FieldNotFound(field_id)

    metric_name = request.args.get('metric', Metric.NDVI.value)
    try:
        metric = Metric(metric_name)
    except ValueError:
        raise InvalidReading(f'Unknown metric: {metric_name!r}')

    limit = request.args.get('limit', current_app.config['HISTORY_LIMIT'], type=int)
    return jsonify({
        'field_id': field_id,
        'metric': metric.value,
        'points': get_series(field_id, metric, limit=limit),
    })


@dashboard_bp.route('/api/risk-grid')
@login_required
def risk_zones():
    return jsonify(risk_grid(get_aggregator().summaries()))


@dashboard_bp.route('/api/readings', methods=['POST'])
@login_required
def post_readings():
    """Ingest one reading object or a list of them"""
    payload = request.get_json(silent=True)
    if payload is None:
        raise InvalidReading('Request body must be JSON')

    items = payload if isinstance(payload, list) else [payload]
    readings = [parse_reading(item) for item in items]
    alerts = ingest_readings(readings)

    return jsonify({
        'ok': True,
        'recorded': len(readings),
        'alerts': [a.to_dict() for a in alerts],
    }), 201


@dashboard_bp.route('/api/alerts')
@login_required
def alerts():
    limit = request.args.get('limit', current_app.config['DEFAULT_ALERT_LIMIT'], type=int)
    store = get_alert_store()
    return jsonify({
        'count': store.count(),
        'alerts': alert_feed(store.list_alerts(limit)),
    })


@dashboard_bp.route('/api/alerts/<int:alert_id>', methods=['DELETE'])
@login_required
def dismiss_alert(alert_id):
    """Dismiss an alert. Unknown ids are not an error."""
    store = get_alert_store()
    dismissed = store.dismiss(alert_id)
    return jsonify({'dismissed': dismissed, 'count': store.count()})


@dashboard_bp.route('/api/simulate', methods=['POST'])
@login_required
def simulate():
    """Generate simulated readings for demo fields"""
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    field_ids = body.get('field_ids')
    if field_ids is not None and not (
            isinstance(field_ids, list)
            and all(isinstance(f, str) and f.strip() for f in field_ids)):
        return jsonify({'error': 'field_ids must be a list of field id strings'}), 400
    field_ids = [f.strip() for f in field_ids] if field_ids else None

    try:
        num_readings = max(1, min(int(body.get('num_readings', 5)), 50))
    except (TypeError, ValueError):
        return jsonify({'error': 'num_readings must be an integer'}), 400

    readings, raised = simulate_field_data(field_ids, num_readings=num_readings)
    return jsonify({
        'ok': True,
        'recorded': len(readings),
        'alerts_raised': len(raised),
    })
