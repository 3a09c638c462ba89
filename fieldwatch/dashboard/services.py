"""
Dashboard Services

Display-ready payloads built from the aggregator and the alert store.
"""

from datetime import datetime, timezone

from fieldwatch.services.classifier import health_status, risk_status, severity_status


def _format_change(delta, suffix='', digits=2):
    if delta is None:
        return None
    if digits == 0:
        text = f'{int(round(delta)):+d}'
    else:
        text = f'{delta:+.{digits}f}'
    return text + suffix


def _change_type(delta, lower_is_better=False):
    if delta is None or delta == 0:
        return 'neutral'
    improved = delta < 0 if lower_is_better else delta > 0
    return 'positive' if improved else 'negative'


def build_stat_cards(fleet):
    """Build the four summary cards from a FleetSummary."""
    delta = (fleet.deltas or {}).get

    return [
        {
            'key': 'field_count',
            'label': 'Total Fields',
            'value': str(fleet.field_count),
            'change': _format_change(delta('field_count'), digits=0),
            'change_type': _change_type(delta('field_count')),
        },
        {
            'key': 'avg_ndvi',
            'label': 'Avg NDVI',
            'value': f'{fleet.avg_ndvi:.2f}',
            'change': _format_change(delta('avg_ndvi')),
            'change_type': _change_type(delta('avg_ndvi')),
        },
        {
            'key': 'active_alert_count',
            'label': 'Active Alerts',
            'value': str(fleet.active_alert_count),
            'change': _format_change(delta('active_alert_count'), digits=0),
            'change_type': _change_type(delta('active_alert_count'), lower_is_better=True),
        },
        {
            'key': 'avg_soil_health_pct',
            'label': 'Soil Health',
            'value': f'{fleet.avg_soil_health_pct:.0f}%',
            'change': _format_change(delta('avg_soil_health_pct'), suffix='%', digits=0),
            'change_type': _change_type(delta('avg_soil_health_pct')),
        },
    ]


def field_card(summary):
    """Serialize a FieldSummary with its badges."""
    data = summary.to_dict()
    data['health_status'] = health_status(summary.health_tier)
    data['risk_status'] = risk_status(summary.risk_tier)
    return data


def risk_grid(summaries):
    """One tile per field: risk score as a percentage and its tier."""
    tiles = []
    for s in summaries:
        tiles.append({
            'field_id': s.field_id,
            'risk_score': s.risk_score,
            'risk_pct': int(round(s.risk_score * 100)),
            'risk_tier': s.risk_tier.value,
            'status': risk_status(s.risk_tier),
        })
    return tiles


def time_ago(moment, now=None):
    """Relative time label like '2 min ago'."""
    now = now or datetime.now(timezone.utc)
    seconds = max(0, int((now - moment).total_seconds()))
    if seconds < 60:
        return 'just now'
    minutes = seconds // 60
    if minutes < 60:
        return f'{minutes} min ago'
    hours = minutes // 60
    if hours < 24:
        return f'{hours} hour ago' if hours == 1 else f'{hours} hours ago'
    days = hours // 24
    return f'{days} day ago' if days == 1 else f'{days} days ago'


def alert_feed(alerts, now=None):
    """Serialize alerts for the notification panel."""
    feed = []
    for alert in alerts:
        item = alert.to_dict()
        item['time'] = time_ago(alert.created_at, now)
        item['status'] = severity_status(alert.severity)
        feed.append(item)
    return feed
