"""
Reading Ingest

Single entry point for new readings, shared by the API and the simulator:
append to history, update the latest-value table, check thresholds.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from fieldwatch.extensions import db, get_aggregator, get_threshold_monitor
from fieldwatch.services.history import append_reading

logger = logging.getLogger(__name__)


def ingest_readings(readings, aggregator=None, monitor=None):
    """Record readings and return the alerts they raised.

    History is committed first. If the commit fails the session is rolled
    back and nothing in memory changes. Only readings that become the latest
    value for their field and metric are checked against thresholds.

    Args:
        readings: iterable of Reading
        aggregator: FieldAggregator (default: the current app's)
        monitor: ThresholdMonitor (default: the current app's)

    Returns:
        list of Alert raised while ingesting

    Raises:
        SQLAlchemyError: if the history commit fails
    """
    aggregator = aggregator or get_aggregator()
    monitor = monitor or get_threshold_monitor()
    readings = list(readings)

    try:
        for reading in readings:
            append_reading(reading, commit=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Failed to persist %d readings', len(readings))
        raise

    raised = []
    for reading in readings:
        if aggregator.record_reading(reading):
            raised.extend(monitor.evaluate(reading))

    logger.debug('Ingested %d readings, raised %d alerts', len(readings), len(raised))
    return raised
