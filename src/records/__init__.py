################################################################################
# File Name: __init__.py
# Purpose/Description: Record store and source adapter package
# Author: Michael Cornelison
# Creation Date: 2026-02-12
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-02-12    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Records Package.

Storage side of the analytics system:
- SQLite record store for trips and telemetry
- Record source adapter producing immutable analysis inputs
- Relative time-range resolution
- Source-backed reports (trend, insights, comparison, overview)

Usage:
    from records import TelemetryDatabase, TelemetryRecordSource, getMetricTrend

    db = TelemetryDatabase('./data/telemetry.db')
    db.initialize()
    report = getMetricTrend(TelemetryRecordSource(db), 'driver-1', 'engineRPM', '24h', '1h')
"""

from .database import (
    ALL_INDEXES,
    ALL_SCHEMAS,
    TELEMETRY_COLUMNS,
    TRIP_COLUMNS,
    DatabaseBusyError,
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    TelemetryDatabase,
    createDatabaseFromConfig,
    initializeDatabase,
)
from .reports import getDrivingInsights, getMetricTrend, getOverview, getPeriodComparison
from .source import MetricColumn, TelemetryRecordSource, resolveMetricColumn
from .time_range import (
    DEFAULT_TIME_RANGE,
    TIME_RANGE_TOKENS,
    TimeRange,
    resolvePeriods,
    resolveTimeRange,
)

__all__ = [
    # Database
    'ALL_SCHEMAS',
    'ALL_INDEXES',
    'TELEMETRY_COLUMNS',
    'TRIP_COLUMNS',
    'DatabaseError',
    'DatabaseConnectionError',
    'DatabaseInitializationError',
    'DatabaseBusyError',
    'TelemetryDatabase',
    'createDatabaseFromConfig',
    'initializeDatabase',
    # Source
    'MetricColumn',
    'TelemetryRecordSource',
    'resolveMetricColumn',
    # Time ranges
    'DEFAULT_TIME_RANGE',
    'TIME_RANGE_TOKENS',
    'TimeRange',
    'resolveTimeRange',
    'resolvePeriods',
    # Reports
    'getMetricTrend',
    'getDrivingInsights',
    'getPeriodComparison',
    'getOverview',
]
