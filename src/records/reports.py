################################################################################
# File Name: reports.py
# Purpose/Description: Source-backed analytics reports for one owner
# Author: Michael Cornelison
# Creation Date: 2026-02-13
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-02-13    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Analytics reports backed by the record source.

Each helper resolves the relative time range, fetches fully materialized
records through TelemetryRecordSource and runs the pure analysis core:
- getMetricTrend: bucketed metric series with trend direction
- getDrivingInsights: coaching insights over recent trips and telemetry
- getPeriodComparison: current period against the previous one
- getOverview: trip, telemetry and savings summary

Usage:
    from records.reports import getMetricTrend

    report = getMetricTrend(source, 'driver-1', 'ecoScore', timeRange='30d', interval='1d')
"""

import logging
from datetime import datetime
from typing import Any

from analysis.comparison import PeriodComparison, comparePeriods, summarizePeriod
from analysis.helpers import buildInsightReport, buildOverview, buildTrendReport
from analysis.intervals import IntervalSpec, resolveWidth
from analysis.summary import DEFAULT_BASELINE_EFFICIENCY, DEFAULT_FUEL_PRICE, OverviewReport
from analysis.types import TrendReport

from .source import (
    DEFAULT_RECENT_TELEMETRY_LIMIT,
    DEFAULT_RECENT_TRIP_LIMIT,
    TelemetryRecordSource,
)
from .time_range import resolvePeriods, resolveTimeRange

logger = logging.getLogger(__name__)


def getMetricTrend(
    source: TelemetryRecordSource,
    ownerId: str,
    metric: str,
    timeRange: str | None = '30d',
    interval: IntervalSpec = '1d',
    tripId: int | None = None,
    now: datetime | None = None
) -> TrendReport:
    """
    Bucket one metric over a relative time range and classify its trend.

    Args:
        source: Record source
        ownerId: Owner of the records
        metric: Metric key (e.g., 'ecoScore', 'engineRPM')
        timeRange: Relative range token
        interval: Interval token, timedelta or seconds
        tripId: Restrict to one trip
        now: Reference instant (default: current UTC time)

    Returns:
        TrendReport

    Raises:
        InvalidArgumentError: On bad metric, interval or time range
        DatabaseError: If fetching fails
    """
    # Reject a bad interval before touching storage
    resolveWidth(interval)
    window = resolveTimeRange(timeRange, now)

    series = source.fetchMetricSeries(ownerId, metric, window.start, window.end, tripId=tripId)
    return buildTrendReport(series, interval, timeRange=timeRange)


def getDrivingInsights(
    source: TelemetryRecordSource,
    ownerId: str,
    timeRange: str | None = '30d',
    tripLimit: int = DEFAULT_RECENT_TRIP_LIMIT,
    telemetryLimit: int = DEFAULT_RECENT_TELEMETRY_LIMIT,
    now: datetime | None = None
) -> dict[str, Any]:
    """
    Generate coaching insights over the most recent records in a range.

    Args:
        source: Record source
        ownerId: Owner of the records
        timeRange: Relative range token
        tripLimit: Maximum number of recent trips considered
        telemetryLimit: Maximum number of recent telemetry rows considered
        now: Reference instant (default: current UTC time)

    Returns:
        Dictionary with 'timeRange' and ordered 'insights'

    Raises:
        InvalidArgumentError: On a bad time range
        DatabaseError: If fetching fails
    """
    window = resolveTimeRange(timeRange, now)

    trips = source.fetchRecentTrips(ownerId, window.start, limit=tripLimit)
    telemetry = source.fetchRecentTelemetry(ownerId, window.start, limit=telemetryLimit)

    logger.info(
        f"Generating insights | owner={ownerId} | trips={len(trips)} | "
        f"telemetry={len(telemetry)}"
    )
    return buildInsightReport(trips, telemetry, timeRange=timeRange)


def getPeriodComparison(
    source: TelemetryRecordSource,
    ownerId: str,
    timeRange: str | None = '30d',
    now: datetime | None = None
) -> PeriodComparison:
    """
    Compare the current range with the preceding range of equal length.

    Raises:
        InvalidArgumentError: On a bad time range
        DatabaseError: If fetching fails
    """
    current, previous = resolvePeriods(timeRange, now)

    currentTrips = source.fetchTrips(ownerId, current.start, current.end)
    previousTrips = source.fetchTrips(ownerId, previous.start, previous.end)

    return comparePeriods(
        summarizePeriod(currentTrips, current.start, current.end),
        summarizePeriod(previousTrips, previous.start, previous.end)
    )


def getOverview(
    source: TelemetryRecordSource,
    ownerId: str,
    timeRange: str | None = '30d',
    baselineEfficiency: float = DEFAULT_BASELINE_EFFICIENCY,
    fuelPrice: float = DEFAULT_FUEL_PRICE,
    now: datetime | None = None
) -> OverviewReport:
    """
    Summarize trips, telemetry and savings over a relative range.

    Raises:
        InvalidArgumentError: On a bad time range
        DatabaseError: If fetching fails
    """
    window = resolveTimeRange(timeRange, now)

    trips = source.fetchTrips(ownerId, window.start, window.end)
    telemetry = source.fetchTelemetry(ownerId, window.start, window.end)

    return buildOverview(
        trips,
        telemetry,
        baselineEfficiency=baselineEfficiency,
        fuelPrice=fuelPrice,
        timeRange=timeRange
    )
