################################################################################
# File Name: helpers.py
# Purpose/Description: Pipeline helpers composing the analysis components
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial creation for US-010 refactoring
# 2026-02-13    | M. Cornelison | Replaced engine factories with pure report builders
# ================================================================================
################################################################################

"""
Pipeline helpers for the analysis subpackage.

Provides:
- buildTrendReport: aggregate a series and classify its trend
- buildInsightReport: generate insights as plain dictionaries
- buildOverview: trip, telemetry and savings summary in one report

All helpers are pure: they take already fetched records and never touch
storage.
"""

import logging
from collections.abc import Sequence
from typing import Any

from .aggregator import aggregate
from .insights import generate
from .intervals import IntervalSpec, intervalLabel
from .summary import (
    DEFAULT_BASELINE_EFFICIENCY,
    DEFAULT_FUEL_PRICE,
    OverviewReport,
    calculateSavings,
    summarizeTelemetry,
    summarizeTrips,
)
from .trend import classify
from .types import MetricSeries, TelemetrySample, TrendReport, TripSummary

logger = logging.getLogger(__name__)


def buildTrendReport(
    series: MetricSeries,
    interval: IntervalSpec,
    timeRange: str | None = None
) -> TrendReport:
    """
    Bucket a series and classify its trend.

    Args:
        series: Metric series in ascending time order
        interval: Interval token, timedelta or seconds
        timeRange: Token of the covered range, if any

    Returns:
        TrendReport with buckets and trend

    Raises:
        InvalidArgumentError: If the interval is invalid
    """
    buckets = aggregate(series, interval)
    trend = classify(buckets)

    logger.info(
        f"Trend report | metric={series.metric} | samples={len(series)} | "
        f"buckets={len(buckets)} | direction={trend.direction.value}"
    )

    return TrendReport(
        metric=series.metric,
        interval=intervalLabel(interval),
        trend=trend,
        buckets=tuple(buckets),
        timeRange=timeRange
    )


def buildInsightReport(
    trips: Sequence[TripSummary],
    telemetry: Sequence[TelemetrySample],
    timeRange: str | None = None
) -> dict[str, Any]:
    """
    Generate insights and wrap them for serialization.

    Args:
        trips: Recent trips
        telemetry: Recent telemetry rows
        timeRange: Token of the covered range, if any

    Returns:
        Dictionary with 'timeRange' and ordered 'insights'
    """
    insights = generate(trips, telemetry)
    return {
        'timeRange': timeRange,
        'insights': [insight.toDict() for insight in insights],
    }


def buildOverview(
    trips: Sequence[TripSummary],
    telemetry: Sequence[TelemetrySample],
    baselineEfficiency: float = DEFAULT_BASELINE_EFFICIENCY,
    fuelPrice: float = DEFAULT_FUEL_PRICE,
    timeRange: str | None = None
) -> OverviewReport:
    """
    Summarize trips, telemetry and savings.

    Args:
        trips: Trips in the range
        telemetry: Telemetry rows in the range
        baselineEfficiency: Reference consumption (L/100km)
        fuelPrice: Price per liter
        timeRange: Token of the covered range, if any

    Returns:
        OverviewReport
    """
    tripStats = summarizeTrips(trips)
    savings = calculateSavings(
        tripStats.avgEfficiency,
        tripStats.totalFuel,
        tripStats.totalDistance,
        baselineEfficiency=baselineEfficiency,
        fuelPrice=fuelPrice
    )
    return OverviewReport(
        trips=tripStats,
        telemetry=summarizeTelemetry(telemetry),
        savings=savings,
        timeRange=timeRange
    )
