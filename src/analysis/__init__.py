################################################################################
# File Name: __init__.py
# Purpose/Description: Analysis subpackage for telemetry aggregation and insights
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial subpackage creation (US-001)
# 2026-01-22    | Ralph Agent  | Added all exports for US-010 refactoring
# 2026-02-13    | M. Cornelison | Exports for aggregation, trend and insight engine
# ================================================================================
################################################################################
"""
Analysis Subpackage.

This subpackage contains the telemetry aggregation and insight engine:
- Interval bucketing of metric series (raw, 1h, 6h, 1d, 1w or any width)
- Trend classification with a +/-5% deadband
- Rule-based coaching insights
- Period comparison and overview summaries

Every function here is pure: inputs are already fetched records, outputs are
frozen dataclasses.

Usage:
    from analysis import aggregate, classify, generate

    buckets = aggregate(series, '1d')
    trend = classify(buckets)
    insights = generate(recentTrips, recentTelemetry)
"""

# Pure aggregation and classification
from .aggregator import aggregate

# Calculation helpers
from .calculations import (
    calculateMean,
    calculatePercentChange,
    calculateRatio,
    meanOrNone,
    presentValues,
)

# Period comparison
from .comparison import (
    COMPARED_FIELDS,
    PeriodComparison,
    PeriodStats,
    comparePeriods,
    summarizePeriod,
)

# Exceptions
from .exceptions import AnalyticsError, InvalidArgumentError

# Helpers
from .helpers import buildInsightReport, buildOverview, buildTrendReport
from .insights import generate
from .intervals import (
    alignTimestamp,
    intervalLabel,
    parseIntervalToken,
    resolveWidth,
    toUtc,
)

# Overview summaries
from .summary import (
    DEFAULT_BASELINE_EFFICIENCY,
    DEFAULT_FUEL_PRICE,
    FieldStatistics,
    OverviewReport,
    SavingsEstimate,
    TripStatistics,
    calculateSavings,
    summarizeTelemetry,
    summarizeTrips,
)
from .trend import TREND_THRESHOLD_PERCENT, TREND_WINDOW_SIZE, classify

# Types
from .types import (
    TELEMETRY_FIELDS,
    Bucket,
    Insight,
    InsightKind,
    InsightPriority,
    IntervalToken,
    MetricSeries,
    Sample,
    TelemetrySample,
    TrendDirection,
    TrendReport,
    TrendResult,
    TripSummary,
)

__all__ = [
    # Types
    'IntervalToken',
    'TrendDirection',
    'InsightKind',
    'InsightPriority',
    'Sample',
    'MetricSeries',
    'TripSummary',
    'TelemetrySample',
    'TELEMETRY_FIELDS',
    'Bucket',
    'TrendResult',
    'TrendReport',
    'Insight',
    # Exceptions
    'AnalyticsError',
    'InvalidArgumentError',
    # Intervals
    'alignTimestamp',
    'intervalLabel',
    'parseIntervalToken',
    'resolveWidth',
    'toUtc',
    # Calculation functions
    'calculateMean',
    'calculatePercentChange',
    'calculateRatio',
    'meanOrNone',
    'presentValues',
    # Core components
    'aggregate',
    'classify',
    'generate',
    'TREND_WINDOW_SIZE',
    'TREND_THRESHOLD_PERCENT',
    # Comparison
    'COMPARED_FIELDS',
    'PeriodStats',
    'PeriodComparison',
    'summarizePeriod',
    'comparePeriods',
    # Summary
    'DEFAULT_BASELINE_EFFICIENCY',
    'DEFAULT_FUEL_PRICE',
    'TripStatistics',
    'FieldStatistics',
    'SavingsEstimate',
    'OverviewReport',
    'summarizeTrips',
    'summarizeTelemetry',
    'calculateSavings',
    # Helpers
    'buildTrendReport',
    'buildInsightReport',
    'buildOverview',
]
