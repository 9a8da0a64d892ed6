################################################################################
# File Name: types.py
# Purpose/Description: Type definitions for the telemetry analysis subpackage
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial creation for US-010 refactoring
# 2026-02-09    | M. Cornelison | Replaced statistics types with bucket/trend/insight records
# ================================================================================
################################################################################

"""
Type definitions for the analysis subpackage.

Provides:
- IntervalToken enum for the supported bucket widths
- TrendDirection, InsightKind and InsightPriority enums
- Sample and MetricSeries input records
- TripSummary and TelemetrySample records consumed by the insight rules
- Bucket, TrendResult and Insight output records

All records are frozen: they are produced, used and discarded within a single
evaluation. These types have no dependencies on other project modules (only stdlib).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

# ================================================================================
# Enums
# ================================================================================

class IntervalToken(Enum):
    """Named bucket widths accepted by the aggregator."""
    RAW = 'raw'
    HOUR = '1h'
    SIX_HOURS = '6h'
    DAY = '1d'
    WEEK = '1w'

    @property
    def width(self) -> timedelta:
        """Nominal width of the interval (zero for raw)."""
        return INTERVAL_WIDTHS[self]


INTERVAL_WIDTHS: dict[IntervalToken, timedelta] = {
    IntervalToken.RAW: timedelta(0),
    IntervalToken.HOUR: timedelta(hours=1),
    IntervalToken.SIX_HOURS: timedelta(hours=6),
    IntervalToken.DAY: timedelta(days=1),
    IntervalToken.WEEK: timedelta(weeks=1),
}


class TrendDirection(Enum):
    """Overall direction of a bucketed series."""
    IMPROVING = 'improving'
    DECLINING = 'declining'
    STABLE = 'stable'


class InsightKind(Enum):
    """Presentation category of a coaching insight."""
    WARNING = 'warning'
    SUCCESS = 'success'
    TIP = 'tip'
    INFO = 'info'


class InsightPriority(Enum):
    """Priority of a coaching insight."""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


# ================================================================================
# Helpers
# ================================================================================

def isPresent(value: float | None) -> bool:
    """True when a telemetry value is neither null nor NaN."""
    return value is not None and not (isinstance(value, float) and math.isnan(value))


def _isoOrNone(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


# ================================================================================
# Input Records
# ================================================================================

@dataclass(frozen=True)
class Sample:
    """
    One timestamped reading of a metric.

    Attributes:
        timestamp: When the reading was taken
        value: Reading value, None when the metric was absent at that instant
    """
    timestamp: datetime
    value: float | None = None

    @property
    def hasValue(self) -> bool:
        """Check if the sample carries a usable value."""
        return isPresent(self.value)


@dataclass(frozen=True)
class MetricSeries:
    """
    Time-ordered samples for exactly one named metric.

    Attributes:
        metric: Metric key (e.g., 'engineRPM'), used for display only
        samples: Samples in ascending timestamp order
        tripId: Trip the series is scoped to, if any
    """
    metric: str
    samples: tuple[Sample, ...] = ()
    tripId: int | None = None

    def __len__(self) -> int:
        return len(self.samples)

    def presentSamples(self) -> list[Sample]:
        """Samples with a usable value, nulls removed."""
        return [s for s in self.samples if s.hasValue]

    @classmethod
    def fromPairs(
        cls,
        metric: str,
        pairs: list[tuple[datetime, float | None]],
        tripId: int | None = None
    ) -> 'MetricSeries':
        """Build a series from (timestamp, value) pairs."""
        return cls(
            metric=metric,
            samples=tuple(Sample(timestamp=ts, value=v) for ts, v in pairs),
            tripId=tripId
        )


@dataclass(frozen=True)
class TripSummary:
    """
    Per-trip figures used by insights and summaries.

    Attributes:
        ecoScore: Synthetic 0-100 efficiency rating
        efficiency: Fuel consumption in L/100km
        startTime: Trip start
        endTime: Trip end (None while the trip is active)
        distance: Distance in kilometers
        fuelConsumed: Fuel used in liters
    """
    ecoScore: float | None = None
    efficiency: float | None = None
    startTime: datetime | None = None
    endTime: datetime | None = None
    distance: float | None = None
    fuelConsumed: float | None = None

    @property
    def durationHours(self) -> float | None:
        """Trip duration in hours, None when either end is unknown."""
        if self.startTime is None or self.endTime is None:
            return None
        return (self.endTime - self.startTime).total_seconds() / 3600

    def toDict(self) -> dict[str, Any]:
        """Convert trip summary to dictionary for serialization."""
        return {
            'ecoScore': self.ecoScore,
            'efficiency': self.efficiency,
            'startTime': _isoOrNone(self.startTime),
            'endTime': _isoOrNone(self.endTime),
            'distance': self.distance,
            'fuelConsumed': self.fuelConsumed,
        }


# Telemetry fields summarized by the overview
TELEMETRY_FIELDS: tuple[str, ...] = (
    'engineRPM',
    'vehicleSpeed',
    'engineLoad',
    'throttlePosition',
    'fuelLevel',
    'engineTemp',
    'batteryVoltage',
    'fuelConsumption',
)


@dataclass(frozen=True)
class TelemetrySample:
    """
    One row of vehicle telemetry; every reading is optional.

    Attributes:
        engineRPM: Engine speed
        throttlePosition: Throttle opening, 0-100
        timestamp: When the row was recorded
        vehicleSpeed: km/h
        engineLoad: Percentage
        fuelLevel: Percentage
        engineTemp: Celsius
        batteryVoltage: Volts
        fuelConsumption: L/100km
    """
    engineRPM: float | None = None
    throttlePosition: float | None = None
    timestamp: datetime | None = None
    vehicleSpeed: float | None = None
    engineLoad: float | None = None
    fuelLevel: float | None = None
    engineTemp: float | None = None
    batteryVoltage: float | None = None
    fuelConsumption: float | None = None

    def toDict(self) -> dict[str, Any]:
        """Convert telemetry sample to dictionary for serialization."""
        data: dict[str, Any] = {'timestamp': _isoOrNone(self.timestamp)}
        for name in TELEMETRY_FIELDS:
            data[name] = getattr(self, name)
        return data


# ================================================================================
# Output Records
# ================================================================================

@dataclass(frozen=True)
class Bucket:
    """
    Aggregate of the samples falling into one interval.

    Attributes:
        bucketStart: Canonical start of the interval
        mean: Mean of the contributing values
        count: Number of contributing samples (always >= 1)
    """
    bucketStart: datetime
    mean: float
    count: int

    def toDict(self) -> dict[str, Any]:
        """Convert bucket to dictionary for serialization."""
        return {
            'timestamp': self.bucketStart.isoformat(),
            'value': self.mean,
            'count': self.count,
        }


@dataclass(frozen=True)
class TrendResult:
    """
    Trend classification of a bucketed series.

    Attributes:
        direction: Improving, declining or stable
        percentChange: Change of the recent window against the older one
        recentMean: Mean of the recent window
        olderMean: Mean of the older window
    """
    direction: TrendDirection
    percentChange: float | None = None
    recentMean: float | None = None
    olderMean: float | None = None

    def toDict(self) -> dict[str, Any]:
        """Convert trend to dictionary for serialization."""
        return {
            'direction': self.direction.value,
            'percentChange': self.percentChange,
            'recentMean': self.recentMean,
            'olderMean': self.olderMean,
        }


@dataclass(frozen=True)
class Insight:
    """
    Rule-derived coaching observation.

    Attributes:
        kind: Presentation category
        title: Short headline
        message: Human-readable advice
        priority: How prominently to surface the insight
    """
    kind: InsightKind
    title: str
    message: str
    priority: InsightPriority

    def toDict(self) -> dict[str, Any]:
        """Convert insight to dictionary for serialization."""
        return {
            'type': self.kind.value,
            'title': self.title,
            'message': self.message,
            'priority': self.priority.value,
        }


@dataclass(frozen=True)
class TrendReport:
    """
    Bucketed series together with its trend.

    Attributes:
        metric: Metric key of the series
        interval: Interval token or width label used for bucketing
        trend: Trend classification
        buckets: Bucketed values in ascending time order
        timeRange: Token of the covered range, if any
    """
    metric: str
    interval: str
    trend: TrendResult
    buckets: tuple[Bucket, ...] = field(default_factory=tuple)
    timeRange: str | None = None

    def toDict(self) -> dict[str, Any]:
        """Convert report to dictionary for serialization."""
        return {
            'metric': self.metric,
            'timeRange': self.timeRange,
            'interval': self.interval,
            'trendDirection': self.trend.direction.value,
            'trend': self.trend.toDict(),
            'data': [b.toDict() for b in self.buckets],
        }
