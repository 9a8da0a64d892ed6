################################################################################
# File Name: comparison.py
# Purpose/Description: Period-over-period comparison of trip statistics
# Author: Michael Cornelison
# Creation Date: 2026-02-11
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-02-11    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Period comparison.

Summarizes the trips of two periods (typically the current time range and
the preceding range of equal length) and reports the percentage change of
each figure. A change against a zero reference is reported as 0.

Usage:
    from analysis.comparison import summarizePeriod, comparePeriods

    comparison = comparePeriods(
        summarizePeriod(currentTrips),
        summarizePeriod(previousTrips)
    )
    print(comparison.changes['avgEcoScore'])
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .calculations import calculatePercentChange, meanOrNone, presentValues
from .types import TripSummary

# Figures compared between periods, in report order
COMPARED_FIELDS: tuple[str, ...] = (
    'totalTrips',
    'totalDistance',
    'totalFuel',
    'avgEcoScore',
    'avgEfficiency',
)


@dataclass(frozen=True)
class PeriodStats:
    """
    Trip figures for one period.

    Attributes:
        totalTrips: Number of trips
        totalDistance: Sum of known distances (km)
        totalFuel: Sum of known fuel volumes (L)
        avgEcoScore: Mean of known eco scores, 0 when none
        avgEfficiency: Mean of known efficiencies (L/100km), 0 when none
        start: Period start, if known
        end: Period end, if known
    """
    totalTrips: int = 0
    totalDistance: float = 0.0
    totalFuel: float = 0.0
    avgEcoScore: float = 0.0
    avgEfficiency: float = 0.0
    start: datetime | None = None
    end: datetime | None = None

    def toDict(self) -> dict[str, Any]:
        """Convert period stats to dictionary for serialization."""
        return {
            'start': self.start.isoformat() if self.start else None,
            'end': self.end.isoformat() if self.end else None,
            'stats': {name: getattr(self, name) for name in COMPARED_FIELDS},
        }


@dataclass(frozen=True)
class PeriodComparison:
    """
    Current period against previous period.

    Attributes:
        currentPeriod: Figures for the current period
        previousPeriod: Figures for the previous period
        changes: Percentage change per compared figure
    """
    currentPeriod: PeriodStats
    previousPeriod: PeriodStats
    changes: dict[str, float] = field(default_factory=dict)

    def toDict(self) -> dict[str, Any]:
        """Convert comparison to dictionary for serialization."""
        return {
            'currentPeriod': self.currentPeriod.toDict(),
            'previousPeriod': self.previousPeriod.toDict(),
            'changes': dict(self.changes),
        }


def summarizePeriod(
    trips: Sequence[TripSummary],
    start: datetime | None = None,
    end: datetime | None = None
) -> PeriodStats:
    """
    Summarize the trips of one period.

    Args:
        trips: Trips that started inside the period
        start: Period start (informational)
        end: Period end (informational)

    Returns:
        PeriodStats with zeros for figures that have no data
    """
    avgEcoScore = meanOrNone(t.ecoScore for t in trips)
    avgEfficiency = meanOrNone(t.efficiency for t in trips)

    return PeriodStats(
        totalTrips=len(trips),
        totalDistance=sum(presentValues(t.distance for t in trips)),
        totalFuel=sum(presentValues(t.fuelConsumed for t in trips)),
        avgEcoScore=avgEcoScore if avgEcoScore is not None else 0.0,
        avgEfficiency=avgEfficiency if avgEfficiency is not None else 0.0,
        start=start,
        end=end
    )


def comparePeriods(current: PeriodStats, previous: PeriodStats) -> PeriodComparison:
    """
    Compare two period summaries.

    Args:
        current: Figures for the current period
        previous: Figures for the previous period

    Returns:
        PeriodComparison with per-figure percentage changes
    """
    changes = {
        name: calculatePercentChange(getattr(current, name), getattr(previous, name))
        for name in COMPARED_FIELDS
    }
    return PeriodComparison(
        currentPeriod=current,
        previousPeriod=previous,
        changes=changes
    )
