################################################################################
# File Name: summary.py
# Purpose/Description: Overview summaries of trips, telemetry and savings
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
Overview summaries.

Provides:
- summarizeTrips: trip totals, averages, best/worst eco score, duration
  (best is the highest eco score and worst the lowest, since higher is better)
- summarizeTelemetry: average/min/max of every telemetry field
- calculateSavings: fuel and cost savings against a baseline consumption

Usage:
    from analysis.summary import summarizeTrips, calculateSavings

    tripStats = summarizeTrips(trips)
    savings = calculateSavings(
        tripStats.avgEfficiency, tripStats.totalFuel, tripStats.totalDistance
    )
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .calculations import meanOrNone, presentValues
from .types import TELEMETRY_FIELDS, TelemetrySample, TripSummary

# ================================================================================
# Constants
# ================================================================================

# Reference consumption used for savings (L/100km)
DEFAULT_BASELINE_EFFICIENCY = 8.5

# Fuel price per liter used for cost savings
DEFAULT_FUEL_PRICE = 1.50


# ================================================================================
# Data Classes
# ================================================================================

@dataclass(frozen=True)
class TripStatistics:
    """
    Totals and averages over a set of trips.

    Attributes:
        totalTrips: Number of trips
        totalDistance: Sum of known distances (km)
        totalFuel: Sum of known fuel volumes (L)
        avgEcoScore: Mean eco score, None without data
        avgEfficiency: Mean efficiency (L/100km), None without data
        bestEcoScore: Highest eco score, None without data
        worstEcoScore: Lowest eco score, None without data
        avgDurationHours: Mean duration of finished trips, None without data
    """
    totalTrips: int = 0
    totalDistance: float = 0.0
    totalFuel: float = 0.0
    avgEcoScore: float | None = None
    avgEfficiency: float | None = None
    bestEcoScore: float | None = None
    worstEcoScore: float | None = None
    avgDurationHours: float | None = None

    def toDict(self) -> dict[str, Any]:
        """Convert trip statistics to dictionary for serialization."""
        return {
            'totalTrips': self.totalTrips,
            'totalDistance': self.totalDistance,
            'totalFuel': self.totalFuel,
            'avgEcoScore': self.avgEcoScore,
            'avgEfficiency': self.avgEfficiency,
            'bestEcoScore': self.bestEcoScore,
            'worstEcoScore': self.worstEcoScore,
            'avgDurationHours': self.avgDurationHours,
        }


@dataclass(frozen=True)
class FieldStatistics:
    """
    Statistics for one telemetry field.

    Attributes:
        average: Mean of known readings
        minimum: Lowest known reading
        maximum: Highest known reading
        sampleCount: Number of known readings
    """
    average: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    sampleCount: int = 0

    def toDict(self) -> dict[str, Any]:
        """Convert field statistics to dictionary for serialization."""
        return {
            'average': self.average,
            'minimum': self.minimum,
            'maximum': self.maximum,
            'sampleCount': self.sampleCount,
        }


@dataclass(frozen=True)
class SavingsEstimate:
    """
    Savings against the baseline consumption.

    Attributes:
        fuelEfficiency: Percent better than baseline (never negative)
        costSavings: Money saved against baseline (never negative)
        baselineEfficiency: Baseline consumption used (L/100km)
        fuelPrice: Price per liter used
    """
    fuelEfficiency: float
    costSavings: float
    baselineEfficiency: float = DEFAULT_BASELINE_EFFICIENCY
    fuelPrice: float = DEFAULT_FUEL_PRICE

    def toDict(self) -> dict[str, Any]:
        """Convert savings to dictionary for serialization."""
        return {
            'fuelEfficiency': self.fuelEfficiency,
            'costSavings': self.costSavings,
            'baselineEfficiency': self.baselineEfficiency,
            'fuelPrice': self.fuelPrice,
        }


# ================================================================================
# Summary Functions
# ================================================================================

def summarizeTrips(trips: Sequence[TripSummary]) -> TripStatistics:
    """
    Summarize a set of trips.

    Args:
        trips: Trip summaries

    Returns:
        TripStatistics (None for figures without data)
    """
    ecoScores = presentValues(t.ecoScore for t in trips)

    return TripStatistics(
        totalTrips=len(trips),
        totalDistance=sum(presentValues(t.distance for t in trips)),
        totalFuel=sum(presentValues(t.fuelConsumed for t in trips)),
        avgEcoScore=meanOrNone(ecoScores),
        avgEfficiency=meanOrNone(t.efficiency for t in trips),
        bestEcoScore=max(ecoScores) if ecoScores else None,
        worstEcoScore=min(ecoScores) if ecoScores else None,
        avgDurationHours=meanOrNone(t.durationHours for t in trips)
    )


def summarizeTelemetry(samples: Sequence[TelemetrySample]) -> dict[str, FieldStatistics]:
    """
    Summarize every telemetry field.

    Args:
        samples: Telemetry rows

    Returns:
        Mapping of field name to FieldStatistics, in TELEMETRY_FIELDS order
    """
    summary: dict[str, FieldStatistics] = {}

    for name in TELEMETRY_FIELDS:
        values = presentValues(getattr(s, name) for s in samples)
        if not values:
            summary[name] = FieldStatistics()
            continue
        summary[name] = FieldStatistics(
            average=sum(values) / len(values),
            minimum=min(values),
            maximum=max(values),
            sampleCount=len(values)
        )

    return summary


def calculateSavings(
    avgEfficiency: float | None,
    totalFuel: float,
    totalDistance: float,
    baselineEfficiency: float = DEFAULT_BASELINE_EFFICIENCY,
    fuelPrice: float = DEFAULT_FUEL_PRICE
) -> SavingsEstimate:
    """
    Estimate fuel and cost savings against a baseline consumption.

    Args:
        avgEfficiency: Actual mean consumption (L/100km); None or 0 means
            no data and is treated as the baseline
        totalFuel: Fuel actually used (L)
        totalDistance: Distance driven (km)
        baselineEfficiency: Reference consumption (L/100km)
        fuelPrice: Price per liter

    Returns:
        SavingsEstimate with both savings clamped at zero
    """
    actualEfficiency = avgEfficiency or baselineEfficiency
    fuelSavings = (baselineEfficiency - actualEfficiency) / baselineEfficiency * 100

    actualCost = totalFuel * fuelPrice
    baselineCost = totalDistance * (baselineEfficiency / 100) * fuelPrice

    return SavingsEstimate(
        fuelEfficiency=max(0.0, fuelSavings),
        costSavings=max(0.0, baselineCost - actualCost),
        baselineEfficiency=baselineEfficiency,
        fuelPrice=fuelPrice
    )


@dataclass(frozen=True)
class OverviewReport:
    """
    Combined overview of trips, telemetry and savings.

    Attributes:
        trips: Trip totals and averages
        telemetry: Per-field telemetry statistics
        savings: Savings against the baseline consumption
        timeRange: Token or label of the covered range, if any
    """
    trips: TripStatistics
    telemetry: dict[str, FieldStatistics]
    savings: SavingsEstimate
    timeRange: str | None = None

    def toDict(self) -> dict[str, Any]:
        """Convert overview to dictionary for serialization."""
        return {
            'timeRange': self.timeRange,
            'summary': {
                'trips': self.trips.toDict(),
                'telemetry': {name: s.toDict() for name, s in self.telemetry.items()},
                'savings': self.savings.toDict(),
            },
        }
