################################################################################
# File Name: calculations.py
# Purpose/Description: Pure calculation functions shared by the analysis modules
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial creation for US-010 refactoring
# 2026-02-09    | M. Cornelison | Null-aware mean, ratio and percent change helpers
# ================================================================================
################################################################################

"""
Pure calculation functions for telemetry analysis.

Provides:
- presentValues: Drop null/NaN readings from a value list
- calculateMean: Arithmetic mean of values
- meanOrNone: Mean of the non-null values, None when there are none
- calculateRatio: Share of non-null values matching a predicate
- calculatePercentChange: Relative change between two values

These are pure functions with no side effects.
"""

from collections.abc import Callable, Iterable

from .types import isPresent


def presentValues(values: Iterable[float | None]) -> list[float]:
    """
    Drop null and NaN readings.

    Args:
        values: Possibly sparse readings

    Returns:
        List of usable values, order preserved
    """
    return [float(v) for v in values if isPresent(v)]


def calculateMean(values: list[float]) -> float:
    """
    Calculate arithmetic mean of values.

    Args:
        values: List of numeric values

    Returns:
        Mean value

    Raises:
        ValueError: If values list is empty
    """
    if not values:
        raise ValueError("Cannot calculate mean of empty list")
    return sum(values) / len(values)


def meanOrNone(values: Iterable[float | None]) -> float | None:
    """Mean of the non-null values, or None when there are none."""
    present = presentValues(values)
    if not present:
        return None
    return calculateMean(present)


def calculateRatio(
    values: Iterable[float | None],
    predicate: Callable[[float], bool]
) -> float | None:
    """
    Share of non-null values for which predicate holds.

    Args:
        values: Possibly sparse readings
        predicate: Test applied to each present value

    Returns:
        Ratio in [0, 1], or None when no value is present
    """
    present = presentValues(values)
    if not present:
        return None
    return sum(1 for v in present if predicate(v)) / len(present)


def calculatePercentChange(current: float, previous: float) -> float:
    """
    Relative change from previous to current, in percent.

    Args:
        current: New value
        previous: Reference value

    Returns:
        Percentage change, 0.0 when the reference is zero
    """
    if not previous:
        return 0.0
    return ((current - previous) / previous) * 100
