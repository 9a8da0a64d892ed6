################################################################################
# File Name: trend.py
# Purpose/Description: Trend direction classification over bucketed series
# Author: Michael Cornelison
# Creation Date: 2026-02-09
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-02-09    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Trend classification.

Compares the mean of the most recent buckets against the mean of the oldest
buckets that precede them and labels the change improving, declining or
stable. Changes inside the +/-5% deadband are stable.

Usage:
    from analysis.trend import classify

    result = classify(buckets)
    print(result.direction.value)
"""

import logging
from collections.abc import Sequence

from .calculations import calculateMean
from .types import Bucket, TrendDirection, TrendResult

logger = logging.getLogger(__name__)

# ================================================================================
# Constants
# ================================================================================

# Buckets per comparison window
TREND_WINDOW_SIZE = 5

# Deadband in percent
TREND_THRESHOLD_PERCENT = 5.0


def classify(buckets: Sequence[Bucket]) -> TrendResult:
    """
    Classify the trend of an ascending bucket sequence.

    The recent window is the last min(5, N) buckets; the older window is
    the first min(5, N - 5) buckets, so the two never overlap.

    Args:
        buckets: Buckets in ascending bucketStart order

    Returns:
        TrendResult; STABLE when there are fewer than 2 buckets, either
        window is empty or the older mean is zero
    """
    count = len(buckets)
    if count < 2:
        return TrendResult(direction=TrendDirection.STABLE)

    recentValues = [b.mean for b in buckets[-TREND_WINDOW_SIZE:]]
    olderValues = [b.mean for b in buckets[:max(0, min(TREND_WINDOW_SIZE, count - TREND_WINDOW_SIZE))]]

    if not recentValues or not olderValues:
        return TrendResult(direction=TrendDirection.STABLE)

    recentMean = calculateMean(recentValues)
    olderMean = calculateMean(olderValues)

    if olderMean == 0:
        return TrendResult(
            direction=TrendDirection.STABLE,
            recentMean=recentMean,
            olderMean=olderMean
        )

    percentChange = (recentMean - olderMean) / olderMean * 100

    if percentChange > TREND_THRESHOLD_PERCENT:
        direction = TrendDirection.IMPROVING
    elif percentChange < -TREND_THRESHOLD_PERCENT:
        direction = TrendDirection.DECLINING
    else:
        direction = TrendDirection.STABLE

    logger.debug(
        f"Trend {direction.value} | recent={recentMean:.3f} | "
        f"older={olderMean:.3f} | change={percentChange:.1f}%"
    )

    return TrendResult(
        direction=direction,
        percentChange=percentChange,
        recentMean=recentMean,
        olderMean=olderMean
    )
