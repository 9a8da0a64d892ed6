################################################################################
# File Name: aggregator.py
# Purpose/Description: Fixed-interval bucketing of metric samples
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
Interval aggregation for irregularly sampled telemetry.

Buckets the samples of one MetricSeries into fixed-width time windows and
reduces each window to its mean and sample count. Null samples are dropped
before bucketing and windows without samples are never emitted.

Usage:
    from analysis.aggregator import aggregate

    buckets = aggregate(series, '1h')
    for bucket in buckets:
        print(bucket.bucketStart, bucket.mean, bucket.count)
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from .intervals import IntervalSpec, alignTimestamp, resolveWidth
from .types import Bucket, MetricSeries, Sample

logger = logging.getLogger(__name__)


def aggregate(
    series: MetricSeries | Iterable[Sample],
    interval: IntervalSpec
) -> list[Bucket]:
    """
    Bucket a series into fixed intervals.

    Args:
        series: MetricSeries (or samples) in ascending timestamp order
        interval: Interval token ('raw', '1h', '6h', '1d', '1w'), timedelta
            or width in seconds; zero width means raw

    Returns:
        Buckets in ascending bucketStart order, one per non-empty interval.
        Raw intervals yield one bucket per sample with count 1.

    Raises:
        InvalidArgumentError: If the interval is negative, non-finite or unknown
    """
    width = resolveWidth(interval)
    if not isinstance(series, MetricSeries):
        series = MetricSeries(metric='', samples=tuple(series))
    samples = series.samples
    present = series.presentSamples()

    if len(present) != len(samples):
        logger.debug(f"Dropped {len(samples) - len(present)} null samples")

    if not width:
        return [Bucket(bucketStart=s.timestamp, mean=float(s.value), count=1) for s in present]

    sums: dict[datetime, float] = {}
    counts: dict[datetime, int] = {}
    for sample in present:
        key = alignTimestamp(sample.timestamp, width)
        sums[key] = sums.get(key, 0.0) + float(sample.value)
        counts[key] = counts.get(key, 0) + 1

    buckets = [
        Bucket(bucketStart=key, mean=sums[key] / counts[key], count=counts[key])
        for key in sorted(sums)
    ]

    logger.debug(
        f"Aggregated {len(present)} samples into {len(buckets)} buckets | width={width}"
    )
    return buckets
