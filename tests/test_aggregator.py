################################################################################
# File Name: test_aggregator.py
# Purpose/Description: Tests for interval aggregation of metric series
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
Tests for analysis.aggregator.

Run with:
    pytest tests/test_aggregator.py -v
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from analysis.aggregator import aggregate
from analysis.exceptions import InvalidArgumentError
from analysis.types import Bucket, MetricSeries, Sample

UTC = timezone.utc
BASE = datetime(2026, 2, 4, 10, 0, tzinfo=UTC)


def makeSeries(offsetsAndValues: list[tuple[timedelta, float | None]]) -> MetricSeries:
    """Build a series from (offset from BASE, value) pairs."""
    return MetricSeries.fromPairs(
        'engineRPM',
        [(BASE + offset, value) for offset, value in offsetsAndValues]
    )


class TestAggregate:
    """Tests for aggregate()."""

    def test_aggregate_emptySeries_returnsEmptyList(self):
        """
        Given: A series with no samples
        When: aggregate() is called for any interval
        Then: An empty list is returned, not an error
        """
        assert aggregate(MetricSeries('engineRPM'), '1h') == []
        assert aggregate(MetricSeries('engineRPM'), 'raw') == []

    def test_aggregate_singleSample_returnsSingleBucket(self):
        """
        Given: One sample
        When: aggregate() is called with 1d
        Then: One bucket with count 1 and the sample value as mean
        """
        buckets = aggregate(makeSeries([(timedelta(hours=3), 42.0)]), '1d')

        assert buckets == [Bucket(bucketStart=datetime(2026, 2, 4, tzinfo=UTC), mean=42.0, count=1)]

    def test_aggregate_hourlyScenario_mergesIntoOneBucket(self):
        """
        Given: Samples at 10:15 and 10:45
        When: aggregate() is called with 1h
        Then: One bucket at 10:00 with the mean of both and count 2
        """
        series = makeSeries([
            (timedelta(minutes=15), 2000.0),
            (timedelta(minutes=45), 3000.0),
        ])

        buckets = aggregate(series, '1h')

        assert len(buckets) == 1
        assert buckets[0].bucketStart == BASE
        assert buckets[0].mean == 2500.0
        assert buckets[0].count == 2

    def test_aggregate_multipleBuckets_sortedAscending(self):
        """
        Given: Samples spanning three hours, supplied out of order
        When: aggregate() is called with 1h
        Then: Buckets come back sorted by start with per-hour means
        """
        series = makeSeries([
            (timedelta(hours=2, minutes=5), 30.0),
            (timedelta(minutes=5), 10.0),
            (timedelta(hours=1, minutes=5), 20.0),
            (timedelta(minutes=50), 12.0),
        ])

        buckets = aggregate(series, '1h')

        assert [b.bucketStart for b in buckets] == [
            BASE, BASE + timedelta(hours=1), BASE + timedelta(hours=2)
        ]
        assert [b.mean for b in buckets] == [11.0, 20.0, 30.0]
        assert [b.count for b in buckets] == [2, 1, 1]

    @pytest.mark.parametrize('interval', ['1h', '6h', '1d', '1w', 900, timedelta(days=3)])
    def test_aggregate_positiveWidth_coversEverySampleOnce(self, interval):
        """
        Given: Forty samples spread over ten days
        When: aggregate() is called with a positive width
        Then: Bucket counts sum to the sample count and no bucket is empty
        """
        series = makeSeries([(timedelta(hours=6 * i, minutes=7 * i), float(i)) for i in range(40)])

        buckets = aggregate(series, interval)

        assert sum(b.count for b in buckets) == len(series)
        assert all(b.count >= 1 for b in buckets)
        assert len({b.bucketStart for b in buckets}) == len(buckets)

    def test_aggregate_raw_oneBucketPerSample(self):
        """
        Given: Three samples
        When: aggregate() is called with raw
        Then: Three buckets with count 1, mean equal to the value, original timestamps
        """
        series = makeSeries([
            (timedelta(seconds=1), 5.0),
            (timedelta(seconds=2), 6.0),
            (timedelta(seconds=3), 7.0),
        ])

        buckets = aggregate(series, 'raw')

        assert len(buckets) == len(series)
        assert all(b.count == 1 for b in buckets)
        assert [b.mean for b in buckets] == [5.0, 6.0, 7.0]
        assert [b.bucketStart for b in buckets] == [s.timestamp for s in series.samples]

    def test_aggregate_zeroWidth_behavesAsRaw(self):
        """
        Given: A zero width
        When: aggregate() is called
        Then: Output equals the raw output
        """
        series = makeSeries([(timedelta(seconds=1), 5.0), (timedelta(seconds=2), 6.0)])

        assert aggregate(series, 0) == aggregate(series, 'raw')

    def test_aggregate_nullAmongSamples_excludedBeforeBucketing(self):
        """
        Given: Five numeric samples and one null, all in the same hour
        When: aggregate() is called with 1h
        Then: The null is excluded and the mean is never NaN
        """
        series = makeSeries([
            (timedelta(minutes=1), 10.0),
            (timedelta(minutes=2), 20.0),
            (timedelta(minutes=3), None),
            (timedelta(minutes=4), 30.0),
            (timedelta(minutes=5), 40.0),
            (timedelta(minutes=6), 50.0),
        ])

        buckets = aggregate(series, '1h')

        assert len(buckets) == 1
        assert buckets[0].count == 5
        assert buckets[0].mean == 30.0
        assert not math.isnan(buckets[0].mean)

    def test_aggregate_nanValue_treatedAsNull(self):
        """
        Given: A NaN sample in raw mode
        When: aggregate() is called
        Then: The NaN sample emits no bucket
        """
        series = makeSeries([(timedelta(0), float('nan')), (timedelta(seconds=1), 1.0)])

        buckets = aggregate(series, 'raw')

        assert [b.mean for b in buckets] == [1.0]

    def test_aggregate_allNull_returnsEmptyList(self):
        """
        Given: Only null samples
        When: aggregate() is called
        Then: No buckets are produced
        """
        series = makeSeries([(timedelta(0), None), (timedelta(hours=1), None)])

        assert aggregate(series, '1h') == []

    def test_aggregate_plainSampleIterable_accepted(self):
        """
        Given: A list of Sample objects instead of a MetricSeries
        When: aggregate() is called
        Then: It is bucketed the same way
        """
        samples = [Sample(BASE, 1.0), Sample(BASE + timedelta(minutes=1), 3.0)]

        buckets = aggregate(samples, '1h')

        assert buckets == [Bucket(bucketStart=BASE, mean=2.0, count=2)]

    def test_aggregate_negativeWidth_raisesInvalidArgument(self):
        """
        Given: A negative width
        When: aggregate() is called
        Then: InvalidArgumentError is raised even for an empty series
        """
        with pytest.raises(InvalidArgumentError):
            aggregate(MetricSeries('engineRPM'), timedelta(hours=-1))

    def test_aggregate_unknownToken_raisesInvalidArgument(self):
        """
        Given: An unsupported interval token
        When: aggregate() is called
        Then: InvalidArgumentError is raised
        """
        with pytest.raises(InvalidArgumentError):
            aggregate(makeSeries([(timedelta(0), 1.0)]), 'fortnight')

    def test_aggregate_hugeSecondsWidth_raisesInvalidArgument(self):
        """
        Given: A finite width of 1e20 seconds
        When: aggregate() is called
        Then: InvalidArgumentError is raised rather than OverflowError
        """
        with pytest.raises(InvalidArgumentError):
            aggregate(makeSeries([(timedelta(0), 1.0)]), 1e20)

    def test_aggregate_integerValues_meanIsFloat(self):
        """
        Given: Integer readings
        When: aggregate() is called
        Then: Means are floats
        """
        series = MetricSeries.fromPairs('vehicleSpeed', [(BASE, 1), (BASE + timedelta(minutes=1), 2)])

        buckets = aggregate(series, '1h')

        assert buckets[0].mean == 1.5
        assert isinstance(buckets[0].mean, float)


class TestMetricSeries:
    """Tests for MetricSeries helpers used by the aggregator."""

    def test_presentSamples_dropsNullAndNan(self):
        """
        Given: A series with a value, a null and a NaN
        When: presentSamples() is called
        Then: Only the usable sample remains, in order
        """
        series = makeSeries([
            (timedelta(0), 1.0),
            (timedelta(minutes=1), None),
            (timedelta(minutes=2), math.nan),
        ])

        assert series.presentSamples() == [Sample(timestamp=BASE, value=1.0)]
        assert len(series) == 3
