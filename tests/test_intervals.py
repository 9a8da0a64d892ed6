################################################################################
# File Name: test_intervals.py
# Purpose/Description: Tests for interval parsing and bucket boundary alignment
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
Tests for analysis.intervals.

Run with:
    pytest tests/test_intervals.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from analysis.exceptions import AnalyticsError, InvalidArgumentError
from analysis.intervals import (
    alignTimestamp,
    intervalLabel,
    parseIntervalToken,
    resolveWidth,
    toUtc,
)
from analysis.types import IntervalToken
from common.error_handler import DataError, ErrorCategory, classifyError

UTC = timezone.utc


class TestParseIntervalToken:
    """Tests for parseIntervalToken()."""

    @pytest.mark.parametrize('token,expected', [
        ('raw', IntervalToken.RAW),
        ('1h', IntervalToken.HOUR),
        ('6h', IntervalToken.SIX_HOURS),
        ('1d', IntervalToken.DAY),
        ('1w', IntervalToken.WEEK),
        (' 1H ', IntervalToken.HOUR),
    ])
    def test_parseIntervalToken_supportedToken_returnsEnum(self, token, expected):
        """
        Given: A supported token, in any case and with surrounding spaces
        When: parseIntervalToken() is called
        Then: The matching IntervalToken is returned
        """
        assert parseIntervalToken(token) == expected

    def test_parseIntervalToken_unknownToken_raisesInvalidArgument(self):
        """
        Given: An unsupported token
        When: parseIntervalToken() is called
        Then: InvalidArgumentError names the token and the supported ones
        """
        with pytest.raises(InvalidArgumentError) as excInfo:
            parseIntervalToken('2h')

        assert "'2h'" in str(excInfo.value)
        assert '1w' in str(excInfo.value)
        assert excInfo.value.details == {'interval': '2h'}

    def test_invalidArgumentError_hierarchy_isDataError(self):
        """
        Given: An InvalidArgumentError
        When: Its hierarchy and category are inspected
        Then: It is an AnalyticsError and a DataError classified as DATA
        """
        error = InvalidArgumentError('bad')

        assert isinstance(error, AnalyticsError)
        assert isinstance(error, DataError)
        assert classifyError(error) == ErrorCategory.DATA


class TestResolveWidth:
    """Tests for resolveWidth()."""

    def test_resolveWidth_tokens_returnNominalWidths(self):
        """
        Given: Each token
        When: resolveWidth() is called
        Then: The nominal width is returned, zero for raw
        """
        assert resolveWidth('raw') == timedelta(0)
        assert resolveWidth('1h') == timedelta(hours=1)
        assert resolveWidth(IntervalToken.SIX_HOURS) == timedelta(hours=6)
        assert resolveWidth('1d') == timedelta(days=1)
        assert resolveWidth('1w') == timedelta(weeks=1)

    def test_resolveWidth_seconds_returnsTimedelta(self):
        """
        Given: A width in seconds
        When: resolveWidth() is called
        Then: The equivalent timedelta is returned
        """
        assert resolveWidth(900) == timedelta(minutes=15)
        assert resolveWidth(0) == timedelta(0)
        assert resolveWidth(1.5) == timedelta(seconds=1.5)

    @pytest.mark.parametrize('interval', [
        -1,
        timedelta(seconds=-1),
        float('inf'),
        float('nan'),
        True,
        [3600],
    ])
    def test_resolveWidth_invalidWidth_raisesInvalidArgument(self, interval):
        """
        Given: A negative, non-finite, boolean or unsupported width
        When: resolveWidth() is called
        Then: InvalidArgumentError is raised
        """
        with pytest.raises(InvalidArgumentError):
            resolveWidth(interval)

    @pytest.mark.parametrize('interval', [1e20, 10**20, 1e-7, -1e-7])
    def test_resolveWidth_unrepresentableSeconds_raisesInvalidArgument(self, interval):
        """
        Given: A finite width too large for a timedelta, or under one microsecond
        When: resolveWidth() is called
        Then: InvalidArgumentError is raised instead of overflowing or becoming raw
        """
        with pytest.raises(InvalidArgumentError):
            resolveWidth(interval)

    def test_resolveWidth_tokens_matchTokenWidth(self):
        """
        Given: Every interval token
        When: resolveWidth() is called with the token and its string
        Then: Both resolve to the token's width
        """
        for token in IntervalToken:
            assert resolveWidth(token) == token.width
            assert resolveWidth(token.value) == token.width


class TestIntervalLabel:
    """Tests for intervalLabel()."""

    def test_intervalLabel_tokenOrMatchingWidth_returnsToken(self):
        """
        Given: A token, or a width equal to a token's width
        When: intervalLabel() is called
        Then: The token value is returned
        """
        assert intervalLabel('1D') == '1d'
        assert intervalLabel(IntervalToken.RAW) == 'raw'
        assert intervalLabel(timedelta(hours=6)) == '6h'
        assert intervalLabel(3600) == '1h'

    def test_intervalLabel_customWidth_returnsSeconds(self):
        """
        Given: A width with no matching token
        When: intervalLabel() is called
        Then: The width is labelled in seconds
        """
        assert intervalLabel(timedelta(minutes=15)) == '900s'


class TestAlignTimestamp:
    """Tests for alignTimestamp()."""

    def test_alignTimestamp_hourly_floorsToTopOfHour(self):
        """
        Given: 10:15 and 10:45 on the same day
        When: Aligned to 1h
        Then: Both map to 10:00:00 UTC
        """
        expected = datetime(2026, 2, 4, 10, 0, tzinfo=UTC)

        assert alignTimestamp(datetime(2026, 2, 4, 10, 15, tzinfo=UTC), '1h') == expected
        assert alignTimestamp(datetime(2026, 2, 4, 10, 45, 59, 999999, tzinfo=UTC), '1h') == expected

    @pytest.mark.parametrize('hour,expectedHour', [
        (0, 0), (5, 0), (6, 6), (11, 6), (12, 12), (17, 12), (18, 18), (23, 18),
    ])
    def test_alignTimestamp_sixHours_floorsToQuarterDay(self, hour, expectedHour):
        """
        Given: A timestamp at each hour band
        When: Aligned to 6h
        Then: The bucket starts at 00, 06, 12 or 18 UTC
        """
        result = alignTimestamp(datetime(2026, 2, 4, hour, 30, tzinfo=UTC), '6h')

        assert result == datetime(2026, 2, 4, expectedHour, 0, tzinfo=UTC)

    def test_alignTimestamp_daily_floorsToMidnightUtc(self):
        """
        Given: A timestamp late in the day
        When: Aligned to 1d
        Then: The bucket starts at 00:00:00 UTC of that day
        """
        result = alignTimestamp(datetime(2026, 2, 4, 23, 59, 59, tzinfo=UTC), '1d')

        assert result == datetime(2026, 2, 4, tzinfo=UTC)

    def test_alignTimestamp_weeklyWednesday_mapsToPreviousSunday(self):
        """
        Given: Wednesday 2026-02-04 14:00 UTC
        When: Aligned to 1w
        Then: The bucket starts Sunday 2026-02-01 00:00 UTC
        """
        result = alignTimestamp(datetime(2026, 2, 4, 14, 0, tzinfo=UTC), '1w')

        assert result == datetime(2026, 2, 1, tzinfo=UTC)
        assert result.weekday() == 6

    def test_alignTimestamp_weeklySunday_mapsToSameDay(self):
        """
        Given: A Sunday afternoon and the following Saturday night
        When: Aligned to 1w
        Then: Both map to that Sunday's midnight
        """
        sunday = datetime(2026, 2, 1, tzinfo=UTC)

        assert alignTimestamp(datetime(2026, 2, 1, 15, 0, tzinfo=UTC), '1w') == sunday
        assert alignTimestamp(datetime(2026, 2, 7, 23, 59, tzinfo=UTC), '1w') == sunday

    def test_alignTimestamp_raw_returnsTimestampUnchanged(self):
        """
        Given: A naive timestamp
        When: Aligned to raw
        Then: The very same timestamp is returned
        """
        timestamp = datetime(2026, 2, 4, 10, 15, 7)

        assert alignTimestamp(timestamp, 'raw') is timestamp

    def test_alignTimestamp_naiveTimestamp_treatedAsUtc(self):
        """
        Given: A naive timestamp
        When: Aligned to 1h
        Then: The result is the aware UTC bucket start
        """
        result = alignTimestamp(datetime(2026, 2, 4, 10, 15), '1h')

        assert result == datetime(2026, 2, 4, 10, 0, tzinfo=UTC)
        assert result.tzinfo is not None

    def test_alignTimestamp_offsetTimestamp_alignedInUtc(self):
        """
        Given: 02:30 at UTC+05:00 (21:30 UTC the previous day)
        When: Aligned to 1d
        Then: The bucket is the previous UTC day
        """
        plusFive = timezone(timedelta(hours=5))

        result = alignTimestamp(datetime(2026, 2, 4, 2, 30, tzinfo=plusFive), '1d')

        assert result == datetime(2026, 2, 3, tzinfo=UTC)

    def test_alignTimestamp_subDayCustomWidth_floorsFromMidnight(self):
        """
        Given: A 15 minute width
        When: 10:44 is aligned
        Then: The bucket starts at 10:30
        """
        result = alignTimestamp(datetime(2026, 2, 4, 10, 44, tzinfo=UTC), timedelta(minutes=15))

        assert result == datetime(2026, 2, 4, 10, 30, tzinfo=UTC)

    def test_alignTimestamp_multiDayWidth_floorsFromEpoch(self):
        """
        Given: A two day width
        When: Consecutive days are aligned
        Then: They pair up on even day counts since 1970-01-01
        """
        width = timedelta(days=2)

        # 2026-02-04 is day 20488 since the epoch
        assert alignTimestamp(datetime(2026, 2, 4, 9, tzinfo=UTC), width) == datetime(2026, 2, 4, tzinfo=UTC)
        assert alignTimestamp(datetime(2026, 2, 5, 9, tzinfo=UTC), width) == datetime(2026, 2, 4, tzinfo=UTC)

    def test_alignTimestamp_negativeWidth_raisesInvalidArgument(self):
        """
        Given: A negative width
        When: alignTimestamp() is called
        Then: InvalidArgumentError is raised
        """
        with pytest.raises(InvalidArgumentError):
            alignTimestamp(datetime(2026, 2, 4, tzinfo=UTC), -3600)


class TestToUtc:
    """Tests for toUtc()."""

    def test_toUtc_naiveAndAware_returnsAwareUtc(self):
        """
        Given: A naive and an offset timestamp
        When: toUtc() is called
        Then: Both come back as aware UTC datetimes
        """
        naive = toUtc(datetime(2026, 2, 4, 10, 0))
        shifted = toUtc(datetime(2026, 2, 4, 10, 0, tzinfo=timezone(timedelta(hours=-2))))

        assert naive == datetime(2026, 2, 4, 10, 0, tzinfo=UTC)
        assert shifted == datetime(2026, 2, 4, 12, 0, tzinfo=UTC)
        assert shifted.tzinfo == UTC
