################################################################################
# File Name: intervals.py
# Purpose/Description: Interval token parsing and bucket boundary alignment
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
Interval parsing and bucket boundary alignment.

Bucket starts follow human-readable boundaries rather than arbitrary slots:
- 1h: top of the hour
- 6h: 00:00, 06:00, 12:00, 18:00 UTC
- 1d: 00:00:00 UTC
- 1w: most recent Sunday 00:00:00 UTC
- raw: the timestamp itself

Other positive widths below one day are counted from UTC midnight of the
sample's day; widths of a day or longer are counted from the Unix epoch.
Naive timestamps are taken to be UTC.

Usage:
    from analysis.intervals import alignTimestamp

    start = alignTimestamp(datetime(2026, 2, 4, 10, 45), '1h')
"""

import math
from datetime import datetime, timedelta, timezone

from .exceptions import InvalidArgumentError
from .types import INTERVAL_WIDTHS, IntervalToken

# Interval argument as accepted by the public API
IntervalSpec = IntervalToken | str | timedelta | int | float

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(weeks=1)


def parseIntervalToken(token: str) -> IntervalToken:
    """
    Parse an interval token such as '1h' or 'raw'.

    Args:
        token: Interval token (case-insensitive)

    Returns:
        Matching IntervalToken

    Raises:
        InvalidArgumentError: If the token is not supported
    """
    try:
        return IntervalToken(token.strip().lower())
    except (ValueError, AttributeError) as e:
        supported = ', '.join(t.value for t in IntervalToken)
        raise InvalidArgumentError(
            f"Unknown interval '{token}' (supported: {supported})",
            details={'interval': token}
        ) from e


def resolveWidth(interval: IntervalSpec) -> timedelta:
    """
    Resolve any accepted interval argument to a non-negative width.

    Args:
        interval: IntervalToken, token string, timedelta or seconds

    Returns:
        Width as a timedelta (zero means raw)

    Raises:
        InvalidArgumentError: If the width is negative, non-finite, out of range,
            below one microsecond or unknown
    """
    if isinstance(interval, IntervalToken):
        return interval.width

    if isinstance(interval, str):
        return parseIntervalToken(interval).width

    if isinstance(interval, bool):
        raise InvalidArgumentError(
            f"Invalid interval width: {interval!r}",
            details={'interval': interval}
        )

    if isinstance(interval, (int, float)):
        if not math.isfinite(interval):
            raise InvalidArgumentError(
                f"Interval width must be finite, got {interval}",
                details={'interval': interval}
            )
        try:
            width = timedelta(seconds=interval)
        except (OverflowError, ValueError) as e:
            raise InvalidArgumentError(
                f"Interval width out of range: {interval} seconds",
                details={'interval': interval}
            ) from e
        # Below one microsecond rounds to zero, which would mean raw
        if interval and not width:
            raise InvalidArgumentError(
                f"Interval width below one microsecond: {interval} seconds",
                details={'interval': interval}
            )
        interval = width

    if not isinstance(interval, timedelta):
        raise InvalidArgumentError(
            f"Unsupported interval type: {type(interval).__name__}",
            details={'interval': repr(interval)}
        )

    if interval < timedelta(0):
        raise InvalidArgumentError(
            f"Interval width must not be negative, got {interval}",
            details={'interval': str(interval)}
        )

    return interval


def intervalLabel(interval: IntervalSpec) -> str:
    """Display label for an interval argument ('1h', 'raw', '900s', ...)."""
    if isinstance(interval, IntervalToken):
        return interval.value
    if isinstance(interval, str):
        return parseIntervalToken(interval).value

    width = resolveWidth(interval)
    for token, tokenWidth in INTERVAL_WIDTHS.items():
        if width == tokenWidth:
            return token.value
    return f"{width.total_seconds():g}s"


def toUtc(timestamp: datetime) -> datetime:
    """Return timestamp as an aware UTC datetime (naive means UTC)."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def alignTimestamp(timestamp: datetime, interval: IntervalSpec) -> datetime:
    """
    Return the canonical bucket start for a timestamp.

    Args:
        timestamp: Sample timestamp
        interval: Interval token, timedelta or seconds

    Returns:
        Bucket start as an aware UTC datetime, or the timestamp unchanged
        for raw (zero width) intervals

    Raises:
        InvalidArgumentError: If the interval is invalid
    """
    width = resolveWidth(interval)
    if not width:
        return timestamp

    utc = toUtc(timestamp)
    midnight = utc.replace(hour=0, minute=0, second=0, microsecond=0)

    if width == ONE_WEEK:
        # weekday(): Monday=0 ... Sunday=6
        daysSinceSunday = (utc.weekday() + 1) % 7
        return midnight - timedelta(days=daysSinceSunday)

    if width < ONE_DAY:
        return midnight + ((utc - midnight) // width) * width

    return UNIX_EPOCH + ((utc - UNIX_EPOCH) // width) * width
