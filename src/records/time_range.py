################################################################################
# File Name: time_range.py
# Purpose/Description: Relative time-range token resolution
# Author: Michael Cornelison
# Creation Date: 2026-02-12
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-02-12    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Resolution of relative time-range tokens ('24h', '30d', '1y', ...) into
absolute UTC bounds. The analysis core only ever receives absolute bounds.

Usage:
    from records.time_range import resolveTimeRange, resolvePeriods

    window = resolveTimeRange('7d')
    current, previous = resolvePeriods('30d')
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from analysis.exceptions import InvalidArgumentError
from analysis.intervals import toUtc

DEFAULT_TIME_RANGE = '30d'

TIME_RANGE_TOKENS: dict[str, timedelta] = {
    '1h': timedelta(hours=1),
    '6h': timedelta(hours=6),
    '24h': timedelta(hours=24),
    '7d': timedelta(days=7),
    '30d': timedelta(days=30),
    '90d': timedelta(days=90),
    '1y': timedelta(days=365),
}


@dataclass(frozen=True)
class TimeRange:
    """
    Half-open [start, end) UTC window.

    Attributes:
        start: Inclusive lower bound
        end: Exclusive upper bound
    """
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def toDict(self) -> dict[str, Any]:
        """Convert range to dictionary for serialization."""
        return {'start': self.start.isoformat(), 'end': self.end.isoformat()}


def parseTimeRangeToken(token: str | None) -> timedelta:
    """
    Look up the length of a time-range token.

    Args:
        token: Token such as '7d'; None selects the 30 day default

    Returns:
        Length of the range

    Raises:
        InvalidArgumentError: If the token is not supported
    """
    if token is None:
        token = DEFAULT_TIME_RANGE

    length = TIME_RANGE_TOKENS.get(str(token).strip().lower())
    if length is None:
        raise InvalidArgumentError(
            f"Unknown time range '{token}' "
            f"(supported: {', '.join(TIME_RANGE_TOKENS)})",
            details={'timeRange': token}
        )
    return length


def resolveTimeRange(token: str | None, now: datetime | None = None) -> TimeRange:
    """
    Resolve a token into the window ending now.

    Args:
        token: Time-range token (None for the default)
        now: Reference instant (default: current UTC time)

    Returns:
        TimeRange ending at now

    Raises:
        InvalidArgumentError: If the token is not supported
    """
    length = parseTimeRangeToken(token)
    end = toUtc(now) if now else datetime.now(timezone.utc)
    return TimeRange(start=end - length, end=end)


def resolvePeriods(
    token: str | None,
    now: datetime | None = None
) -> tuple[TimeRange, TimeRange]:
    """
    Resolve a token into the current window and the window before it.

    Args:
        token: Time-range token (None for the default)
        now: Reference instant (default: current UTC time)

    Returns:
        (current, previous) ranges of equal length, previous ending where
        current starts

    Raises:
        InvalidArgumentError: If the token is not supported
    """
    current = resolveTimeRange(token, now)
    previous = TimeRange(start=current.start - current.duration, end=current.start)
    return current, previous
