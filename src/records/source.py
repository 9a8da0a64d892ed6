################################################################################
# File Name: source.py
# Purpose/Description: Record source adapter feeding the analysis core
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
Record source adapter.

Reads trips and telemetry for one owner out of the SQLite record store and
hands them to the analysis core as immutable records:
- MetricSeries for trend bucketing (null readings filtered in SQL)
- TripSummary and TelemetrySample lists for insights and summaries

Metric keys are mapped through a fixed whitelist; trip metrics are keyed by
trip start time, telemetry metrics by reading timestamp. Locked-database
errors are retried with exponential backoff.

Usage:
    from records.source import TelemetryRecordSource

    source = TelemetryRecordSource(db)
    series = source.fetchMetricSeries('driver-1', 'engineRPM', start, end)
"""

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from analysis.exceptions import InvalidArgumentError
from analysis.types import MetricSeries, Sample, TelemetrySample, TripSummary
from common.error_handler import retry

from .database import (
    TELEMETRY_COLUMNS,
    TRIP_COLUMNS,
    DatabaseBusyError,
    TelemetryDatabase,
    formatTimestamp,
    parseTimestamp,
)

logger = logging.getLogger(__name__)

# Default bounds for insight input
DEFAULT_RECENT_TRIP_LIMIT = 20
DEFAULT_RECENT_TELEMETRY_LIMIT = 100

TRIP_SELECT = (
    "SELECT id, start_time, end_time, distance, fuel_consumed, efficiency, eco_score "
    "FROM trips"
)

TELEMETRY_SELECT = (
    "SELECT timestamp, " + ', '.join(TELEMETRY_COLUMNS.values()) + " FROM obd_data"
)


@dataclass(frozen=True)
class MetricColumn:
    """
    Storage location of a metric.

    Attributes:
        table: Table holding the metric
        column: Value column
        timeColumn: Column ordering the samples
        tripColumn: Column scoping rows to a trip
    """
    table: str
    column: str
    timeColumn: str
    tripColumn: str


def resolveMetricColumn(metric: str) -> MetricColumn:
    """
    Map a metric key to its storage location.

    Args:
        metric: Metric key such as 'ecoScore' or 'engineRPM'

    Returns:
        MetricColumn for the metric

    Raises:
        InvalidArgumentError: If the metric is not known
    """
    if metric in TRIP_COLUMNS:
        return MetricColumn('trips', TRIP_COLUMNS[metric], 'start_time', 'id')
    if metric in TELEMETRY_COLUMNS:
        return MetricColumn('obd_data', TELEMETRY_COLUMNS[metric], 'timestamp', 'trip_id')

    supported = ', '.join([*TRIP_COLUMNS, *TELEMETRY_COLUMNS])
    raise InvalidArgumentError(
        f"Unknown metric '{metric}' (supported: {supported})",
        details={'metric': metric}
    )


def _tripFromRow(row: sqlite3.Row) -> TripSummary:
    return TripSummary(
        ecoScore=row['eco_score'],
        efficiency=row['efficiency'],
        startTime=parseTimestamp(row['start_time']),
        endTime=parseTimestamp(row['end_time']),
        distance=row['distance'],
        fuelConsumed=row['fuel_consumed']
    )


def _telemetryFromRow(row: sqlite3.Row) -> TelemetrySample:
    readings = {name: row[column] for name, column in TELEMETRY_COLUMNS.items()}
    return TelemetrySample(timestamp=parseTimestamp(row['timestamp']), **readings)


class TelemetryRecordSource:
    """
    Read-only view over the record store for one request at a time.

    Every fetch opens its own connection and returns freshly built records,
    so concurrent callers share nothing.

    Attributes:
        database: TelemetryDatabase to read from
    """

    def __init__(self, database: TelemetryDatabase):
        """
        Initialize the record source.

        Args:
            database: Initialized TelemetryDatabase
        """
        self.database = database

    @retry(maxRetries=3, initialDelay=0.1, retryableExceptions=[DatabaseBusyError])
    def _query(self, sql: str, params: list[Any]) -> list[sqlite3.Row]:
        logger.debug(f"Query | sql={sql} | params={params}")
        with self.database.connect() as conn:
            return conn.execute(sql, params).fetchall()

    # ==========================================================================
    # Metric Series
    # ==========================================================================

    def fetchMetricSeries(
        self,
        ownerId: str,
        metric: str,
        start: datetime,
        end: datetime,
        tripId: int | None = None
    ) -> MetricSeries:
        """
        Fetch the non-null readings of one metric in [start, end).

        Args:
            ownerId: Owner of the records
            metric: Metric key (trip or telemetry metric)
            start: Inclusive lower bound
            end: Exclusive upper bound
            tripId: Restrict to one trip

        Returns:
            MetricSeries in ascending time order

        Raises:
            InvalidArgumentError: If the metric is not known
            DatabaseError: If the query fails
        """
        location = resolveMetricColumn(metric)

        sql = (
            f"SELECT {location.timeColumn} AS ts, {location.column} AS value "
            f"FROM {location.table} "
            f"WHERE user_id = ? AND {location.timeColumn} >= ? AND {location.timeColumn} < ? "
            f"AND {location.column} IS NOT NULL"
        )
        params: list[Any] = [ownerId, formatTimestamp(start), formatTimestamp(end)]
        if tripId is not None:
            sql += f" AND {location.tripColumn} = ?"
            params.append(tripId)
        sql += f" ORDER BY {location.timeColumn} ASC"

        rows = self._query(sql, params)
        logger.debug(f"Fetched {len(rows)} samples | metric={metric} | owner={ownerId}")

        return MetricSeries(
            metric=metric,
            samples=tuple(
                Sample(timestamp=parseTimestamp(row['ts']), value=row['value'])
                for row in rows
            ),
            tripId=tripId
        )

    # ==========================================================================
    # Trips
    # ==========================================================================

    def fetchTrips(self, ownerId: str, start: datetime, end: datetime) -> list[TripSummary]:
        """
        Fetch trips that started in [start, end), oldest first.

        Raises:
            DatabaseError: If the query fails
        """
        rows = self._query(
            f"{TRIP_SELECT} WHERE user_id = ? AND start_time >= ? AND start_time < ? "
            "ORDER BY start_time ASC",
            [ownerId, formatTimestamp(start), formatTimestamp(end)]
        )
        return [_tripFromRow(row) for row in rows]

    def fetchRecentTrips(
        self,
        ownerId: str,
        since: datetime,
        limit: int = DEFAULT_RECENT_TRIP_LIMIT
    ) -> list[TripSummary]:
        """
        Fetch the most recent trips started at or after since, newest first.

        Raises:
            DatabaseError: If the query fails
        """
        rows = self._query(
            f"{TRIP_SELECT} WHERE user_id = ? AND start_time >= ? "
            "ORDER BY start_time DESC LIMIT ?",
            [ownerId, formatTimestamp(since), limit]
        )
        return [_tripFromRow(row) for row in rows]

    # ==========================================================================
    # Telemetry
    # ==========================================================================

    def fetchTelemetry(
        self,
        ownerId: str,
        start: datetime,
        end: datetime,
        tripId: int | None = None
    ) -> list[TelemetrySample]:
        """
        Fetch telemetry rows in [start, end), oldest first.

        Raises:
            DatabaseError: If the query fails
        """
        sql = f"{TELEMETRY_SELECT} WHERE user_id = ? AND timestamp >= ? AND timestamp < ?"
        params: list[Any] = [ownerId, formatTimestamp(start), formatTimestamp(end)]
        if tripId is not None:
            sql += " AND trip_id = ?"
            params.append(tripId)
        sql += " ORDER BY timestamp ASC"

        return [_telemetryFromRow(row) for row in self._query(sql, params)]

    def fetchRecentTelemetry(
        self,
        ownerId: str,
        since: datetime,
        limit: int = DEFAULT_RECENT_TELEMETRY_LIMIT
    ) -> list[TelemetrySample]:
        """
        Fetch the most recent telemetry rows at or after since, newest first.

        Raises:
            DatabaseError: If the query fails
        """
        rows = self._query(
            f"{TELEMETRY_SELECT} WHERE user_id = ? AND timestamp >= ? "
            "ORDER BY timestamp DESC LIMIT ?",
            [ownerId, formatTimestamp(since), limit]
        )
        return [_telemetryFromRow(row) for row in rows]
