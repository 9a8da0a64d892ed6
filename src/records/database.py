################################################################################
# File Name: database.py
# Purpose/Description: SQLite record store for trips and vehicle telemetry
# Author: Michael Cornelison
# Creation Date: 2026-01-22
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | M. Cornelison | Initial implementation for US-002
# 2026-02-12    | M. Cornelison | Reduced schema to trips/obd_data, added busy error
# ================================================================================
################################################################################

"""
SQLite record store for the telemetry analytics system.

Provides:
- Database initialization with the trips and obd_data tables
- WAL mode configuration for concurrent readers
- Connection management with context managers
- Row insertion helpers used by ingestion jobs and tests

Tables:
- trips: One row per trip with distance, fuel, efficiency and eco score
- obd_data: Timestamped telemetry rows, optionally linked to a trip

Timestamps are stored as UTC ISO-8601 text so range filters compare
lexicographically.

Usage:
    from records.database import TelemetryDatabase

    db = TelemetryDatabase('./data/telemetry.db')
    db.initialize()

    with db.connect() as conn:
        rows = conn.execute('SELECT * FROM trips').fetchall()
"""

import logging
import os
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from analysis.intervals import toUtc
from common.error_handler import BaseError, ErrorCategory, RetryableError, isLockedDatabaseError

logger = logging.getLogger(__name__)


# ================================================================================
# Custom Exceptions
# ================================================================================

class DatabaseError(BaseError):
    """Base exception for database-related errors."""
    pass


class DatabaseConnectionError(DatabaseError):
    """Error connecting to or querying the database."""
    pass


class DatabaseInitializationError(DatabaseError):
    """Error initializing the database schema."""
    pass


class DatabaseBusyError(DatabaseError, RetryableError):
    """Database is locked by another writer; safe to retry."""
    category = ErrorCategory.RETRYABLE


# ================================================================================
# Schema Definitions
# ================================================================================

SCHEMA_TRIPS = """
CREATE TABLE IF NOT EXISTS trips (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    vehicle_id INTEGER,

    start_time TEXT NOT NULL,
    end_time TEXT,

    distance REAL,          -- kilometers
    fuel_consumed REAL,     -- liters
    efficiency REAL,        -- L/100km
    eco_score REAL,         -- 0-100

    status TEXT NOT NULL DEFAULT 'active'
        CHECK (status IN ('active', 'completed', 'cancelled'))
);
"""

SCHEMA_OBD_DATA = """
CREATE TABLE IF NOT EXISTS obd_data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    trip_id INTEGER,

    engine_rpm REAL,
    vehicle_speed REAL,     -- km/h
    engine_load REAL,       -- percent
    throttle_position REAL, -- percent
    fuel_level REAL,        -- percent
    engine_temp REAL,       -- Celsius
    battery_voltage REAL,   -- volts
    fuel_consumption REAL,  -- L/100km

    timestamp TEXT NOT NULL,

    CONSTRAINT FK_obd_data_trip FOREIGN KEY (trip_id)
        REFERENCES trips(id)
        ON DELETE SET NULL
);
"""

INDEX_TRIPS_USER_START = """
CREATE INDEX IF NOT EXISTS IX_trips_user_start
    ON trips(user_id, start_time);
"""

INDEX_OBD_DATA_USER_TIMESTAMP = """
CREATE INDEX IF NOT EXISTS IX_obd_data_user_timestamp
    ON obd_data(user_id, timestamp);
"""

INDEX_OBD_DATA_TRIP = """
CREATE INDEX IF NOT EXISTS IX_obd_data_trip
    ON obd_data(trip_id);
"""

# All schema statements in order of dependency
ALL_SCHEMAS = [
    ('trips', SCHEMA_TRIPS),
    ('obd_data', SCHEMA_OBD_DATA),
]

# All index statements
ALL_INDEXES = [
    ('IX_trips_user_start', INDEX_TRIPS_USER_START),
    ('IX_obd_data_user_timestamp', INDEX_OBD_DATA_USER_TIMESTAMP),
    ('IX_obd_data_trip', INDEX_OBD_DATA_TRIP),
]

# Telemetry reading columns, keyed by record field name
TELEMETRY_COLUMNS: dict[str, str] = {
    'engineRPM': 'engine_rpm',
    'vehicleSpeed': 'vehicle_speed',
    'engineLoad': 'engine_load',
    'throttlePosition': 'throttle_position',
    'fuelLevel': 'fuel_level',
    'engineTemp': 'engine_temp',
    'batteryVoltage': 'battery_voltage',
    'fuelConsumption': 'fuel_consumption',
}

# Trip metric columns, keyed by record field name
TRIP_COLUMNS: dict[str, str] = {
    'ecoScore': 'eco_score',
    'efficiency': 'efficiency',
    'distance': 'distance',
    'fuelConsumed': 'fuel_consumed',
}


# ================================================================================
# Timestamp Conversion
# ================================================================================

def formatTimestamp(value: datetime) -> str:
    """Format a datetime for storage (UTC, microsecond precision, no offset)."""
    return toUtc(value).strftime('%Y-%m-%dT%H:%M:%S.%f')


def parseTimestamp(value: str | None) -> datetime | None:
    """Parse a stored timestamp back into an aware UTC datetime."""
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# ================================================================================
# Database Class
# ================================================================================

class TelemetryDatabase:
    """
    SQLite record store for trips and telemetry.

    Attributes:
        dbPath: Path to the SQLite database file
        walMode: Whether to use WAL (Write-Ahead Logging) mode
        timeout: Seconds to wait on a locked database before failing

    Example:
        db = TelemetryDatabase('./data/telemetry.db')
        db.initialize()
        tripId = db.insertTrip('driver-1', startTime=datetime.now(timezone.utc))
    """

    def __init__(self, dbPath: str, walMode: bool = True, timeout: float = 30.0):
        """
        Initialize database manager.

        Args:
            dbPath: Path to the SQLite database file
            walMode: Enable WAL mode for better concurrency (default: True)
            timeout: Busy timeout in seconds
        """
        self.dbPath = dbPath
        self.walMode = walMode
        self.timeout = timeout
        self._initialized = False

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for database connections.

        Commits on success, rolls back on error and always closes.

        Yields:
            sqlite3.Connection: Database connection

        Raises:
            DatabaseBusyError: If the database stays locked past the timeout
            DatabaseConnectionError: On any other SQLite error
        """
        conn = None
        try:
            conn = self._getConnection()
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            errorClass = DatabaseBusyError if isLockedDatabaseError(e) else DatabaseConnectionError
            raise errorClass(
                f"Database error: {e}",
                details={'path': self.dbPath, 'error': str(e)}
            ) from e
        finally:
            if conn:
                conn.close()

    def _getConnection(self) -> sqlite3.Connection:
        """
        Open a new connection with row factory and pragmas configured.

        Raises:
            sqlite3.Error: If the connection cannot be opened
        """
        dbDir = os.path.dirname(self.dbPath)
        if dbDir:
            Path(dbDir).mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(self.dbPath, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute('PRAGMA foreign_keys = ON')

        if self.walMode:
            conn.execute('PRAGMA journal_mode = WAL')
            conn.execute('PRAGMA synchronous = NORMAL')

        return conn

    def initialize(self) -> bool:
        """
        Create all tables and indexes if they don't exist (idempotent).

        Returns:
            True if initialization succeeded

        Raises:
            DatabaseInitializationError: If schema creation fails
        """
        logger.info(f"Initializing database at {self.dbPath}")

        try:
            with self.connect() as conn:
                for tableName, schema in ALL_SCHEMAS:
                    logger.debug(f"Creating table: {tableName}")
                    conn.execute(schema)

                for indexName, indexSql in ALL_INDEXES:
                    logger.debug(f"Creating index: {indexName}")
                    conn.execute(indexSql)

        except DatabaseError as e:
            raise DatabaseInitializationError(
                f"Failed to initialize database: {e.message}",
                details=e.details
            ) from e

        self._initialized = True
        logger.info("Database initialization complete")
        return True

    def isInitialized(self) -> bool:
        """Check if initialize() has been called successfully."""
        return self._initialized

    def getTableNames(self) -> list[str]:
        """
        Get list of all tables in the database.

        Returns:
            List of table names
        """
        with self.connect() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row[0] for row in cursor.fetchall()]

    def getIndexNames(self) -> list[str]:
        """
        Get list of all indexes in the database.

        Returns:
            List of index names
        """
        with self.connect() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type='index' AND name NOT LIKE 'sqlite_%'"
            )
            return [row[0] for row in cursor.fetchall()]

    # ==========================================================================
    # Inserts
    # ==========================================================================

    def insertTrip(
        self,
        userId: str,
        startTime: datetime,
        endTime: datetime | None = None,
        distance: float | None = None,
        fuelConsumed: float | None = None,
        efficiency: float | None = None,
        ecoScore: float | None = None,
        vehicleId: int | None = None,
        status: str = 'completed'
    ) -> int:
        """
        Insert one trip row.

        Args:
            userId: Owner of the trip
            startTime: Trip start
            endTime: Trip end (None while active)
            distance: Kilometers driven
            fuelConsumed: Liters used
            efficiency: L/100km
            ecoScore: 0-100 rating
            vehicleId: Vehicle reference
            status: 'active', 'completed' or 'cancelled'

        Returns:
            New trip id
        """
        with self.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO trips (
                    user_id, vehicle_id, start_time, end_time, distance,
                    fuel_consumed, efficiency, eco_score, status
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    userId,
                    vehicleId,
                    formatTimestamp(startTime),
                    formatTimestamp(endTime) if endTime else None,
                    distance,
                    fuelConsumed,
                    efficiency,
                    ecoScore,
                    status,
                )
            )
            return cursor.lastrowid

    def insertTelemetry(
        self,
        userId: str,
        timestamp: datetime,
        tripId: int | None = None,
        **readings: float | None
    ) -> int:
        """
        Insert one telemetry row.

        Args:
            userId: Owner of the reading
            timestamp: When the row was recorded
            tripId: Trip the row belongs to
            **readings: Telemetry values keyed by field name
                (engineRPM, vehicleSpeed, throttlePosition, ...)

        Returns:
            New row id

        Raises:
            ValueError: If a reading name is not a telemetry field
        """
        unknown = set(readings) - set(TELEMETRY_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown telemetry fields: {sorted(unknown)}")

        columns = ['user_id', 'trip_id', 'timestamp']
        values: list[Any] = [userId, tripId, formatTimestamp(timestamp)]
        for name, value in readings.items():
            columns.append(TELEMETRY_COLUMNS[name])
            values.append(value)

        placeholders = ', '.join('?' for _ in columns)
        with self.connect() as conn:
            cursor = conn.execute(
                f"INSERT INTO obd_data ({', '.join(columns)}) VALUES ({placeholders})",
                values
            )
            return cursor.lastrowid


# ================================================================================
# Helper Functions
# ================================================================================

def createDatabaseFromConfig(config: dict[str, Any]) -> TelemetryDatabase:
    """
    Create a TelemetryDatabase from the 'database' configuration section.

    Args:
        config: Configuration dictionary

    Returns:
        Configured (not yet initialized) TelemetryDatabase
    """
    dbConfig = config.get('database', {})
    return TelemetryDatabase(
        dbConfig.get('path', './data/telemetry.db'),
        walMode=dbConfig.get('walMode', True),
        timeout=dbConfig.get('timeoutSeconds', 30.0)
    )


def initializeDatabase(config: dict[str, Any]) -> TelemetryDatabase:
    """
    Create and initialize a TelemetryDatabase from configuration.

    Raises:
        DatabaseInitializationError: If initialization fails
    """
    db = createDatabaseFromConfig(config)
    db.initialize()
    return db
