################################################################################
# File Name: conftest.py
# Purpose/Description: Pytest fixtures and configuration
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-14    | M. Cornelison | Record store and analytics fixtures
# ================================================================================
################################################################################

"""
Pytest configuration and shared fixtures.

Fixtures defined here are available to all test files automatically.

Usage:
    def test_something(database, fixedNow):
        # database and fixedNow are automatically injected
        pass
"""

import json
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from records.database import TelemetryDatabase
from records.source import TelemetryRecordSource

OWNER = 'driver-1'
OTHER_OWNER = 'driver-2'


# ================================================================================
# Time Fixtures
# ================================================================================

@pytest.fixture
def fixedNow() -> datetime:
    """
    Reference instant used as 'now' by report tests.

    Returns:
        Wednesday 2026-02-04 12:00 UTC
    """
    return datetime(2026, 2, 4, 12, 0, 0, tzinfo=timezone.utc)


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture
def sampleConfig(tmp_path: Path) -> dict[str, Any]:
    """
    Provide sample configuration for tests.

    Returns:
        Dictionary with test configuration values
    """
    return {
        'application': {
            'name': 'TestApp',
            'version': '1.0.0',
        },
        'database': {
            'path': str(tmp_path / 'test.db'),
            'walMode': False,
        },
        'analytics': {
            'defaultInterval': '1d',
            'defaultTimeRange': '30d',
            'insightTripLimit': 20,
            'insightTelemetryLimit': 100,
        },
        'logging': {
            'level': 'DEBUG',
        },
    }


@pytest.fixture
def configFile(tmp_path: Path, sampleConfig: dict[str, Any]) -> Path:
    """Write sampleConfig to a JSON file and return its path."""
    path = tmp_path / 'config.json'
    path.write_text(json.dumps(sampleConfig), encoding='utf-8')
    return path


# ================================================================================
# Database Fixtures
# ================================================================================

@pytest.fixture
def database(tmp_path: Path) -> TelemetryDatabase:
    """
    Provide an initialized database in a temporary directory.

    Returns:
        TelemetryDatabase with schema created
    """
    db = TelemetryDatabase(str(tmp_path / 'telemetry.db'), walMode=False)
    db.initialize()
    return db


@pytest.fixture
def source(database: TelemetryDatabase) -> TelemetryRecordSource:
    """Provide a record source over the temporary database."""
    return TelemetryRecordSource(database)


@pytest.fixture
def populatedDatabase(database: TelemetryDatabase, fixedNow: datetime) -> TelemetryDatabase:
    """
    Database with ten daily trips and telemetry for OWNER, plus one foreign trip.

    Trips start at 08:00 on each of the ten days before fixedNow, with eco
    scores rising from 50 to 95 in steps of 5. Each trip has two telemetry
    rows: one at high RPM and full throttle, one gentle.
    """
    for day in range(10):
        start = (fixedNow - timedelta(days=10 - day)).replace(hour=8)
        tripId = database.insertTrip(
            OWNER,
            startTime=start,
            endTime=start + timedelta(minutes=30),
            distance=20.0,
            fuelConsumed=1.5,
            efficiency=7.5,
            ecoScore=50.0 + 5 * day,
        )
        database.insertTelemetry(
            OWNER, start + timedelta(minutes=5), tripId=tripId,
            engineRPM=3500.0, throttlePosition=90.0, vehicleSpeed=80.0
        )
        database.insertTelemetry(
            OWNER, start + timedelta(minutes=10), tripId=tripId,
            engineRPM=1800.0, throttlePosition=20.0, vehicleSpeed=50.0
        )

    database.insertTrip(
        OTHER_OWNER,
        startTime=fixedNow - timedelta(days=1),
        endTime=fixedNow - timedelta(days=1) + timedelta(hours=1),
        ecoScore=10.0,
    )
    return database


# ================================================================================
# Logging Fixtures
# ================================================================================

@pytest.fixture(autouse=True)
def resetLogging():
    """Restore root logger handlers and record factory after each test."""
    rootLogger = logging.getLogger()
    handlers = list(rootLogger.handlers)
    level = rootLogger.level
    factory = logging.getLogRecordFactory()
    yield
    rootLogger.handlers[:] = handlers
    rootLogger.setLevel(level)
    logging.setLogRecordFactory(factory)
