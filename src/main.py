################################################################################
# File Name: main.py
# Purpose/Description: Command-line entry point for telemetry analytics reports
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-14    | M. Cornelison | Replaced orchestrator workflow with report subcommands
# ================================================================================
################################################################################

"""
Main application entry point.

Runs one analytics report against the record store and prints it as JSON:
- trends: bucketed metric series with trend direction
- insights: coaching insights over recent trips and telemetry
- compare: current period against the previous one
- overview: trip, telemetry and savings summary

Logs go to stderr; stdout carries only the report.

Usage:
    python src/main.py --help
    python src/main.py --owner driver-1 trends --metric ecoScore --interval 1w
    python src/main.py --owner driver-1 insights --time-range 7d
    python src/main.py --config my.json --owner driver-1 overview
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Resolve project paths relative to this script (not CWD)
srcPath = Path(__file__).resolve().parent
projectRoot = srcPath.parent
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

DEFAULT_CONFIG = str(srcPath / 'telemetry_config.json')
DEFAULT_ENV = str(projectRoot / '.env')

from common.config_loader import loadConfig
from common.config_validator import ConfigValidator
from common.error_handler import ConfigurationError, DataError, handleError
from common.logging_config import LogContext, getLogger, setupLogging
from records.database import DatabaseError, initializeDatabase
from records.reports import (
    getDrivingInsights,
    getMetricTrend,
    getOverview,
    getPeriodComparison,
)
from records.source import TelemetryRecordSource

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 2
EXIT_UNKNOWN_ERROR = 3

COMMANDS = ('trends', 'insights', 'compare', 'overview')


def buildParser() -> argparse.ArgumentParser:
    """
    Build the command line parser.

    Returns:
        Parser with one subparser per report
    """
    parser = argparse.ArgumentParser(
        description='Telemetry aggregation and driving insight reports',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --owner driver-1 trends --metric ecoScore
  python main.py --owner driver-1 trends --metric engineRPM --time-range 24h --interval 1h
  python main.py --owner driver-1 insights
  python main.py --owner driver-1 compare --time-range 7d
  python main.py --owner driver-1 overview --verbose
        '''
    )

    parser.add_argument(
        '--config', '-c',
        default=DEFAULT_CONFIG,
        help='Path to configuration file (default: src/telemetry_config.json)'
    )
    parser.add_argument(
        '--env-file', '-e',
        default=DEFAULT_ENV,
        help='Path to environment file (default: .env)'
    )
    parser.add_argument(
        '--owner', '-o',
        required=True,
        help='Owner (user) id whose records are analyzed'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s 1.0.0'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    trends = subparsers.add_parser('trends', help='Bucketed metric trend')
    trends.add_argument('--metric', '-m', required=True, help='Metric key (e.g., ecoScore)')
    trends.add_argument('--interval', '-i', help='raw, 1h, 6h, 1d, 1w or seconds')
    trends.add_argument('--trip-id', type=int, help='Restrict to one trip')

    subparsers.add_parser('insights', help='Driving insights')
    subparsers.add_parser('compare', help='Current period against the previous one')
    subparsers.add_parser('overview', help='Trip, telemetry and savings summary')

    for name in COMMANDS:
        subparsers.choices[name].add_argument(
            '--time-range', '-t',
            help='1h, 6h, 24h, 7d, 30d, 90d or 1y (default from configuration)'
        )

    return parser


def parseArgs(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Arguments (default: sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    return buildParser().parse_args(argv)


def parseIntervalArg(value: str) -> str | float:
    """Interval tokens pass through; plain numbers are taken as seconds."""
    try:
        return float(value)
    except ValueError:
        return value


def loadConfiguration(configPath: str, envPath: str | None = None) -> dict:
    """
    Load and validate configuration.

    Args:
        configPath: Path to configuration file
        envPath: Path to environment file

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigurationError: If configuration is missing or invalid
    """
    config = loadConfig(configPath, envPath)
    config = ConfigValidator().validate(config)
    getLogger(__name__).info(f"Configuration loaded from {configPath}")
    return config


def runReport(
    args: argparse.Namespace,
    config: dict[str, Any],
    source: TelemetryRecordSource
) -> dict[str, Any]:
    """
    Run the report selected on the command line.

    Args:
        args: Parsed arguments
        config: Validated configuration
        source: Record source

    Returns:
        Report as a JSON-serializable dictionary

    Raises:
        InvalidArgumentError: On bad metric, interval or time range
        DatabaseError: If fetching fails
    """
    analytics = config['analytics']
    timeRange = args.time_range or analytics['defaultTimeRange']

    if args.command == 'trends':
        interval = parseIntervalArg(args.interval or analytics['defaultInterval'])
        report = getMetricTrend(
            source,
            args.owner,
            args.metric,
            timeRange=timeRange,
            interval=interval,
            tripId=args.trip_id
        )
        return report.toDict()

    if args.command == 'insights':
        return getDrivingInsights(
            source,
            args.owner,
            timeRange=timeRange,
            tripLimit=analytics['insightTripLimit'],
            telemetryLimit=analytics['insightTelemetryLimit']
        )

    if args.command == 'compare':
        result = getPeriodComparison(source, args.owner, timeRange=timeRange).toDict()
        result['timeRange'] = timeRange
        return result

    return getOverview(
        source,
        args.owner,
        timeRange=timeRange,
        baselineEfficiency=analytics['baselineEfficiency'],
        fuelPrice=analytics['fuelPrice']
    ).toDict()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Args:
        argv: Arguments (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parseArgs(argv)

    setupLogging(level='DEBUG' if args.verbose else 'INFO')
    logger = getLogger(__name__)

    try:
        config = loadConfiguration(args.config, args.env_file)

        if not args.verbose:
            setupLogging(
                level=config['logging']['level'],
                logFile=config['logging'].get('file')
            )

        with LogContext(command=args.command):
            source = TelemetryRecordSource(initializeDatabase(config))
            result = runReport(args, config, source)

        print(json.dumps(result, indent=2))
        return EXIT_SUCCESS

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    except (DataError, DatabaseError) as e:
        logger.error(f"Report failed: {e}")
        return EXIT_RUNTIME_ERROR

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_RUNTIME_ERROR

    except Exception as e:
        handleError(e, context={'command': args.command}, reraise=False)
        return EXIT_UNKNOWN_ERROR


if __name__ == '__main__':
    sys.exit(main())
