################################################################################
# File Name: logging_config.py
# Purpose/Description: Structured logging configuration and utilities
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-14    | M. Cornelison | Log to stderr so stdout carries report JSON;
#               |              | owner id masking replaces PII patterns
# ================================================================================
################################################################################

"""
Logging configuration module.

Provides structured logging with:
- Configurable log levels
- Console (stderr) and optional file output
- Owner identifier masking
- Pipe-separated context fields

Usage:
    from common.logging_config import setupLogging, getLogger

    setupLogging(level='INFO')
    logger = getLogger(__name__)
    logWithContext(logger, 'info', "Report built", metric='ecoScore', buckets=12)
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

# Default log format
DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s | %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Matches the owner=<id> context field written by the record source and reports
OWNER_PATTERN = re.compile(r'(owner=)([^\s|]+)')


def maskOwnerId(ownerId: str, showChars: int = 3) -> str:
    """
    Mask an owner identifier for log output.

    Args:
        ownerId: Identifier to mask
        showChars: Number of leading characters kept

    Returns:
        Masked identifier (e.g., "dri***")
    """
    if not ownerId:
        return '[EMPTY]'
    if len(ownerId) <= showChars:
        return '*' * len(ownerId)
    return ownerId[:showChars] + '*' * (len(ownerId) - showChars)


class OwnerMaskingFilter(logging.Filter):
    """
    Logging filter that masks owner identifiers in log messages.

    Rewrites every 'owner=<id>' field; the record is always let through.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str) and 'owner=' in record.msg:
            record.msg = OWNER_PATTERN.sub(
                lambda m: m.group(1) + maskOwnerId(m.group(2)),
                record.msg
            )
        return True


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter for structured logging.

    Appends the fields of an active LogContext as ' | key=value' pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        context = getattr(record, 'context', None)
        if context and isinstance(context, dict):
            message += ''.join(f' | {k}={v}' for k, v in context.items())

        return message


def setupLogging(
    level: str = 'INFO',
    logFormat: str | None = None,
    logFile: str | None = None,
    maskOwners: bool = True
) -> logging.Logger:
    """
    Configure application logging.

    Console output goes to stderr; stdout is reserved for report output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        logFormat: Custom format string
        logFile: Optional file path for log output
        maskOwners: Whether to mask owner identifiers in logs

    Returns:
        Root logger instance
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(getattr(logging, level.upper(), logging.INFO))
    rootLogger.handlers.clear()

    formatter = StructuredFormatter(
        fmt=logFormat or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if logFile:
        logPath = Path(logFile)
        logPath.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logFile, encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        if maskOwners:
            handler.addFilter(OwnerMaskingFilter())
        rootLogger.addHandler(handler)

    rootLogger.debug(f"Logging configured | level={level} | file={logFile}")

    return rootLogger


def getLogger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def logWithContext(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: Any
) -> None:
    """
    Log a message followed by ' | key=value' context fields.

    Args:
        logger: Logger instance
        level: Log level name
        message: Log message
        **context: Additional context fields
    """
    logFunc = getattr(logger, level.lower(), logger.info)

    if context:
        logFunc(message + ''.join(f' | {k}={v}' for k, v in context.items()))
    else:
        logFunc(message)


class LogContext:
    """
    Context manager attaching fields to every record logged inside it.

    Usage:
        with LogContext(command='trends', metric='ecoScore'):
            logger.info("Building report")  # ... | command=trends | metric=ecoScore
    """

    def __init__(self, **context: Any):
        self.context = context
        self._oldFactory = None

    def __enter__(self) -> 'LogContext':
        self._oldFactory = logging.getLogRecordFactory()
        oldFactory = self._oldFactory
        context = self.context

        def recordFactory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = oldFactory(*args, **kwargs)
            record.context = context
            return record

        logging.setLogRecordFactory(recordFactory)
        return self

    def __exit__(self, *args: Any) -> None:
        if self._oldFactory:
            logging.setLogRecordFactory(self._oldFactory)
