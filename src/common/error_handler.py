################################################################################
# File Name: error_handler.py
# Purpose/Description: Error categories, classification and retry for record store access
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-09    | M. Cornelison | Dropped auth category and error collector; SQLite
#               |              | lock detection, backoff delay generator
# ================================================================================
################################################################################

"""
Error handling module.

Every error raised by the engine falls in one of four categories:
- RETRYABLE: the record store was locked or busy; the read can be repeated
- CONFIGURATION: bad or missing configuration; fail fast
- DATA: bad caller input (unknown metric, interval or time range)
- SYSTEM: anything unexpected

Usage:
    from common.error_handler import retry, handleError

    @retry(maxRetries=3, initialDelay=0.1, retryableExceptions=[DatabaseBusyError])
    def _query(self, sql, params):
        ...

    try:
        report = buildReport()
    except Exception as e:
        handleError(e, context={'command': 'trends'}, reraise=False)
"""

import functools
import logging
import sqlite3
import time
import traceback
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

# sqlite3 reports lock contention only through the message text
LOCKED_MESSAGES = ('database is locked', 'database is busy', 'database table is locked')


class ErrorCategory(Enum):
    """Categories of errors for classification."""
    RETRYABLE = 'retryable'       # Locked/busy store, repeat the read
    CONFIGURATION = 'config'      # Config errors, fail fast
    DATA = 'data'                 # Invalid metric, interval or time range
    SYSTEM = 'system'             # Unexpected errors


# Log level used by handleError() for each category
CATEGORY_LOG_LEVELS: dict[ErrorCategory, int] = {
    ErrorCategory.RETRYABLE: logging.WARNING,
    ErrorCategory.CONFIGURATION: logging.ERROR,
    ErrorCategory.DATA: logging.WARNING,
    ErrorCategory.SYSTEM: logging.ERROR,
}


# ================================================================================
# Base Exception Classes
# ================================================================================

class BaseError(Exception):
    """
    Base exception for all engine errors.

    Attributes:
        message: Human-readable description
        details: Structured context (offending value, path, variable name)
    """

    category: ErrorCategory = ErrorCategory.SYSTEM

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def toDict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            'type': type(self).__name__,
            'category': self.category.value,
            'message': self.message,
            'details': self.details,
        }


class RetryableError(BaseError):
    """Transient failure; the operation can be repeated unchanged."""
    category = ErrorCategory.RETRYABLE


class ConfigurationError(BaseError):
    """Configuration file, environment or value problem."""
    category = ErrorCategory.CONFIGURATION


class DataError(BaseError):
    """Caller supplied an argument the engine cannot interpret."""
    category = ErrorCategory.DATA


# ================================================================================
# Error Classification
# ================================================================================

def isLockedDatabaseError(error: BaseException) -> bool:
    """
    Check whether an sqlite3 error means another connection holds the lock.

    Args:
        error: Exception raised by sqlite3

    Returns:
        True for 'database is locked' style operational errors
    """
    if not isinstance(error, sqlite3.OperationalError):
        return False
    message = str(error).lower()
    return any(text in message for text in LOCKED_MESSAGES)


def classifyError(error: Exception) -> ErrorCategory:
    """
    Classify an error into a category.

    Engine errors carry their own category. Other exceptions are sorted by
    type: lock contention and timeouts are retryable, missing files are
    configuration problems, value and type errors are data problems.

    Args:
        error: Exception to classify

    Returns:
        ErrorCategory for the error
    """
    if isinstance(error, BaseError):
        return error.category

    if isLockedDatabaseError(error) or isinstance(error, TimeoutError):
        return ErrorCategory.RETRYABLE

    if isinstance(error, FileNotFoundError):
        return ErrorCategory.CONFIGURATION

    if isinstance(error, (ValueError, TypeError, KeyError)):
        return ErrorCategory.DATA

    return ErrorCategory.SYSTEM


# ================================================================================
# Retry Decorator
# ================================================================================

def backoffDelays(
    initialDelay: float,
    backoffMultiplier: float,
    count: int
) -> Iterator[float]:
    """
    Yield the sleep before each retry.

    Args:
        initialDelay: First delay in seconds
        backoffMultiplier: Growth factor between delays
        count: Number of delays

    Yields:
        initialDelay, initialDelay * multiplier, ...
    """
    delay = initialDelay
    for _ in range(count):
        yield delay
        delay *= backoffMultiplier


def retry(
    maxRetries: int = 3,
    initialDelay: float = 1.0,
    backoffMultiplier: float = 2.0,
    retryableExceptions: list[type[Exception]] | None = None
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that retries a function with exponential backoff.

    The function runs at most maxRetries + 1 times. Exceptions outside
    retryableExceptions propagate on the first occurrence.

    Args:
        maxRetries: Maximum number of retry attempts
        initialDelay: Delay before the first retry in seconds
        backoffMultiplier: Multiplier applied to the delay after each retry
        retryableExceptions: Exception types to retry (default: RetryableError)

    Returns:
        Decorated function
    """
    retryOn = tuple(retryableExceptions or [RetryableError])

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            delays = backoffDelays(initialDelay, backoffMultiplier, maxRetries)
            attempt = 0

            while True:
                try:
                    return func(*args, **kwargs)
                except retryOn as e:
                    delay = next(delays, None)
                    if delay is None:
                        logger.error(
                            f"Giving up on {func.__name__} | retries={maxRetries} | error={e}"
                        )
                        raise
                    attempt += 1
                    logger.warning(
                        f"Retrying {func.__name__} | attempt={attempt}/{maxRetries} "
                        f"| delay={delay}s | error={e}"
                    )
                    time.sleep(delay)

        return wrapper
    return decorator


# ================================================================================
# Error Handling
# ================================================================================

def handleError(
    error: Exception,
    context: dict[str, Any] | None = None,
    reraise: bool = True
) -> dict[str, Any]:
    """
    Log an error at the level of its category and describe it.

    Args:
        error: Exception that occurred
        context: Additional context information (command, metric, ...)
        reraise: Whether to re-raise the exception

    Returns:
        Error details dictionary

    Raises:
        The original exception if reraise is True
    """
    category = classifyError(error)

    errorDetails = {
        'type': type(error).__name__,
        'category': category.value,
        'message': str(error),
        'context': context or {},
        'traceback': traceback.format_exc(),
    }

    logger.log(
        CATEGORY_LOG_LEVELS[category],
        f"{category.value.capitalize()} error: {error}",
        exc_info=category == ErrorCategory.SYSTEM
    )

    if reraise:
        raise error

    return errorDetails


def formatError(error: Exception) -> str:
    """
    Format an error as a single display line.

    Args:
        error: Exception to format

    Returns:
        '[CATEGORY] message | details={...}' for engine errors,
        '[CATEGORY] Type: message' otherwise
    """
    prefix = f"[{classifyError(error).value.upper()}]"

    if isinstance(error, BaseError):
        details = f" | details={error.details}" if error.details else ""
        return f"{prefix} {error.message}{details}"

    return f"{prefix} {type(error).__name__}: {error}"
