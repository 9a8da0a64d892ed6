################################################################################
# File Name: config_validator.py
# Purpose/Description: Configuration validation with required fields and defaults
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-14    | M. Cornelison | Analytics defaults, token and limit validation
# ================================================================================
################################################################################

"""
Configuration validation module.

Provides validation of configuration files with:
- Required field checking
- Default value application
- Nested configuration support (dot notation keys)
- Interval and time-range token checks
- Positive number checks for limits and prices

Usage:
    from common.config_validator import ConfigValidator

    validator = ConfigValidator()
    config = validator.validate(rawConfig)
"""

import logging
import math
from typing import Any

from .error_handler import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(
        self,
        message: str,
        missingFields: list[str] | None = None,
        invalidFields: list[str] | None = None
    ):
        self.missingFields = missingFields or []
        self.invalidFields = invalidFields or []
        super().__init__(
            message,
            details={'missingFields': self.missingFields, 'invalidFields': self.invalidFields}
        )


REQUIRED_KEYS: list[str] = [
    'database.path',
]

# Default values for optional settings
DEFAULTS: dict[str, Any] = {
    'application.name': 'Telemetry Insight Engine',
    'application.version': '1.0.0',
    'database.path': './data/telemetry.db',
    'database.walMode': True,
    'database.timeoutSeconds': 30.0,
    'analytics.defaultInterval': '1d',
    'analytics.defaultTimeRange': '30d',
    'analytics.insightTripLimit': 20,
    'analytics.insightTelemetryLimit': 100,
    'analytics.baselineEfficiency': 8.5,
    'analytics.fuelPrice': 1.50,
    'logging.level': 'INFO',
    'logging.file': None,
}

# Keys that must hold numbers greater than zero
POSITIVE_NUMBER_KEYS: list[str] = [
    'database.timeoutSeconds',
    'analytics.insightTripLimit',
    'analytics.insightTelemetryLimit',
    'analytics.baselineEfficiency',
    'analytics.fuelPrice',
]

# Keys that must hold whole numbers
INTEGER_KEYS: list[str] = [
    'analytics.insightTripLimit',
    'analytics.insightTelemetryLimit',
]

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidator:
    """
    Validates configuration dictionaries.

    Attributes:
        requiredKeys: List of required configuration keys (dot notation)
        defaults: Dictionary of default values for optional fields
    """

    def __init__(
        self,
        requiredKeys: list[str] | None = None,
        defaults: dict[str, Any] | None = None
    ):
        """
        Initialize the validator.

        Args:
            requiredKeys: List of required keys in dot notation (e.g., 'database.path')
            defaults: Dictionary of default values in dot notation
        """
        self.requiredKeys = requiredKeys if requiredKeys is not None else REQUIRED_KEYS
        self.defaults = defaults if defaults is not None else DEFAULTS

    def validate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Validate and enhance configuration.

        Performs:
        1. Default value application
        2. Required field validation
        3. Value validation (tokens, positive limits, log level)

        Defaults are applied first so that a required key with a default
        (database.path) is satisfied by it.

        Args:
            config: Raw configuration dictionary

        Returns:
            Validated configuration with defaults applied

        Raises:
            ConfigValidationError: If required fields are missing or values are invalid
        """
        config = self._applyDefaults(config)

        missingFields = self._validateRequired(config)
        if missingFields:
            raise ConfigValidationError(
                f"Missing required configuration fields: {', '.join(missingFields)}",
                missingFields=missingFields
            )

        invalidFields = self._validateValues(config)
        if invalidFields:
            raise ConfigValidationError(
                f"Invalid configuration values: {', '.join(invalidFields)}",
                invalidFields=invalidFields
            )

        logger.info("Configuration validated successfully")
        return config

    def _validateRequired(self, config: dict[str, Any]) -> list[str]:
        """Return the required keys that are missing or empty."""
        missingFields = []
        for key in self.requiredKeys:
            value = self._getNestedValue(config, key)
            if value is None or value == '':
                missingFields.append(key)
        return missingFields

    def _applyDefaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply default values for missing optional fields."""
        for key, defaultValue in self.defaults.items():
            if self._getNestedValue(config, key) is None:
                self._setNestedValue(config, key, defaultValue)
                logger.debug(f"Applied default | key={key} | value={defaultValue}")
        return config

    def _validateValues(self, config: dict[str, Any]) -> list[str]:
        """
        Check value ranges and tokens.

        Returns:
            Invalid keys, each with a short reason
        """
        # Deferred: analysis/records import common.error_handler, which loads this package
        from analysis.exceptions import InvalidArgumentError
        from analysis.intervals import resolveWidth
        from records.time_range import parseTimeRangeToken

        invalid: list[str] = []

        for key in POSITIVE_NUMBER_KEYS:
            value = self._getNestedValue(config, key)
            if value is None:
                continue
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
                or value <= 0
            ):
                invalid.append(f"{key} (must be a positive number)")
            elif key in INTEGER_KEYS and not isinstance(value, int):
                invalid.append(f"{key} (must be a whole number)")

        interval = self._getNestedValue(config, 'analytics.defaultInterval')
        if interval is not None:
            try:
                resolveWidth(interval)
            except InvalidArgumentError:
                invalid.append('analytics.defaultInterval (unknown interval)')

        timeRange = self._getNestedValue(config, 'analytics.defaultTimeRange')
        if timeRange is not None:
            try:
                parseTimeRangeToken(timeRange)
            except InvalidArgumentError:
                invalid.append('analytics.defaultTimeRange (unknown time range)')

        level = self._getNestedValue(config, 'logging.level')
        if level is not None and str(level).upper() not in VALID_LOG_LEVELS:
            invalid.append('logging.level (unknown log level)')

        return invalid

    def _getNestedValue(self, config: dict[str, Any], key: str) -> Any:
        """
        Get a value from nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-notation key (e.g., 'database.path')

        Returns:
            Value if found, None otherwise
        """
        value: Any = config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None
        return value

    def _setNestedValue(self, config: dict[str, Any], key: str, value: Any) -> None:
        """Set a value in nested dictionary using dot notation."""
        keys = key.split('.')
        current = config
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

    def validateField(
        self,
        config: dict[str, Any],
        key: str,
        expectedType: type,
        allowNone: bool = False
    ) -> bool:
        """
        Validate a specific field's type.

        Args:
            config: Configuration dictionary
            key: Dot-notation key to validate
            expectedType: Expected Python type
            allowNone: Whether None is acceptable

        Returns:
            True if valid, False otherwise
        """
        value = self._getNestedValue(config, key)
        if value is None:
            return allowNone
        return isinstance(value, expectedType)


def validateConfig(config: dict[str, Any]) -> dict[str, Any]:
    """
    Convenience function to validate configuration.

    Raises:
        ConfigValidationError: If validation fails
    """
    return ConfigValidator().validate(config)


def getConfigValue(config: dict[str, Any], key: str, default: Any = None) -> Any:
    """
    Read a dot-notation key from a validated configuration.

    Args:
        config: Configuration dictionary
        key: Dot-notation key (e.g., 'analytics.fuelPrice')
        default: Value returned when the key is absent

    Returns:
        Configured value or default
    """
    value = ConfigValidator(requiredKeys=[], defaults={})._getNestedValue(config, key)
    return default if value is None else value
