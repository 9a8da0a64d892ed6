################################################################################
# File Name: config_loader.py
# Purpose/Description: JSON configuration loading with .env placeholder resolution
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-14    | M. Cornelison | Renamed from secrets_loader; values are
#               |              | settings rather than credentials
# ================================================================================
################################################################################

"""
Configuration loading module.

- Loads environment variables from a .env file without overriding the
  existing environment
- Resolves ${VAR_NAME} and ${VAR_NAME:default} placeholders in configuration
- Converts placeholder-only strings to int, float or bool where they parse

Usage:
    from common.config_loader import loadConfig

    config = loadConfig('src/telemetry_config.json', '.env')
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from .error_handler import ConfigurationError

logger = logging.getLogger(__name__)

# Pattern to match ${VAR_NAME} or ${VAR_NAME:default}
PLACEHOLDER_PATTERN = re.compile(r'\$\{([^}:]+)(?::([^}]*))?\}')


def loadEnvFile(envPath: str | None = None) -> dict[str, str]:
    """
    Load environment variables from a .env file.

    Args:
        envPath: Path to .env file. Defaults to .env in current directory.

    Returns:
        Dictionary of the variables that were set, keyed by name

    Note:
        Does not override existing environment variables. A missing file is
        not an error.
    """
    if envPath is None:
        envPath = '.env'

    loadedVars: dict[str, str] = {}
    envFile = Path(envPath)

    if not envFile.exists():
        logger.debug(f".env file not found | path={envPath}")
        return loadedVars

    with open(envFile, encoding='utf-8') as f:
        for lineNum, line in enumerate(f, 1):
            line = line.strip()

            if not line or line.startswith('#'):
                continue

            if '=' not in line:
                logger.warning(f"Invalid line in .env: missing '=' | line={lineNum}")
                continue

            key, _, value = line.partition('=')
            key = key.strip()
            value = value.strip()

            # Strip matching surrounding quotes
            if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
                value = value[1:-1]

            if key not in os.environ:
                os.environ[key] = value
                loadedVars[key] = value

    logger.info(f"Loaded .env file | path={envPath} | variables={len(loadedVars)}")
    return loadedVars


def _coerce(value: str) -> Any:
    """Turn a fully substituted placeholder into a bool, int or float if it parses."""
    lowered = value.lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    for converter in (int, float):
        try:
            return converter(value)
        except ValueError:
            continue
    return value


def _resolveString(value: str) -> Any:
    """
    Resolve placeholders in a string value.

    Args:
        value: String potentially containing ${VAR} placeholders

    Returns:
        Resolved string, or a scalar when the whole string was one placeholder

    Raises:
        ConfigurationError: If a variable is unset and has no default
    """
    def replacer(match: re.Match) -> str:
        varName = match.group(1)
        defaultValue = match.group(2)

        envValue = os.environ.get(varName)
        if envValue is not None:
            return envValue
        if defaultValue is not None:
            logger.debug(f"Using placeholder default | variable={varName}")
            return defaultValue
        raise ConfigurationError(
            f"Environment variable {varName} is not set and has no default",
            details={'variable': varName}
        )

    resolved = PLACEHOLDER_PATTERN.sub(replacer, value)
    if PLACEHOLDER_PATTERN.fullmatch(value):
        return _coerce(resolved)
    return resolved


def resolvePlaceholders(config: Any) -> Any:
    """
    Recursively resolve ${VAR_NAME} placeholders in configuration.

    Args:
        config: Configuration value (dict, list, str, or other)

    Returns:
        Configuration with placeholders resolved
    """
    if isinstance(config, dict):
        return {key: resolvePlaceholders(value) for key, value in config.items()}
    if isinstance(config, list):
        return [resolvePlaceholders(item) for item in config]
    if isinstance(config, str):
        return _resolveString(config)
    return config


def loadConfig(configPath: str, envPath: str | None = None) -> dict[str, Any]:
    """
    Load a JSON configuration file and resolve its placeholders.

    Args:
        configPath: Path to configuration JSON file
        envPath: Optional path to .env file

    Returns:
        Configuration dictionary with placeholders resolved

    Raises:
        ConfigurationError: If the file is missing, is not valid JSON, is not
            a JSON object or references an unset variable
    """
    loadEnvFile(envPath)

    configFile = Path(configPath)
    if not configFile.exists():
        raise ConfigurationError(
            f"Configuration file not found: {configPath}",
            details={'path': configPath}
        )

    logger.info(f"Loading configuration | path={configPath}")

    try:
        with open(configFile, encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file: {e}",
            details={'path': configPath, 'line': e.lineno}
        ) from e

    if not isinstance(config, dict):
        raise ConfigurationError(
            "Configuration root must be a JSON object",
            details={'path': configPath}
        )

    return resolvePlaceholders(config)
