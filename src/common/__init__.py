################################################################################
# File Name: __init__.py
# Purpose/Description: Common utilities package initialization
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-14    | M. Cornelison | config_loader replaces secrets_loader
# ================================================================================
################################################################################

"""
Common utilities package.

This package provides shared functionality used across the application:
- Configuration loading (.env and ${VAR} placeholders) and validation
- Logging configuration
- Error handling

Usage:
    from common.config_loader import loadConfig
    from common.config_validator import ConfigValidator
    from common.logging_config import getLogger
    from common.error_handler import RetryableError
"""

from .config_loader import loadConfig
from .config_validator import ConfigValidationError, ConfigValidator
from .error_handler import ConfigurationError, DataError, RetryableError, handleError
from .logging_config import getLogger, setupLogging

__all__ = [
    'ConfigValidator',
    'ConfigValidationError',
    'loadConfig',
    'getLogger',
    'setupLogging',
    'RetryableError',
    'ConfigurationError',
    'DataError',
    'handleError'
]
