################################################################################
# File Name: exceptions.py
# Purpose/Description: Exception definitions for the analysis subpackage
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial creation for US-010 refactoring
# 2026-02-09    | M. Cornelison | Rebased on common DataError, added InvalidArgumentError
# ================================================================================
################################################################################

"""
Exception definitions for the analysis subpackage.

Provides:
- AnalyticsError: Base exception for analysis errors
- InvalidArgumentError: Bad interval width, interval token, time range or metric

Empty inputs are never errors; they produce empty or fallback results.
"""

from common.error_handler import DataError

# ================================================================================
# Custom Exceptions
# ================================================================================

class AnalyticsError(DataError):
    """Base exception for analysis errors."""
    pass


class InvalidArgumentError(AnalyticsError):
    """Argument can never produce a result (retrying cannot help)."""
    pass
