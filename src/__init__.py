################################################################################
# File Name: __init__.py
# Purpose/Description: Application source root
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-02-15    | M. Cornelison | Listed analytics and record store packages
# ================================================================================
################################################################################

"""
Telemetry insight engine source root.

- common/: configuration, logging and error handling
- analysis/: pure aggregation, trend, insight and summary functions
- records/: SQLite record store, time ranges and source-backed reports

Entry point: main.py
"""

__version__ = '1.0.0'
