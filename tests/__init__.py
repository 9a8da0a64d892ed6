################################################################################
# File Name: __init__.py
# Purpose/Description: Test package initialization
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
################################################################################

"""
Tests for the telemetry insight engine.

Run tests with:
    pytest tests/
    pytest tests/test_reports.py -v
"""
