#!/usr/bin/env python3
"""
End-to-end tests for the budgetbook CLI.

These tests drive the real command groups against a per-test data directory.
"""
