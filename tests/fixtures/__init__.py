"""
Test Fixtures and Utilities

Shared test data, utilities, and fixtures for the test suite.

This module provides:
- An in-memory BudgetSession with synthetic accounts and transactions
- Helpers for running the CLI in a subprocess

All test data is synthetic and does not contain real financial information.
"""
