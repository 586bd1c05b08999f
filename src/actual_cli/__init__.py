"""
Actual Budget CLI - JSON Command-Line Wrapper for Actual Budget

A small command-line tool that exposes everyday personal-finance operations
against a self-hosted Actual Budget server and prints the results as JSON.

Key Features:
- List accounts, categories, payees and transactions
- Add a single transaction or import a CSV of transactions
- Fetch a budget month with per-category budgeted/spent/balance

Domain Packages:
- core: Configuration, errors, currency, dates, CSV parsing, JSON output
- client: Budget Service Client adapter over the actualpy library
- cli: Argument parsing, command handlers and the dispatcher

Example Usage:
    from actual_cli.core.csv_parser import parse_csv
    from actual_cli.cli.args import parse_args
    from actual_cli.client import open_session
"""

__version__ = "0.1.0"
__author__ = "Actual Budget CLI Contributors"

from .core.config import Settings, resolve_settings
from .core.csv_parser import parse_csv
from .core.errors import (
    ActualCliError,
    ConfigError,
    ExternalServiceError,
    FormatError,
    ValidationError,
)

__all__ = [
    # Configuration
    "Settings",
    "resolve_settings",
    # CSV parsing
    "parse_csv",
    # Errors
    "ActualCliError",
    "ConfigError",
    "ExternalServiceError",
    "FormatError",
    "ValidationError",
]
