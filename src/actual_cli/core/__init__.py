"""
Core Utilities Package

Shared building blocks used by the client adapter and the command handlers.

This package provides:
- Configuration resolution from the environment and ~/.config/actual-budget/.env
- The error hierarchy rendered by the dispatcher
- Currency conversion between decimal amounts and integer cents
- Date and month parsing for flag values
- The CSV row parser used by transaction imports
- JSON formatting for command output
"""

from .config import Settings, configure_logging, load_env_file, resolve_settings
from .csv_parser import CsvRow, parse_csv
from .currency import amount_to_integer, integer_to_amount, parse_amount
from .dates import parse_iso_date, parse_month
from .errors import (
    ActualCliError,
    ConfigError,
    ExternalServiceError,
    FormatError,
    ValidationError,
)
from .json_utils import format_json, format_json_compact

__all__ = [
    "ActualCliError",
    "ConfigError",
    "CsvRow",
    "ExternalServiceError",
    "FormatError",
    # Configuration
    "Settings",
    "ValidationError",
    # Currency utilities
    "amount_to_integer",
    "configure_logging",
    "format_json",
    "format_json_compact",
    "integer_to_amount",
    "load_env_file",
    "parse_amount",
    # CSV parsing
    "parse_csv",
    "parse_iso_date",
    "parse_month",
    "resolve_settings",
]
