#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON formatting for command output. Results are pretty-printed
for readability; error payloads are written on a single line so callers can
parse stderr line by line.
"""

import json
from typing import Any


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False, default: Any = None) -> str:
    """
    Format data as a pretty-printed JSON string.

    Args:
        data: Data to format
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
        default: Function to serialize non-JSON types (default: None)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys, default=default)


def format_json_compact(data: Any) -> str:
    """Format data as a single-line JSON string."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=str)
