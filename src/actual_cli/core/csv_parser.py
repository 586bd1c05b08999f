#!/usr/bin/env python3
"""
CSV Row Parser

Minimal CSV reader for transaction imports. The first line is the header,
every following line is one row. Header names are trimmed and lower-cased
and used as row keys.

Quoting rules are deliberately simple and are kept stable because existing
import files depend on them:
- a double quote toggles the in-quotes state and is not kept in the field
- a comma separates fields only outside quotes
- there is no escaped quote; ``""`` is two toggles, never a literal quote
"""

import logging

from .errors import FormatError

logger = logging.getLogger(__name__)

CsvRow = dict[str, str]


def split_fields(line: str) -> list[str]:
    """
    Split one data line into trimmed fields, honouring double quotes.

    Example:
        split_fields('a,"b,c",d') -> ['a', 'b,c', 'd']
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False

    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(ch)

    values.append("".join(current).strip())
    return values


def parse_header(line: str) -> list[str]:
    """Split the header line on every comma, trimming and lower-casing names."""
    return [name.strip().lower() for name in line.split(",")]


def parse_csv(content: str) -> list[CsvRow]:
    """
    Parse CSV text into an ordered list of header -> value mappings.

    Rows shorter than the header get ``""`` for the missing keys; fields past
    the end of the header are dropped.

    Args:
        content: Full file content

    Returns:
        One dict per data line, in file order

    Raises:
        FormatError: If there is no header line plus at least one data line
    """
    lines = content.strip().split("\n")
    if len(lines) < 2:
        raise FormatError("CSV must have a header row and at least one data row")

    headers = parse_header(lines[0])

    rows: list[CsvRow] = []
    for line in lines[1:]:
        values = split_fields(line)
        rows.append({header: (values[i] if i < len(values) else "") for i, header in enumerate(headers)})

    logger.debug("Parsed %d CSV rows with columns %s", len(rows), headers)
    return rows
