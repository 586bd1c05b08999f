#!/usr/bin/env python3
"""
Flat Argument Parser

Commands take ``--flag value`` pairs in any order. A flag followed by
another flag, or by nothing, is a boolean ``True``. Tokens that are neither
flags nor flag values are skipped, and a repeated flag keeps its last value.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from ..core.errors import ValidationError

FlagValue = str | bool
ParsedArgs = Mapping[str, FlagValue]


def parse_args(tokens: Sequence[str]) -> ParsedArgs:
    """
    Parse the tokens after the command name into a read-only flag mapping.

    Examples:
        parse_args(["--account", "Checking"]) -> {"account": "Checking"}
        parse_args(["--dry", "--month", "2024-01"]) -> {"dry": True, "month": "2024-01"}
    """
    args: dict[str, FlagValue] = {}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.startswith("--"):
            key = token[2:]
            following = tokens[i + 1] if i + 1 < len(tokens) else None
            if following and not following.startswith("--"):
                args[key] = following
                i += 2
            else:
                args[key] = True
                i += 1
        else:
            i += 1
    return MappingProxyType(args)


def optional_str(args: ParsedArgs, name: str) -> str | None:
    """Return the flag's string value, or None if absent or given without a value."""
    value = args.get(name)
    return value if isinstance(value, str) and value else None


def require_str(args: ParsedArgs, name: str, usage: str) -> str:
    """
    Return the flag's string value.

    Args:
        args: Parsed flags
        name: Flag name without dashes
        usage: Placeholder shown in the error, e.g. "<YYYY-MM-DD>"

    Raises:
        ValidationError: If the flag is absent or has no value
    """
    value = optional_str(args, name)
    if value is None:
        raise ValidationError(f"--{name} {usage} is required")
    return value
