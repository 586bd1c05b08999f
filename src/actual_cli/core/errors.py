#!/usr/bin/env python3
"""
Error Types for the Actual Budget CLI

Every failure an invocation can report is one of these. The dispatcher
renders any of them as a single ``{"error": message}`` object on stderr.
"""


class ActualCliError(Exception):
    """Base class for all CLI failures."""


class ConfigError(ActualCliError):
    """A required setting could not be resolved."""


class ValidationError(ActualCliError):
    """Bad user input: missing flag, malformed value or failed name lookup."""


class FormatError(ValidationError):
    """Input file content could not be parsed."""


class ExternalServiceError(ActualCliError):
    """The budget server or the client library reported a failure."""
