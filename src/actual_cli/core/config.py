#!/usr/bin/env python3
"""
Configuration Management for the Actual Budget CLI

Resolves server credentials from the process environment and an optional
per-user key-value file (~/.config/actual-budget/.env). Environment variables
always win over the file. Required settings are checked before any network
activity so a half-configured invocation never opens a session.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from .errors import ConfigError

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("ACTUAL_SERVER_URL", "ACTUAL_PASSWORD", "ACTUAL_SYNC_ID")

MISSING_CONFIG_MESSAGE = (
    "Missing config. Set ACTUAL_SERVER_URL, ACTUAL_PASSWORD, ACTUAL_SYNC_ID "
    "as env vars or in ~/.config/actual-budget/.env"
)


def default_env_file() -> Path:
    """Per-user key-value file holding the same keys as the environment."""
    return Path.home() / ".config" / "actual-budget" / ".env"


def default_data_dir() -> Path:
    """Local cache directory for downloaded budget files."""
    return Path.home() / ".cache" / "actual-budget" / "data"


def load_env_file(path: str | Path) -> dict[str, str]:
    """
    Read KEY=VALUE pairs from a dotenv-style file.

    Blank lines and ``#`` comments are ignored and matching surrounding quotes
    are stripped from values. Keys without a value are dropped.

    Args:
        path: File to read

    Returns:
        Mapping of key to value, empty if the file does not exist
    """
    path = Path(path)
    if not path.is_file():
        return {}

    # Values are taken literally; ${VAR} is not expanded
    values = dotenv_values(path, interpolate=False)
    return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class Settings:
    """Connection settings for one Actual Budget server and budget file."""

    server_url: str
    password: str
    sync_id: str
    data_dir: Path
    encryption_password: str | None = None

    @classmethod
    def from_environment(
        cls,
        env_file: str | Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> "Settings":
        """
        Resolve settings from the environment, then the env file, then defaults.

        Args:
            env_file: Key-value file to consult (default: ~/.config/actual-budget/.env)
            environ: Environment mapping (default: os.environ)

        Returns:
            Settings instance

        Raises:
            ConfigError: If server URL, password or sync id is unresolved
        """
        if environ is None:
            environ = dict(os.environ)
        if env_file is None:
            env_file = default_env_file()

        file_values = load_env_file(env_file)

        def get(key: str, fallback: str | None = None) -> str | None:
            return environ.get(key) or file_values.get(key) or fallback

        server_url = get("ACTUAL_SERVER_URL")
        password = get("ACTUAL_PASSWORD")
        sync_id = get("ACTUAL_SYNC_ID")

        if not server_url or not password or not sync_id:
            missing = [key for key in REQUIRED_KEYS if not get(key)]
            logger.debug("Unresolved settings: %s", ", ".join(missing))
            raise ConfigError(MISSING_CONFIG_MESSAGE)

        data_dir = Path(get("ACTUAL_DATA_DIR", str(default_data_dir()))).expanduser()

        return cls(
            server_url=server_url,
            password=password,
            sync_id=sync_id,
            data_dir=data_dir,
            encryption_password=get("ACTUAL_ENCRYPTION_PASSWORD"),
        )

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return ["password", "encryption_password"]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert settings to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}
        for field_name, field_value in self.__dict__.items():
            if not include_sensitive and field_name in self.get_sensitive_fields():
                result[field_name] = "***REDACTED***" if field_value else None
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            else:
                result[field_name] = field_value
        return result


def resolve_settings(env_file: str | Path | None = None) -> Settings:
    """Resolve settings from the real process environment."""
    settings = Settings.from_environment(env_file=env_file)
    logger.debug("Resolved settings: %s", settings.to_dict())
    return settings


def configure_logging(level_name: str | None = None) -> None:
    """
    Configure logging on stderr so stdout carries only command results.

    Args:
        level_name: Level name such as "DEBUG" (default: $LOG_LEVEL or WARNING)
    """
    if level_name is None:
        level_name = os.getenv("LOG_LEVEL", "WARNING")
    level = getattr(logging, level_name.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from the client library's HTTP stack
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
