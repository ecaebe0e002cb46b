"""Configuration utilities for environment-based setup."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from curr_table.exceptions import ConfigurationException

DEFAULT_RATES_FILE = Path(__file__).resolve().parent.parent / "rates.json"
DEFAULT_PROVIDER_URL = "https://api.frankfurter.app"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_environment() -> None:
    """Load environment variables from .env file if it exists."""
    load_dotenv()


def get_rates_file() -> Path:
    """Get the path of the JSON rate cache.

    Returns:
        Path from CURR_RATES_FILE, or ``rates.json`` next to the package
    """
    load_environment()

    value = os.getenv("CURR_RATES_FILE")
    if not value:
        return DEFAULT_RATES_FILE
    return Path(value).expanduser()


def get_provider_url() -> str:
    """Get the base URL of the rate-lookup provider.

    Returns:
        Base URL without a trailing slash
    """
    load_environment()

    return (os.getenv("CURR_PROVIDER_URL") or DEFAULT_PROVIDER_URL).rstrip("/")


def get_http_timeout() -> float:
    """Get the provider request timeout in seconds.

    Returns:
        Timeout from CURR_HTTP_TIMEOUT, or the default

    Raises:
        ConfigurationException: If the value is not a positive number
    """
    load_environment()

    value = os.getenv("CURR_HTTP_TIMEOUT")
    if not value:
        return DEFAULT_HTTP_TIMEOUT

    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigurationException(
            f"CURR_HTTP_TIMEOUT must be a number, got '{value}'",
            config_key="CURR_HTTP_TIMEOUT",
            config_value=value,
        ) from exc

    if timeout <= 0:
        raise ConfigurationException(
            f"CURR_HTTP_TIMEOUT must be positive, got '{value}'",
            config_key="CURR_HTTP_TIMEOUT",
            config_value=value,
        )
    return timeout


def get_log_level() -> int:
    """Get the logging level for the command-line tool.

    Returns:
        Numeric logging level from CURR_LOG_LEVEL

    Raises:
        ConfigurationException: If the level name is unknown
    """
    load_environment()

    name = (os.getenv("CURR_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationException(
            f"Unknown log level '{name}'",
            config_key="CURR_LOG_LEVEL",
            config_value=name,
        )
    return level


def configure_logging(level: int | None = None) -> None:
    """Send package log records to stderr.

    Args:
        level: Logging level (if None, loads from CURR_LOG_LEVEL env var)
    """
    if level is None:
        level = get_log_level()

    logging.basicConfig(level=level, format=LOG_FORMAT)
