"""Utility functions for configuration and logging setup."""

from .config import (
    configure_logging,
    get_http_timeout,
    get_log_level,
    get_provider_url,
    get_rates_file,
    load_environment,
)

__all__ = [
    "load_environment",
    "get_rates_file",
    "get_provider_url",
    "get_http_timeout",
    "get_log_level",
    "configure_logging",
]
