"""curr-table - currency conversion tables backed by a local rate cache."""

__version__ = "0.1.0"

# Rate cache
from .cache import RateCache, RateRecord, pair_key

# Custom exceptions
from .exceptions import (
    ConfigurationException,
    CurrTableException,
    RateProviderException,
)

# Rate provider
from .providers import fetch_rate

# Table assembly
from .table import build_rows, build_table, render_table, split_arguments

# Configuration utilities
from .utils import configure_logging, load_environment

__all__ = [
    "__version__",
    "RateCache",
    "RateRecord",
    "pair_key",
    "fetch_rate",
    "build_rows",
    "build_table",
    "render_table",
    "split_arguments",
    "configure_logging",
    "load_environment",
    # Exceptions
    "CurrTableException",
    "ConfigurationException",
    "RateProviderException",
]
