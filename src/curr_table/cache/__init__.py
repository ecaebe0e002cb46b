"""Exchange rate caching."""

from .rate_cache import (
    STALENESS_THRESHOLD_MS,
    RateCache,
    RateFetcher,
    RateRecord,
    pair_key,
    round_amount,
)

__all__ = [
    "RateCache",
    "RateFetcher",
    "RateRecord",
    "STALENESS_THRESHOLD_MS",
    "pair_key",
    "round_amount",
]
