"""Rate-lookup providers."""

from .frankfurter import FrankfurterQuote, fetch_rate, request_rate

__all__ = ["FrankfurterQuote", "fetch_rate", "request_rate"]
