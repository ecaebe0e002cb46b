"""Rate lookup against the Frankfurter (ECB reference rates) HTTP API.

The provider answers ``fetch_rate(from, to)`` with ``{"rate": <float>}``, the
number of target units bought by one source unit. Any failure is raised as
``RateProviderException``; nothing is retried.
"""

import asyncio
import logging
from typing import Any

import requests
from pydantic import BaseModel, Field, ValidationError

from curr_table.exceptions import RateProviderException
from curr_table.utils.config import get_http_timeout, get_provider_url

logger = logging.getLogger(__name__)


class FrankfurterQuote(BaseModel):
    """Subset of the ``/latest`` response body that the converter relies on.

    Attributes:
        amount: Amount of the base currency the rates are quoted for
        base: Base currency code
        rates: Mapping of target currency code to converted amount
    """

    amount: float = Field(default=1.0, gt=0, description="Quoted base amount")
    base: str = Field(description="Base currency code")
    rates: dict[str, float] = Field(description="Target code to converted amount")


def request_rate(
    from_currency: str,
    to_currency: str,
    base_url: str | None = None,
    timeout: float | None = None,
) -> dict[str, float]:
    """Look up the conversion rate between two currencies.

    Args:
        from_currency: Source currency code (e.g. 'USD')
        to_currency: Target currency code (e.g. 'EUR')
        base_url: Provider base URL (if None, loads from CURR_PROVIDER_URL)
        timeout: Request timeout in seconds (if None, loads from CURR_HTTP_TIMEOUT)

    Returns:
        Dictionary with a single ``rate`` key

    Raises:
        RateProviderException: If the provider fails or returns no usable rate
    """
    if from_currency == to_currency:
        return {"rate": 1.0}

    if base_url is None:
        base_url = get_provider_url()
    if timeout is None:
        timeout = get_http_timeout()

    url = f"{base_url.rstrip('/')}/latest"
    params: dict[str, Any] = {"from": from_currency, "to": to_currency}

    logger.info("Fetching %s->%s rate from %s", from_currency, to_currency, url)
    try:
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise RateProviderException(
            f"Rate lookup {from_currency}->{to_currency} failed with status {status}",
            from_currency=from_currency,
            to_currency=to_currency,
            original_error=exc,
        ) from exc
    except requests.RequestException as exc:
        raise RateProviderException(
            f"Rate lookup {from_currency}->{to_currency} failed: {exc}",
            from_currency=from_currency,
            to_currency=to_currency,
            original_error=exc,
        ) from exc
    except ValueError as exc:
        raise RateProviderException(
            f"Rate lookup {from_currency}->{to_currency} returned invalid JSON",
            from_currency=from_currency,
            to_currency=to_currency,
            original_error=exc,
        ) from exc

    try:
        quote = FrankfurterQuote.model_validate(payload)
    except ValidationError as exc:
        raise RateProviderException(
            f"Unexpected response for {from_currency}->{to_currency}",
            from_currency=from_currency,
            to_currency=to_currency,
            original_error=exc,
        ) from exc

    converted = quote.rates.get(to_currency)
    if converted is None or converted <= 0:
        raise RateProviderException(
            f"No rate for {from_currency}->{to_currency} in provider response",
            from_currency=from_currency,
            to_currency=to_currency,
        )

    return {"rate": converted / quote.amount}


async def fetch_rate(from_currency: str, to_currency: str) -> dict[str, float]:
    """Async wrapper around ``request_rate`` that runs it in a worker thread."""
    return await asyncio.to_thread(request_rate, from_currency, to_currency)
