"""File-backed exchange rate cache with staleness tracking."""

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from curr_table.exceptions import RateProviderException
from curr_table.providers.frankfurter import fetch_rate
from curr_table.utils.config import get_rates_file

logger = logging.getLogger(__name__)

RateFetcher = Callable[[str, str], Awaitable[dict[str, Any]]]

# 43200 is a count of seconds (12 hours); record dates are epoch milliseconds.
STALENESS_THRESHOLD_SECONDS = 43_200
STALENESS_THRESHOLD_MS = STALENESS_THRESHOLD_SECONDS * 1000

PAIR_SEPARATOR = ","
CENT = Decimal("0.01")


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def pair_key(from_currency: str, to_currency: str) -> str:
    """Build the canonical cache key for one conversion direction.

    Args:
        from_currency: Source currency code
        to_currency: Target currency code

    Returns:
        Codes joined with a comma, e.g. ``"USD,EUR"``
    """
    return f"{from_currency}{PAIR_SEPARATOR}{to_currency}"


def round_amount(amount: float | str | Decimal, rate: float | Decimal) -> float:
    """Multiply and round half-up to two decimal places.

    Operands go through their shortest decimal spelling first, so
    ``round_amount(10, 1.005)`` is ``10.05`` whatever the binary float
    product of the two would round to.
    """
    value = Decimal(str(amount)) * Decimal(str(rate))
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


class RateRecord(BaseModel):
    """Most recently fetched rate for one conversion direction.

    Attributes:
        date: When the rate was fetched, in epoch milliseconds
        rate: Target units per one source unit
    """

    date: int = Field(ge=0, description="Fetch time in epoch milliseconds")
    rate: float = Field(gt=0, description="Target units per one source unit")

    def age_ms(self, now: int) -> int:
        """Age of this record relative to ``now`` (epoch ms)."""
        return now - self.date

    def is_stale(self, now: int) -> bool:
        """Check if this record is older than the staleness threshold."""
        return self.age_ms(now) > STALENESS_THRESHOLD_MS


class RateCache:
    """Exchange rate cache persisted as a JSON file.

    Rates are looked up by direction. A miss or a stale entry triggers one
    provider fetch that stores both the direct rate and its reciprocal, and
    marks the cache dirty so that ``save`` writes the file back.

    Concurrent lookups of the same direction share a single in-flight fetch.

    Attributes:
        path: Location of the JSON cache file
    """

    def __init__(
        self,
        path: Path | str | None = None,
        fetcher: RateFetcher | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize an empty cache.

        Args:
            path: Cache file (if None, loads from CURR_RATES_FILE)
            fetcher: Async rate provider (default: Frankfurter ``fetch_rate``)
            clock: Callable returning epoch milliseconds (default: wall clock)
        """
        self.path = Path(path) if path is not None else get_rates_file()
        self._fetcher = fetcher or fetch_rate
        self._clock = clock or now_ms
        self._rates: dict[str, RateRecord] = {}
        self._dirty = False
        self._in_flight: dict[str, asyncio.Future[RateRecord]] = {}

    @property
    def dirty(self) -> bool:
        """Whether the in-memory rates differ from the file."""
        return self._dirty

    @property
    def rates(self) -> dict[str, RateRecord]:
        """Snapshot of the cached records keyed by pair."""
        return dict(self._rates)

    def get_record(self, from_currency: str, to_currency: str) -> RateRecord | None:
        """Get the cached record for one direction, fresh or not."""
        return self._rates.get(pair_key(from_currency, to_currency))

    async def load(self) -> None:
        """Replace the in-memory rates with the file contents.

        A missing, unreadable or malformed file yields an empty cache.
        """
        self._rates = await asyncio.to_thread(self._read)
        self._dirty = False
        logger.debug("Loaded %d cached rate(s) from %s", len(self._rates), self.path)

    def _read(self) -> dict[str, RateRecord]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("No rate cache at %s, starting empty", self.path)
            return {}
        except (OSError, ValueError) as exc:
            logger.debug("Ignoring unreadable rate cache %s: %s", self.path, exc)
            return {}

        if not isinstance(raw, dict):
            logger.debug("Ignoring rate cache %s: not a JSON object", self.path)
            return {}

        rates: dict[str, RateRecord] = {}
        for key, value in raw.items():
            try:
                rates[key] = RateRecord.model_validate(value)
            except ValidationError:
                logger.debug("Dropping invalid cache entry %r", key)
        return rates

    async def get_rate(self, from_currency: str, to_currency: str) -> float:
        """Get the rate for one direction, fetching it when missing or stale.

        Args:
            from_currency: Source currency code
            to_currency: Target currency code

        Returns:
            Target units per one source unit

        Raises:
            RateProviderException: If a fetch was needed and failed
        """
        if from_currency == to_currency:
            return 1.0

        key = pair_key(from_currency, to_currency)
        record = self._rates.get(key)
        if record is not None and not record.is_stale(self._clock()):
            logger.debug("Cache hit for %s", key)
            return record.rate

        pending = self._in_flight.get(key)
        if pending is None:
            logger.debug("Cache %s for %s", "miss" if record is None else "stale", key)
            pending = asyncio.ensure_future(self._refresh(from_currency, to_currency))
            self._in_flight[key] = pending
            pending.add_done_callback(lambda done: self._forget(key, done))

        return (await pending).rate

    def _forget(self, key: str, done: asyncio.Future[RateRecord]) -> None:
        if self._in_flight.get(key) is done:
            del self._in_flight[key]

    async def _refresh(self, from_currency: str, to_currency: str) -> RateRecord:
        result = await self._fetcher(from_currency, to_currency)
        now = self._clock()

        try:
            forward = RateRecord(date=now, rate=float(result["rate"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise RateProviderException(
                f"Provider returned no usable rate for {from_currency}->{to_currency}",
                from_currency=from_currency,
                to_currency=to_currency,
                original_error=exc,
            ) from exc

        self._rates[pair_key(from_currency, to_currency)] = forward
        self._rates[pair_key(to_currency, from_currency)] = RateRecord(
            date=now, rate=1 / forward.rate
        )
        self._dirty = True
        return forward

    async def convert(
        self, amount: float | str | Decimal, from_currency: str, to_currency: str
    ) -> float:
        """Convert an amount, rounded half-up to two decimal places.

        Args:
            amount: Amount in the source currency
            from_currency: Source currency code
            to_currency: Target currency code

        Returns:
            Converted amount

        Raises:
            RateProviderException: If a fetch was needed and failed
        """
        rate = await self.get_rate(from_currency, to_currency)
        return round_amount(amount, rate)

    async def save(self) -> bool:
        """Write the cache file if anything changed since ``load``.

        Returns:
            True if the file was written
        """
        if not self._dirty:
            logger.debug("Rate cache unchanged, not writing %s", self.path)
            return False

        payload = {key: record.model_dump() for key, record in self._rates.items()}
        await asyncio.to_thread(self._write, payload)
        self._dirty = False
        logger.debug("Saved %d rate(s) to %s", len(payload), self.path)
        return True

    def _write(self, payload: dict[str, dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload), encoding="utf-8")
