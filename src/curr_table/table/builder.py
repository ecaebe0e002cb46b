"""Build and render the amount x currency conversion table."""

import asyncio
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from tabulate import tabulate

from curr_table.cache.rate_cache import RateCache, RateFetcher

logger = logging.getLogger(__name__)

DEFAULT_AMOUNT = "1"
TABLE_FORMAT = "grid"


@dataclass
class TableRequest:
    """Amounts and currency codes split out of the command line.

    Amounts keep the spelling they were given in, for display.
    """

    amounts: list[str] = field(default_factory=list)
    currencies: list[str] = field(default_factory=list)

    @property
    def source(self) -> str | None:
        """The currency being converted from, if any was given."""
        return self.currencies[0] if self.currencies else None

    @property
    def targets(self) -> list[str]:
        """Currencies being converted to, in column order."""
        return self.currencies[1:]


def parse_amount(arg: str) -> float | None:
    """Parse a command-line argument as an amount.

    Returns:
        The amount, or None if the argument is not a nonzero finite number
    """
    try:
        value = float(arg)
    except ValueError:
        return None
    if value == 0 or not math.isfinite(value):
        return None
    return value


def split_arguments(argv: Sequence[str]) -> TableRequest:
    """Split positional arguments into amounts and currency codes.

    Args:
        argv: Arguments in any order

    Returns:
        TableRequest with at least one amount
    """
    request = TableRequest()
    for arg in argv:
        if parse_amount(arg) is not None:
            request.amounts.append(arg.strip())
        else:
            request.currencies.append(arg.upper())

    if not request.amounts:
        request.amounts.append(DEFAULT_AMOUNT)
    return request


async def build_rows(request: TableRequest, cache: RateCache) -> list[list[str]]:
    """Convert every amount into every target currency.

    Conversions for one amount run together; amounts are handled in order.

    Args:
        request: Amounts and currencies to tabulate
        cache: Loaded rate cache used for every conversion

    Returns:
        One row per amount: the amount followed by each converted value
    """
    rows: list[list[str]] = []
    for amount in request.amounts:
        converted: list[float] = []
        if request.source is not None:
            converted = await asyncio.gather(
                *(
                    cache.convert(amount, request.source, target)
                    for target in request.targets
                )
            )
        rows.append([amount, *(f"{value:.2f}" for value in converted)])
    return rows


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render rows under the currency header as a bordered text table."""
    return tabulate(
        rows,
        headers=list(headers),
        tablefmt=TABLE_FORMAT,
        disable_numparse=True,
        stralign="right",
    )


async def build_table(
    argv: Sequence[str],
    cache: RateCache | None = None,
    fetcher: RateFetcher | None = None,
) -> str:
    """Run a full conversion: load rates, convert, persist, render.

    Args:
        argv: Command-line arguments (amounts and currency codes)
        cache: Rate cache to use (if None, one is built from the environment)
        fetcher: Rate provider for a cache built here

    Returns:
        The rendered table
    """
    request = split_arguments(argv)
    if cache is None:
        cache = RateCache(fetcher=fetcher)

    await cache.load()
    rows = await build_rows(request, cache)
    await cache.save()

    logger.debug(
        "Built %d row(s) for %s", len(rows), ", ".join(request.currencies) or "-"
    )
    return render_table(request.currencies, rows)
