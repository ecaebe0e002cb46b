"""Command-line entry point: ``curr 100 usd eur gbp``."""

import asyncio
import sys
from collections.abc import Sequence

from curr_table.table.builder import build_table
from curr_table.utils.config import configure_logging


def main(argv: Sequence[str] | None = None) -> None:
    """Print a conversion table for the given amounts and currency codes.

    Errors from the rate provider are not caught; they end the process with a
    traceback and a non-zero exit status.
    """
    if argv is None:
        argv = sys.argv[1:]

    configure_logging()
    print(asyncio.run(build_table(argv)))


if __name__ == "__main__":
    main()
