"""Shared pytest configuration and fixtures for the test suite."""

import asyncio
from pathlib import Path

import pytest

from curr_table.cache.rate_cache import RateCache

FIXED_NOW_MS = 1_700_000_000_000

CONFIG_ENV_VARS = (
    "CURR_RATES_FILE",
    "CURR_PROVIDER_URL",
    "CURR_HTTP_TIMEOUT",
    "CURR_LOG_LEVEL",
)


class StubFetcher:
    """Async rate provider answering from a fixed table and recording calls."""

    def __init__(self, rates: dict[tuple[str, str], float]) -> None:
        self.rates = rates
        self.calls: list[tuple[str, str]] = []

    async def __call__(self, from_currency: str, to_currency: str) -> dict[str, float]:
        self.calls.append((from_currency, to_currency))
        # Yield so concurrent lookups can overlap with this fetch
        await asyncio.sleep(0)
        return {"rate": self.rates[(from_currency, to_currency)]}


class FakeClock:
    """Settable epoch-millisecond clock."""

    def __init__(self, now: int = FIXED_NOW_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's CURR_* settings out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def rates_file(tmp_path: Path) -> Path:
    """Path of a not-yet-existing cache file."""
    return tmp_path / "rates.json"


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    """Provider stub with a couple of well-known rates."""
    return StubFetcher(
        {
            ("USD", "EUR"): 0.5,
            ("EUR", "USD"): 2.0,
            ("USD", "GBP"): 0.8,
            ("USD", "JPY"): 150.0,
            ("GBP", "USD"): 1.25,
        }
    )


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at a fixed instant."""
    return FakeClock()


@pytest.fixture
def rate_cache(
    rates_file: Path, stub_fetcher: StubFetcher, clock: FakeClock
) -> RateCache:
    """Cache wired to the temporary file, the stub provider and the fake clock."""
    return RateCache(path=rates_file, fetcher=stub_fetcher, clock=clock)


# Pytest configuration
pytest_plugins: list[str] = []
