"""Global test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from deinflation.adjust import Adjuster
from deinflation.data.cache import IndexCache
from deinflation.data.client import BlsApiClient
from deinflation.data.ingest import IndexFetcher
from deinflation.data.models import AVERAGE, CalendarMonth, IndexStore
from deinflation.data.pipeline import DataLoader

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

# CPI-U, not seasonally adjusted.
SAMPLE_VALUES = {
    1913: {1: 9.8, 2: 9.8, "AVG": 9.9},
    1985: {9: 108.3, 10: 108.7, 11: 109.0, "AVG": 107.6},
    1991: {7: 136.2, 8: 136.6, 9: 137.2, "AVG": 136.2},
    2024: {1: 308.417, 2: 310.326, 3: 312.332, 4: 313.548, 5: 314.069},
}


def build_store(values=None, **kwargs) -> IndexStore:
    """Create a store from a ``{year: {month or "AVG": value}}`` mapping."""
    store = IndexStore(**kwargs)
    for year, months in (values or SAMPLE_VALUES).items():
        for month, value in months.items():
            key = AVERAGE if month == "AVG" else CalendarMonth(month)
            store.set_value(year, key, value)
    return store


def bls_payload(rows=(), messages=(), status="REQUEST_SUCCEEDED", series_id="CUUR0000SA0"):
    """Build a response body shaped like the BLS v2 API's."""
    return {
        "status": status,
        "responseTime": 120,
        "message": list(messages),
        "Results": {
            "series": [
                {
                    "seriesID": series_id,
                    "data": [
                        {
                            "year": str(year),
                            "period": period,
                            "periodName": "",
                            "value": value,
                            "footnotes": [{}],
                        }
                        for year, period, value in rows
                    ],
                }
            ]
        },
    }


def no_data_message(year: int, series_id: str = "CUUR0000SA0") -> str:
    return f"No Data Available for Series {series_id} Year: {year}"


class FakeClock:
    """A settable clock."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return build_store()


@pytest.fixture
def cache(tmp_path):
    return IndexCache(tmp_path / "inflation-data.json")


@pytest.fixture
def mock_client():
    """A client double whose ``fetch_page`` is primed per test."""
    client = MagicMock(spec=BlsApiClient)
    client.series_id = "CUUR0000SA0"
    return client


@pytest.fixture
def fetcher_factory(mock_client, clock):
    """A factory that counts how many fetchers the loader asks for."""
    factory = MagicMock(side_effect=lambda: IndexFetcher(client=mock_client, clock=clock))
    return factory


@pytest.fixture
def loader(cache, fetcher_factory, clock):
    return DataLoader(
        store=IndexStore(), cache=cache, fetcher_factory=fetcher_factory, clock=clock
    )


@pytest.fixture
def ready_adjuster(cache, clock, mocker):
    """An adjuster over the sample store, already marked ready."""
    data_loader = DataLoader(
        store=build_store(status="ready"),
        cache=cache,
        fetcher_factory=mocker.MagicMock(),
        clock=clock,
    )
    return Adjuster(loader=data_loader, clock=clock)
