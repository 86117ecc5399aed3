"""CPI dataset storage, retrieval, and caching."""

from .cache import IndexCache
from .client import BlsApiClient
from .ingest import IndexFetcher
from .models import (
    AVERAGE,
    CalendarMonth,
    DateSpec,
    IndexStore,
    IndexStoreSchema,
    MonthKey,
    Status,
    YearAverage,
)
from .parser import IndexReading, PageKind, SeriesPage, parse_series_page
from .pipeline import DataLoader

__all__ = [
    "AVERAGE",
    "CalendarMonth",
    "DateSpec",
    "IndexStore",
    "IndexStoreSchema",
    "MonthKey",
    "Status",
    "YearAverage",
    "IndexReading",
    "PageKind",
    "SeriesPage",
    "parse_series_page",
    "BlsApiClient",
    "IndexCache",
    "IndexFetcher",
    "DataLoader",
]
