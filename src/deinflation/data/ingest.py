"""Incremental download of CPI pages into an :class:`IndexStore`."""

from collections.abc import Callable
from datetime import datetime, timezone

import structlog
from attrs import define, field

from .client import BlsApiClient
from .models import IndexStore
from .parser import SeriesPage, parse_series_page

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@define(slots=True)
class IndexFetcher:
    """Page through the provider from the store's latest year until it runs dry."""

    client: BlsApiClient
    clock: Callable[[], datetime] = field(default=utc_now)

    def refresh(self, store: IndexStore) -> IndexStore:
        """Merge every available page into ``store`` and return it."""
        end_year = self.clock().year + 1
        pages = 0
        while True:
            start_year = store.latest().year
            log = logger.bind(start_year=start_year, end_year=end_year)
            log.info("fetcher.page_request", years_held=len(store.data))
            page = self._fetch(start_year, end_year)
            self._merge(store, page)
            pages += 1
            log.debug("fetcher.page_merged", readings=len(page.readings), kind=page.kind.value)
            if page.is_last:
                break
            if store.latest().year <= start_year:
                # Nothing newer arrived; asking again would repeat the same request.
                log.warning("fetcher.no_progress", messages=list(page.messages))
                break
        logger.info("fetcher.refresh_complete", pages=pages, latest=str(store.latest()))
        return store

    def _fetch(self, start_year: int, end_year: int) -> SeriesPage:
        payload = self.client.fetch_page(start_year, end_year)
        return parse_series_page(payload, self.client.series_id)

    def _merge(self, store: IndexStore, page: SeriesPage) -> None:
        for reading in page.readings:
            store.set_value(reading.year, reading.month, reading.value)
        store.last_updated = self.clock()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()


__all__ = ["IndexFetcher", "utc_now"]
