"""Bring the CPI dataset to a usable state, from cache or from the API."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import structlog
from attrs import define, field

from ..config import Settings
from .cache import IndexCache
from .client import BlsApiClient
from .files import STALE_AFTER_HOURS
from .ingest import IndexFetcher, utc_now
from .models import DateSpec, IndexStore, Status

logger = structlog.get_logger(__name__)

FetcherFactory = Callable[[], IndexFetcher]


def default_fetcher_factory(settings: Settings, clock: Callable[[], datetime]) -> FetcherFactory:
    """Return a factory that builds an API-backed fetcher on first use."""

    def build() -> IndexFetcher:
        client = BlsApiClient(
            api_key=settings.require_api_key(),
            series_id=settings.series_id,
            timeout=settings.timeout,
        )
        return IndexFetcher(client=client, clock=clock)

    return build


@define(slots=True)
class DataLoader:
    """Owns the store's status transitions; the only code that mutates the store."""

    store: IndexStore
    cache: IndexCache
    fetcher_factory: FetcherFactory
    clock: Callable[[], datetime] = field(default=utc_now)
    stale_after: timedelta = field(default=timedelta(hours=STALE_AFTER_HOURS))

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        store: IndexStore | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> DataLoader:
        return cls(
            store=store if store is not None else IndexStore(),
            cache=IndexCache(settings.cache_path),
            fetcher_factory=default_fetcher_factory(settings, clock),
            clock=clock,
        )

    def ensure_ready(self) -> IndexStore:
        """Load or refresh the dataset unless it is already ready."""
        if self.store.status is Status.READY:
            return self.store
        self.store.status = Status.UPDATING
        try:
            if self.cache.exists():
                self._load_cached()
            if self.store.status is not Status.READY:
                logger.info("loader.fetch_required", years_held=len(self.store.data))
                self._refresh()
        except Exception:
            self.store.status = Status.PENDING
            raise
        return self.store

    def _load_cached(self) -> None:
        self.store.replace_with(self.cache.read())
        latest = self.store.latest()
        log = logger.bind(latest=str(latest), last_updated=self.store.last_updated.isoformat())
        log.info("loader.cache_loaded", years=len(self.store.data))
        now = self.clock()
        if latest == DateSpec.of(now.year, now.month):
            self.store.status = Status.READY
        elif now - self.store.last_updated <= self.stale_after:
            log.info("loader.refresh_deferred", retry_after=str(self.stale_after))
            self.store.status = Status.READY
        else:
            log.info("loader.cache_stale")

    def _refresh(self) -> None:
        fetcher = self.fetcher_factory()
        try:
            fetcher.refresh(self.store)
        finally:
            fetcher.close()
        self.store.status = Status.READY
        self.cache.write(self.store)
        logger.info("loader.updated", latest=str(self.store.latest()))


__all__ = ["DataLoader", "FetcherFactory", "default_fetcher_factory"]
