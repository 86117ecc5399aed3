"""JSON file persistence for the CPI dataset."""

import json
from pathlib import Path

import marshmallow as ma
import structlog
from attrs import define, field

from ..errors import CorruptCacheError
from .files import CACHE_FILE
from .models import IndexStore, IndexStoreSchema

logger = structlog.get_logger(__name__)


@define(slots=True)
class IndexCache:
    """Read and overwrite a single JSON snapshot of an :class:`IndexStore`."""

    path: Path = field(default=Path(CACHE_FILE), converter=Path)
    schema: IndexStoreSchema = field(factory=IndexStoreSchema, repr=False)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> IndexStore:
        """Load the snapshot; a file that fails to parse is deleted."""
        log = logger.bind(path=str(self.path))
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
            store = self.schema.load(document)
        except (ValueError, TypeError, ma.ValidationError) as exc:
            log.error("cache.corrupt", error=str(exc))
            self.delete()
            raise CorruptCacheError(
                f"The CPI data file {self.path} could not be parsed and was deleted. "
                "Please run again."
            ) from exc
        log.debug("cache.read", years=len(store.data), last_updated=store.last_updated.isoformat())
        return store

    def write(self, store: IndexStore) -> None:
        """Replace the snapshot with the contents of ``store``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(store.to_dict()), encoding="utf-8")
        logger.debug("cache.written", path=str(self.path), years=len(store.data))

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.debug("cache.deleted", path=str(self.path))


__all__ = ["IndexCache"]
