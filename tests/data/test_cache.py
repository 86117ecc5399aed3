"""Unit tests for the JSON cache file."""

import json

import pytest

from deinflation.data.models import DateSpec, Status
from deinflation.errors import CorruptCacheError
from tests.conftest import FIXED_NOW, build_store


def test_write_then_read_restores_store(cache, store):
    store.status = Status.READY
    store.last_updated = FIXED_NOW
    cache.write(store)

    assert cache.exists()
    loaded = cache.read()
    assert loaded.data == store.data
    assert loaded.last_updated == FIXED_NOW
    assert loaded.latest() == DateSpec.of(2024, 5)


def test_written_document_mirrors_store_shape(cache):
    cache.write(build_store({1913: {1: 9.8, "AVG": 9.9}}))
    document = json.loads(cache.path.read_text())
    assert set(document) == {"status", "data", "lastUpdated"}
    assert document["data"] == {"1913": {"1": 9.8, "AVG": 9.9}}


def test_write_creates_parent_directories(tmp_path, store):
    from deinflation.data.cache import IndexCache

    nested = IndexCache(tmp_path / "a" / "b" / "cpi.json")
    nested.write(store)
    assert nested.exists()


@pytest.mark.parametrize("content", ["{not json", '{"status": "ready"}', "[]", ""])
def test_corrupt_file_is_deleted(cache, content):
    cache.path.write_text(content)

    with pytest.raises(CorruptCacheError, match="run again"):
        cache.read()
    assert not cache.exists()


def test_delete_missing_file_is_harmless(cache):
    cache.delete()
    assert not cache.exists()
