"""Unit tests for the CPI store and its key types."""

from datetime import datetime, timezone

import marshmallow as ma
import pytest

from deinflation.data.models import (
    AVERAGE,
    NEVER_UPDATED,
    CalendarMonth,
    DateSpec,
    IndexStore,
    IndexStoreSchema,
    Status,
    YearAverage,
    month_key_from_code,
)
from deinflation.errors import MissingIndexError
from tests.conftest import build_store


@pytest.mark.parametrize("number", [0, 13, -1])
def test_calendar_month_rejects_out_of_range(number):
    with pytest.raises(ValueError):
        CalendarMonth(number)


def test_year_average_is_a_single_value():
    assert YearAverage() == AVERAGE
    assert {AVERAGE: 1.0}[YearAverage()] == 1.0
    assert AVERAGE != CalendarMonth(12)


@pytest.mark.parametrize(
    "code, expected",
    [("1", CalendarMonth(1)), (" 12 ", CalendarMonth(12)), ("AVG", AVERAGE), ("avg", AVERAGE)],
)
def test_month_key_from_code(code, expected):
    assert month_key_from_code(code) == expected


def test_date_spec_rendering():
    assert str(DateSpec.of(1985, 10)) == "1985/10"
    assert str(DateSpec.of(1985, None)) == "1985/AVG"
    assert DateSpec.of(1985, None).is_average


def test_empty_store_defaults_to_series_start():
    store = IndexStore()
    assert store.status is Status.PENDING
    assert store.last_updated == NEVER_UPDATED
    assert store.earliest() == DateSpec.of(1913, 1)
    assert store.latest() == DateSpec.of(1913, 1)


def test_latest_skips_annual_average():
    store = build_store({2023: {11: 307.0, 12: 306.7, "AVG": 304.7}})
    assert store.latest() == DateSpec.of(2023, 12)


def test_earliest_and_latest_do_not_depend_on_insertion_order():
    store = build_store(
        {
            2024: {"AVG": 1.0, 5: 314.069, 1: 308.417},
            1913: {"AVG": 9.9, 2: 9.8, 1: 9.8},
        }
    )
    assert store.earliest() == DateSpec.of(1913, 1)
    assert store.latest() == DateSpec.of(2024, 5)


def test_set_value_overwrites_existing_entry(store):
    store.set_value(2024, CalendarMonth(5), "314.5")
    assert store.value(DateSpec.of(2024, 5)) == 314.5


def test_value_raises_for_unknown_key(store):
    with pytest.raises(MissingIndexError):
        store.value(DateSpec.of(2024, None))
    with pytest.raises(MissingIndexError):
        store.value(DateSpec.of(1950, 3))


def test_replace_with_keeps_identity_and_status(store):
    target = IndexStore(status="updating")
    target.replace_with(store)
    assert target.status is Status.UPDATING
    assert target.data is store.data


def test_to_dict_orders_months_and_puts_average_last():
    store = build_store({1985: {"AVG": 107.6, 10: 108.7, 9: 108.3}})
    store.last_updated = datetime(2024, 6, 1, tzinfo=timezone.utc)
    document = store.to_dict()
    assert list(document["data"]["1985"]) == ["9", "10", "AVG"]
    assert document["lastUpdated"] == "2024-06-01T00:00:00+00:00"
    assert document["status"] == "pending"


def test_schema_loads_cache_document():
    document = {
        "status": "ready",
        "data": {"1913": {"1": 9.8, "2": "9.8", "AVG": 9.9}},
        "lastUpdated": "2024-06-01T00:00:00Z",
    }
    store = IndexStoreSchema().load(document)
    assert store.status is Status.READY
    assert store.value(DateSpec.of(1913, 2)) == 9.8
    assert store.value(DateSpec.of(1913, None)) == 9.9
    assert store.last_updated == datetime(2024, 6, 1, tzinfo=timezone.utc)


def test_schema_defaults_missing_metadata():
    store = IndexStoreSchema().load({"data": {}})
    assert store.status is Status.PENDING
    assert store.last_updated == NEVER_UPDATED


@pytest.mark.parametrize(
    "document",
    [
        {"status": "ready"},
        {"data": {"1913": {"13": 9.8}}},
        {"data": {"year": {"1": 9.8}}},
        {"data": {"1913": {"1": "n/a"}}},
        {"data": {"1913": {"1": 9.8}}, "status": "stale"},
        {"data": [1, 2, 3]},
    ],
)
def test_schema_rejects_invalid_documents(document):
    with pytest.raises(ma.ValidationError):
        IndexStoreSchema().load(document)
