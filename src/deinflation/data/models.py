"""In-memory CPI dataset and the value types used to address it."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Union

import marshmallow as ma
from attrs import define, field, validators

from ..errors import MissingIndexError
from .files import AVERAGE_KEY, FIRST_MONTH, FIRST_YEAR

NEVER_UPDATED = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Status(str, enum.Enum):
    """Lifecycle of an :class:`IndexStore`."""

    PENDING = "pending"
    UPDATING = "updating"
    READY = "ready"


@define(slots=True, frozen=True, order=True)
class CalendarMonth:
    """A real calendar month, January being 1."""

    number: int = field(validator=[validators.instance_of(int), validators.ge(1), validators.le(12)])

    def __str__(self) -> str:
        return str(self.number)


@define(slots=True, frozen=True)
class YearAverage:
    """The published annual average for a year."""

    def __str__(self) -> str:
        return AVERAGE_KEY


AVERAGE = YearAverage()

MonthKey = Union[CalendarMonth, YearAverage]


def month_key_from_code(code: str) -> MonthKey:
    """Parse a cache key (``"1"`` .. ``"12"`` or ``"AVG"``) into a month key."""
    code = code.strip()
    if code.upper() == AVERAGE_KEY:
        return AVERAGE
    return CalendarMonth(int(code))


@define(slots=True, frozen=True)
class DateSpec:
    """A (year, month key) pair addressing one index value."""

    year: int
    month: MonthKey

    @classmethod
    def of(cls, year: int, month: int | None) -> DateSpec:
        """Build a spec from a calendar month number, or the average when ``None``."""
        return cls(year, AVERAGE if month is None else CalendarMonth(month))

    @property
    def is_average(self) -> bool:
        return isinstance(self.month, YearAverage)

    def __str__(self) -> str:
        return f"{self.year}/{self.month}"


@define(slots=True)
class IndexStore:
    """CPI index values keyed by year and month, plus load metadata."""

    status: Status = field(default=Status.PENDING, converter=Status)
    data: dict[int, dict[MonthKey, float]] = field(factory=dict)
    last_updated: datetime = NEVER_UPDATED

    def set_value(self, year: int, month: MonthKey, value: float) -> None:
        """Insert or overwrite the index value for ``(year, month)``."""
        self.data.setdefault(int(year), {})[month] = float(value)

    def value(self, spec: DateSpec) -> float:
        """Return the index value for ``spec``."""
        try:
            return self.data[spec.year][spec.month]
        except KeyError:
            raise MissingIndexError(f"No CPI value recorded for {spec}.") from None

    def has_average(self, year: int) -> bool:
        return AVERAGE in self.data.get(year, {})

    def _calendar_months(self, year: int) -> list[int]:
        return sorted(
            key.number for key in self.data.get(year, {}) if isinstance(key, CalendarMonth)
        )

    def earliest(self) -> DateSpec:
        """Return the first calendar month held, or the series start when empty."""
        for year in sorted(self.data):
            months = self._calendar_months(year)
            if months:
                return DateSpec.of(year, months[0])
        return DateSpec.of(FIRST_YEAR, FIRST_MONTH)

    def latest(self) -> DateSpec:
        """Return the most recent calendar month held; annual averages never count."""
        for year in sorted(self.data, reverse=True):
            months = self._calendar_months(year)
            if months:
                return DateSpec.of(year, months[-1])
        return DateSpec.of(FIRST_YEAR, FIRST_MONTH)

    def replace_with(self, other: IndexStore) -> None:
        """Adopt the contents of ``other`` while keeping this object's identity."""
        self.data = other.data
        self.last_updated = other.last_updated

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON document written to the cache file."""
        data: dict[str, dict[str, float]] = {}
        for year in sorted(self.data):
            months = self.data[year]
            ordered = sorted(
                (key for key in months if isinstance(key, CalendarMonth)),
                key=lambda key: key.number,
            )
            row = {str(key): months[key] for key in ordered}
            if AVERAGE in months:
                row[AVERAGE_KEY] = months[AVERAGE]
            data[str(year)] = row
        return {
            "status": self.status.value,
            "data": data,
            "lastUpdated": self.last_updated.isoformat(),
        }


class IndexStoreSchema(ma.Schema):
    """Marshmallow schema validating the cache document."""

    status = ma.fields.Str(
        load_default=Status.PENDING.value,
        validate=ma.validate.OneOf([status.value for status in Status]),
    )
    data = ma.fields.Dict(
        keys=ma.fields.Str(),
        values=ma.fields.Dict(keys=ma.fields.Str(), values=ma.fields.Float()),
        required=True,
    )
    last_updated = ma.fields.AwareDateTime(
        data_key="lastUpdated",
        default_timezone=timezone.utc,
        load_default=None,
    )

    @ma.post_load
    def make_store(self, data: dict[str, Any], **kwargs: object) -> IndexStore:
        """Convert string keys into years and month keys."""
        store = IndexStore(
            status=data["status"],
            last_updated=data["last_updated"] or NEVER_UPDATED,
        )
        for year_code, months in data["data"].items():
            try:
                year = int(year_code)
                for month_code, value in months.items():
                    store.set_value(year, month_key_from_code(month_code), value)
            except (TypeError, ValueError) as exc:
                raise ma.ValidationError(f"Invalid cache entry for {year_code!r}: {exc}") from exc
        return store


class ObservationSchema(ma.Schema):
    """One ``{year, period, value}`` row of a provider response."""

    class Meta:
        unknown = ma.EXCLUDE

    year = ma.fields.Int(required=True)
    period = ma.fields.Str(required=True)
    value = ma.fields.Str(required=True)


__all__ = [
    "NEVER_UPDATED",
    "Status",
    "CalendarMonth",
    "YearAverage",
    "AVERAGE",
    "MonthKey",
    "month_key_from_code",
    "DateSpec",
    "IndexStore",
    "IndexStoreSchema",
    "ObservationSchema",
]
