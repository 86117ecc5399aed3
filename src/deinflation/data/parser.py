"""Parsers turning BLS API responses into index readings."""

import enum
from collections.abc import Iterable, Mapping
from typing import Any

import marshmallow as ma
import structlog
from attrs import define, field

from ..errors import RemoteAPIError
from .files import AVERAGE_PERIOD, MISSING_VALUE, SUCCESS_STATUS, exhausted_message_pattern
from .models import AVERAGE, CalendarMonth, MonthKey, ObservationSchema

logger = structlog.get_logger(__name__)

_OBSERVATIONS = ObservationSchema(many=True)


class PageKind(enum.Enum):
    """Whether more pages may follow this one."""

    DATA = "data"
    EXHAUSTED = "exhausted"


@define(slots=True, frozen=True)
class IndexReading:
    """A single index value for a year and month key."""

    year: int
    month: MonthKey
    value: float


@define(slots=True, frozen=True)
class SeriesPage:
    """One provider response reduced to readings and a continuation tag."""

    kind: PageKind
    readings: tuple[IndexReading, ...] = field(factory=tuple, converter=tuple)
    messages: tuple[str, ...] = field(factory=tuple, converter=tuple)

    @property
    def is_last(self) -> bool:
        return self.kind is PageKind.EXHAUSTED


def parse_period(period: str) -> MonthKey | None:
    """Map a BLS period code onto a month key; ``None`` for non-monthly periods."""
    period = period.strip().upper()
    if period == AVERAGE_PERIOD:
        return AVERAGE
    if not period.startswith("M"):
        return None
    try:
        return CalendarMonth(int(period[1:]))
    except (TypeError, ValueError):
        return None


def parse_readings(rows: Iterable[Mapping[str, Any]]) -> list[IndexReading]:
    """Validate raw rows and convert them into readings, skipping unusable ones."""
    try:
        observations = _OBSERVATIONS.load(list(rows))
    except ma.ValidationError as exc:
        raise RemoteAPIError(f"Malformed observation rows: {exc.messages}") from exc
    readings: list[IndexReading] = []
    for obs in observations:
        month = parse_period(obs["period"])
        raw_value = obs["value"].strip()
        if month is None or raw_value in ("", MISSING_VALUE):
            logger.debug("parser.row_skipped", year=obs["year"], period=obs["period"])
            continue
        try:
            value = float(raw_value)
        except ValueError as exc:
            raise RemoteAPIError(f"Non-numeric index value {raw_value!r}.") from exc
        readings.append(IndexReading(year=obs["year"], month=month, value=value))
    return readings


def classify_messages(messages: Iterable[str], series_id: str) -> PageKind:
    """Return :attr:`PageKind.EXHAUSTED` when the provider reports no further years."""
    pattern = exhausted_message_pattern(series_id)
    if any(pattern.match(message.strip()) for message in messages):
        return PageKind.EXHAUSTED
    return PageKind.DATA


def parse_series_page(payload: Mapping[str, Any], series_id: str) -> SeriesPage:
    """Check the response status and extract the series' readings."""
    status = payload.get("status")
    messages = [str(message) for message in payload.get("message") or []]
    if status != SUCCESS_STATUS:
        logger.error("parser.request_failed", status=status, messages=messages)
        raise RemoteAPIError(
            f"The BLS API responded with {status!r} instead of {SUCCESS_STATUS!r}: "
            + "; ".join(messages)
        )
    try:
        series_list = payload["Results"]["series"]
        rows = series_list[0].get("data", []) if series_list else []
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise RemoteAPIError("The BLS API response has no series results.") from exc
    return SeriesPage(
        kind=classify_messages(messages, series_id),
        readings=parse_readings(rows),
        messages=messages,
    )


__all__ = [
    "PageKind",
    "IndexReading",
    "SeriesPage",
    "parse_period",
    "parse_readings",
    "classify_messages",
    "parse_series_page",
]
