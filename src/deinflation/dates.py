"""Turn loosely formatted dates into year/month keys that exist in the dataset.

Accepted inputs:

* ``None``: the current month. Clamping it to the newest data is silent.
* a mapping with ``year`` and optional ``month`` keys (``"AVG"`` or a missing
  month means the annual average), or any object with ``year``/``month``
  attributes such as :class:`datetime.date`.
* a string split on ``-`` or ``/`` (or a list/tuple of the same tokens):
  ``"10/1/1985"`` is month/day/year, ``"10/1985"`` month/year, ``"1985-10"``
  year/month and ``"1985"`` the 1985 annual average.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import Any, Union

from attrs import define, field

from .data.files import AVERAGE_KEY
from .data.models import DateSpec, IndexStore
from .errors import InvalidDateFormat

_SEPARATORS = re.compile(r"[-/]")


@define(slots=True, frozen=True)
class ImplicitDate:
    """No date was supplied."""


@define(slots=True, frozen=True)
class StructuredDate:
    year: Any
    month: Any = None


@define(slots=True, frozen=True)
class TokenDate:
    tokens: tuple[str, ...] = field(converter=tuple)


DateInput = Union[ImplicitDate, StructuredDate, TokenDate]


@define(slots=True, frozen=True)
class NormalizedDate:
    """A resolved date plus any corrections made along the way."""

    spec: DateSpec
    notices: tuple[str, ...] = ()
    updated: bool = False
    implicit: bool = False


def classify_date_input(raw: object) -> DateInput:
    """Decide which accepted shape ``raw`` has."""
    if raw is None:
        return ImplicitDate()
    if isinstance(raw, str):
        return TokenDate(token.strip() for token in _SEPARATORS.split(raw))
    if isinstance(raw, Mapping):
        if "year" not in raw:
            raise InvalidDateFormat(f"Date mapping {raw!r} has no 'year' key.")
        return StructuredDate(raw["year"], raw.get("month"))
    if isinstance(raw, (list, tuple)):
        return TokenDate(str(token).strip() for token in raw)
    if not isinstance(raw, (int, float)) and hasattr(raw, "year") and hasattr(raw, "month"):
        return StructuredDate(raw.year, raw.month)
    raise InvalidDateFormat(
        f"Could not interpret {raw!r} as a date; use 'MM/YYYY', 'YYYY-MM', "
        "'MM/DD/YYYY', 'YYYY', a {'year', 'month'} mapping, or a date object."
    )


def _to_int(token: Any, raw: object) -> int:
    if isinstance(token, bool):
        raise InvalidDateFormat(f"Could not interpret {raw!r} as a date.")
    try:
        return int(token)
    except (TypeError, ValueError):
        raise InvalidDateFormat(f"Could not interpret {raw!r} as a date.") from None


def _is_average(month: Any) -> bool:
    return month is None or (isinstance(month, str) and month.strip().upper() == AVERAGE_KEY)


def resolve_date_input(parsed: DateInput, today: date) -> tuple[int, int | None]:
    """Return ``(year, month)``; a ``None`` month requests the annual average."""
    if isinstance(parsed, ImplicitDate):
        return today.year, today.month
    if isinstance(parsed, StructuredDate):
        month = None if _is_average(parsed.month) else _to_int(parsed.month, parsed)
        return _to_int(parsed.year, parsed), month
    tokens = parsed.tokens
    if len(tokens) == 3:
        return _to_int(tokens[2], tokens), _to_int(tokens[0], tokens)
    if len(tokens) == 2:
        if len(tokens[1]) == 4:
            return _to_int(tokens[1], tokens), _to_int(tokens[0], tokens)
        return _to_int(tokens[0], tokens), _to_int(tokens[1], tokens)
    if len(tokens) == 1:
        return _to_int(tokens[0], tokens), None
    raise InvalidDateFormat(f"Could not interpret {'/'.join(tokens)!r} as a date.")


def _is_after(year: int, month: int | None, latest: DateSpec, store: IndexStore) -> bool:
    if year != latest.year:
        return year > latest.year
    if month is None:
        return not store.has_average(year)
    return month > latest.month.number


def normalize_date(raw: object, store: IndexStore, *, today: date) -> NormalizedDate:
    """Resolve ``raw`` against ``store`` and clamp it into the available range."""
    parsed = classify_date_input(raw)
    implicit = isinstance(parsed, ImplicitDate)
    year, month = resolve_date_input(parsed, today)
    notices: list[str] = []
    updated = False

    earliest = store.earliest()
    latest = store.latest()
    if year < earliest.year:
        year, month = earliest.year, earliest.month.number
        notices.append(f"Provided date was before the earliest data, set to {earliest}.")
        updated = True
    elif _is_after(year, month, latest, store):
        year, month = latest.year, latest.month.number
        if not implicit:
            notices.append(f"Provided date was after the latest data, set to {latest}.")
        updated = True

    if month is not None and not 1 <= month <= 12:
        notices.append(f"Unable to determine the month for {year}, using year average.")
        month = None
        updated = True

    return NormalizedDate(
        spec=DateSpec.of(year, month),
        notices=tuple(notices),
        updated=updated,
        implicit=implicit,
    )


__all__ = [
    "ImplicitDate",
    "StructuredDate",
    "TokenDate",
    "DateInput",
    "NormalizedDate",
    "classify_date_input",
    "resolve_date_input",
    "normalize_date",
]
