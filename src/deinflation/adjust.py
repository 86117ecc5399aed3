"""Inflation adjustment of a monetary value between two months."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from attrs import define, field

from .data.ingest import utc_now
from .data.models import DateSpec
from .data.pipeline import DataLoader
from .dates import normalize_date
from .errors import InvalidValueError
from .output.utils import format_money, month_name

logger = structlog.get_logger(__name__)

INFLATION = "inflation"
DEFLATION = "deflation"


@define(slots=True, frozen=True)
class AdjustmentRequest:
    """The arguments exactly as the caller passed them."""

    value: Any
    date_a: Any
    date_b: Any = None


@define(slots=True, frozen=True, kw_only=True)
class AdjustmentReport:
    """Everything computed for one :meth:`Adjuster.adjust` call."""

    request: AdjustmentRequest
    value: float
    date_a: DateSpec
    date_b: DateSpec
    cpi_a: float
    cpi_b: float
    adjusted_value: float
    kind: str
    value_diff: float
    percent: float
    money: str
    money_diff: str
    notices: tuple[str, ...] = field(factory=tuple, converter=tuple)
    updated_date: bool = False
    auto_adjusted_date: bool = False

    @property
    def is_inflation(self) -> bool:
        return self.kind == INFLATION

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation of the report."""
        return {
            "request": {
                "value": _jsonable(self.request.value),
                "dateA": _jsonable(self.request.date_a),
                "dateB": _jsonable(self.request.date_b),
            },
            "process": {
                "value": self.value,
                "dateA": str(self.date_a),
                "dateB": str(self.date_b),
                "cpiA": self.cpi_a,
                "cpiB": self.cpi_b,
                "adjustedValue": self.adjusted_value,
            },
            "type": self.kind,
            "value": self.adjusted_value,
            "valueDiff": self.value_diff,
            "percent": self.percent,
            "money": self.money,
            "moneyDiff": self.money_diff,
            "notices": list(self.notices),
            "updatedDate": self.updated_date,
            "autoAdjustedDate": self.auto_adjusted_date,
        }


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    return str(value)


def parse_value(value: Any) -> float:
    """Coerce ``value`` to a finite float."""
    if isinstance(value, bool):
        raise InvalidValueError(f"{value!r} is not a monetary amount.")
    try:
        number = float(value.replace(",", "") if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise InvalidValueError(f"{value!r} is not a monetary amount.") from None
    if not math.isfinite(number):
        raise InvalidValueError(f"{value!r} is not a finite amount.")
    return number


@define(slots=True)
class Adjuster:
    """Public entry point combining the loader, date normalization, and arithmetic."""

    loader: DataLoader
    clock: Callable[[], datetime] = field(default=utc_now)

    def adjust(self, value: Any, date_a: Any, date_b: Any = None) -> AdjustmentReport:
        """Express ``value`` at ``date_a`` prices in ``date_b`` prices (default: latest data)."""
        store = self.loader.ensure_ready()
        request = AdjustmentRequest(value, date_a, date_b)
        amount = parse_value(value)
        today = self.clock().date()
        first = normalize_date(date_a, store, today=today)
        second = normalize_date(date_b, store, today=today)

        cpi_a = store.value(first.spec)
        cpi_b = store.value(second.spec)
        ratio = cpi_b / cpi_a
        adjusted = amount * ratio
        diff = adjusted - amount
        if not (math.isfinite(adjusted) and math.isfinite(diff)):
            raise InvalidValueError(f"{value!r} is too large to adjust.")

        report = AdjustmentReport(
            request=request,
            value=amount,
            date_a=first.spec,
            date_b=second.spec,
            cpi_a=cpi_a,
            cpi_b=cpi_b,
            adjusted_value=adjusted,
            kind=INFLATION if adjusted > amount else DEFLATION,
            value_diff=diff,
            percent=ratio * 100,
            money=format_money(adjusted),
            money_diff=format_money(diff),
            notices=first.notices + second.notices,
            updated_date=first.updated or second.updated,
            auto_adjusted_date=first.implicit or second.implicit,
        )
        logger.debug(
            "adjust.computed",
            date_a=str(first.spec),
            date_b=str(second.spec),
            kind=report.kind,
            notices=len(report.notices),
        )
        return report

    def data_last_updated(self) -> str:
        """Describe the newest month available, e.g. ``Inflation data last updated May 2024``."""
        latest = self.loader.ensure_ready().latest()
        return f"Inflation data last updated {month_name(latest.month.number)} {latest.year}"


__all__ = [
    "INFLATION",
    "DEFLATION",
    "AdjustmentRequest",
    "AdjustmentReport",
    "Adjuster",
    "parse_value",
]
