"""Adjust US dollar amounts for inflation using BLS CPI-U data."""

from __future__ import annotations

from typing import Any

from .adjust import AdjustmentReport, Adjuster
from .config import Settings
from .data.pipeline import DataLoader
from .errors import (
    CorruptCacheError,
    DataUnavailableError,
    DeinflationError,
    InvalidDateFormat,
    InvalidValueError,
    MissingCredentialsError,
    MissingIndexError,
    RemoteAPIError,
)

_default_adjuster: Adjuster | None = None


def build_adjuster(settings: Settings | None = None) -> Adjuster:
    """Create an adjuster with its own store, cache, and API client settings."""
    settings = settings or Settings.from_env()
    return Adjuster(loader=DataLoader.from_settings(settings))


def get_default_adjuster() -> Adjuster:
    """Return the process-wide adjuster, creating it from the environment once."""
    global _default_adjuster
    if _default_adjuster is None:
        _default_adjuster = build_adjuster()
    return _default_adjuster


def set_default_adjuster(adjuster: Adjuster | None) -> None:
    """Replace (or with ``None`` discard) the process-wide adjuster."""
    global _default_adjuster
    _default_adjuster = adjuster


def adjust(value: Any, date_a: Any, date_b: Any = None) -> AdjustmentReport:
    """Adjust ``value`` from ``date_a`` prices to ``date_b`` (or latest) prices."""
    return get_default_adjuster().adjust(value, date_a, date_b)


def data_last_updated() -> str:
    return get_default_adjuster().data_last_updated()


__all__ = [
    "adjust",
    "data_last_updated",
    "build_adjuster",
    "get_default_adjuster",
    "set_default_adjuster",
    "Adjuster",
    "AdjustmentReport",
    "Settings",
    "DeinflationError",
    "InvalidDateFormat",
    "InvalidValueError",
    "MissingIndexError",
    "DataUnavailableError",
    "CorruptCacheError",
    "RemoteAPIError",
    "MissingCredentialsError",
]
