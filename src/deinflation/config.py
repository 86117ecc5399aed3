"""Runtime configuration sourced from the environment."""

from __future__ import annotations

import os
from pathlib import Path

from attrs import define, field
from dotenv import find_dotenv, load_dotenv

from .data.files import CACHE_FILE, SERIES_ID
from .errors import MissingCredentialsError

API_KEY_ENV = "BLS_API_KEY"
CACHE_PATH_ENV = "DEINFLATION_CACHE_PATH"
SERIES_ID_ENV = "DEINFLATION_SERIES_ID"
TIMEOUT_ENV = "DEINFLATION_TIMEOUT"


def _optional_str(value: str | None) -> str | None:
    """Treat blank strings as unset."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@define(slots=True, frozen=True)
class Settings:
    """Resolved settings for the loader, cache, and HTTP client."""

    api_key: str | None = field(default=None, converter=_optional_str)
    cache_path: Path = field(default=Path(CACHE_FILE), converter=Path)
    series_id: str = SERIES_ID
    timeout: float = field(default=30.0, converter=float)

    @classmethod
    def from_env(cls, *, dotenv: bool = True, **overrides: object) -> Settings:
        """Build settings from ``os.environ``, reading a ``.env`` file first."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        values: dict[str, object] = {
            "api_key": os.environ.get(API_KEY_ENV),
            "cache_path": os.environ.get(CACHE_PATH_ENV) or CACHE_FILE,
            "series_id": os.environ.get(SERIES_ID_ENV) or SERIES_ID,
            "timeout": os.environ.get(TIMEOUT_ENV) or 30.0,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def require_api_key(self) -> str:
        """Return the API key or fail before any request is attempted."""
        if not self.api_key:
            raise MissingCredentialsError(
                f"{API_KEY_ENV} is not set; register for a key at https://www.bls.gov/data/#api."
            )
        return self.api_key


__all__ = ["Settings", "API_KEY_ENV", "CACHE_PATH_ENV", "SERIES_ID_ENV", "TIMEOUT_ENV"]
