"""Exception hierarchy for CPI adjustments."""


class DeinflationError(Exception):
    """Base class for every error raised by the library."""


class InvalidDateFormat(DeinflationError):
    """A date argument could not be interpreted as a year/month pair."""


class InvalidValueError(DeinflationError):
    """The amount to adjust is not a finite number."""


class MissingIndexError(DeinflationError):
    """A resolved date has no index value in the store."""


class DataUnavailableError(DeinflationError):
    """The CPI dataset could not be brought to a usable state."""


class CorruptCacheError(DataUnavailableError):
    """The persisted dataset could not be parsed and was deleted."""


class RemoteAPIError(DataUnavailableError):
    """The index provider responded with something other than success."""


class MissingCredentialsError(DataUnavailableError):
    """No API key is configured for the index provider."""


__all__ = [
    "DeinflationError",
    "InvalidDateFormat",
    "InvalidValueError",
    "MissingIndexError",
    "DataUnavailableError",
    "CorruptCacheError",
    "RemoteAPIError",
    "MissingCredentialsError",
]
