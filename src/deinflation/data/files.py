"""Constants describing the BLS time-series API and the local cache."""

import re

BASE_URL = "https://api.bls.gov/publicAPI/v2/timeseries/data/"
# CPI for All Urban Consumers, U.S. city average, all items, not seasonally adjusted.
SERIES_ID = "CUUR0000SA0"
CACHE_FILE = "inflation-data.json"

SUCCESS_STATUS = "REQUEST_SUCCEEDED"

# First year of the CPI-U series.
FIRST_YEAR = 1913
FIRST_MONTH = 1

AVERAGE_PERIOD = "M13"
AVERAGE_KEY = "AVG"
MISSING_VALUE = "-"

STALE_AFTER_HOURS = 24


def exhausted_message_pattern(series_id: str) -> re.Pattern[str]:
    """Return the provider message that marks the end of a series."""
    return re.compile(rf"^No Data Available for Series {re.escape(series_id)} Year: \d+$")


__all__ = [
    "BASE_URL",
    "SERIES_ID",
    "CACHE_FILE",
    "SUCCESS_STATUS",
    "FIRST_YEAR",
    "FIRST_MONTH",
    "AVERAGE_PERIOD",
    "AVERAGE_KEY",
    "MISSING_VALUE",
    "STALE_AFTER_HOURS",
    "exhausted_message_pattern",
]
