"""HTTP client for the BLS public time-series API."""

from typing import Any
from urllib.parse import urljoin

import requests
import structlog
from attrs import define, field

from ..errors import RemoteAPIError
from .files import BASE_URL, SERIES_ID

logger = structlog.get_logger(__name__)


@define(slots=True)
class BlsApiClient:
    """Thin wrapper around the single-series ``timeseries/data`` endpoint."""

    api_key: str
    series_id: str = SERIES_ID
    base_url: str = BASE_URL
    timeout: float = 30.0
    session: requests.Session = field(factory=requests.Session)
    headers: dict[str, str] = field(
        factory=lambda: {"Accept": "application/json"},
    )

    @property
    def url(self) -> str:
        return urljoin(self.base_url, self.series_id)

    def fetch_page(self, start_year: int, end_year: int) -> dict[str, Any]:
        """Request observations for ``start_year``..``end_year`` and return the JSON body."""
        params = {
            "registrationkey": self.api_key,
            "catalog": "false",
            "startyear": str(start_year),
            "endyear": str(end_year),
            "calculations": "false",
            "annualaverage": "true",
        }
        log = logger.bind(series_id=self.series_id, start_year=start_year, end_year=end_year)
        log.debug("http.fetch_start", timeout=self.timeout)
        try:
            response = self.session.get(
                self.url, params=params, timeout=self.timeout, headers=self.headers
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            log.error("http.fetch_failed", status=status, exc_info=True)
            raise RemoteAPIError(f"The BLS API returned HTTP {status}.") from exc
        except requests.RequestException as exc:
            log.error("http.fetch_failed", status=None, exc_info=True)
            raise RemoteAPIError(f"Could not reach the BLS API: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            log.error("http.invalid_json", bytes=len(response.content))
            raise RemoteAPIError("The BLS API returned a body that is not JSON.") from exc
        log.debug("http.fetch_success", bytes=len(response.content))
        return payload

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()
        logger.debug("http.session_closed")


__all__ = ["BlsApiClient"]
