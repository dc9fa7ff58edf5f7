"""NOAA CO-OPS client for water temperature and tide predictions."""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from urllib.parse import urlencode

import requests

from core.clock import Clock, SystemClock
from core.models import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"
DEFAULT_STATION = "8452660"

USER_AGENT = "URI Tides WordPress Plugin"
REQUEST_TIMEOUT = 5

TEMPERATURE = "temperature"
TIDE = "tide"

# Field that must be present in a decoded response for each series
SERIES_MARKERS = {
    TEMPERATURE: "metadata",
    TIDE: "predictions",
}


class NoaaClient:
    """Fetches a single data series from the NOAA datagetter endpoint."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        clock: Optional[Clock] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """
        Initialize NOAA client.

        Args:
            api_url: Base URL of the datagetter endpoint
            clock: Time source for the prediction date range
            timeout: Per-request timeout in seconds
        """
        self.api_url = api_url
        self.clock = clock or SystemClock()
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def _query_params(
        self, kind: str, station_id: str, now: datetime
    ) -> List[Tuple[str, str]]:
        if kind == TEMPERATURE:
            return [
                ("product", "water_temperature"),
                ("application", "NOS.COOPS.TAC.PHYSOCEAN"),
                ("date", "latest"),
                ("station", station_id),
                ("time_zone", "GMT"),
                ("units", "english"),
                ("interval", "6"),
                ("format", "json"),
            ]

        if kind == TIDE:
            begin_date = (now - timedelta(days=1)).strftime("%Y%m%d")
            end_date = (now + timedelta(days=2)).strftime("%Y%m%d")
            return [
                ("product", "predictions"),
                ("application", "NOS.COOPS.TAC.WL"),
                ("begin_date", begin_date),
                ("end_date", end_date),
                ("datum", "MLLW"),
                ("station", station_id),
                ("time_zone", "GMT"),
                ("units", "english"),
                ("interval", "hilo"),
                ("format", "json"),
            ]

        raise ValueError(f"Unknown series: {kind}")

    def build_url(
        self, kind: str, station_id: str, now: Optional[datetime] = None
    ) -> str:
        """
        Build the request URL for a series.

        Args:
            kind: "temperature" or "tide"
            station_id: NOAA station identifier
            now: Reference time for the tide date range (defaults to clock)

        Returns:
            Full request URL
        """
        if now is None:
            now = self.clock.now()
        params = self._query_params(kind, station_id, now)
        return f"{self.api_url}?{urlencode(params)}"

    def fetch_series(self, kind: str, station_id: str) -> FetchResult:
        """
        Fetch one series.

        Any transport error, non-200 status, empty body, invalid JSON or
        missing series marker is returned as a failure. Nothing is retried.

        Args:
            kind: "temperature" or "tide"
            station_id: NOAA station identifier

        Returns:
            FetchResult with the decoded JSON object as payload
        """
        url = self.build_url(kind, station_id)
        logger.debug(f"Fetching {kind} data from {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            return FetchResult.failure(f"request failed: {e}")

        if response.status_code != 200:
            return FetchResult.failure(f"HTTP {response.status_code}")

        if not response.content:
            return FetchResult.failure("empty response body")

        try:
            data = response.json()
        except ValueError as e:
            return FetchResult.failure(f"invalid JSON response: {e}")

        marker = SERIES_MARKERS[kind]
        if not isinstance(data, dict) or data.get(marker) is None:
            return FetchResult.failure(f"response has no '{marker}' field")

        return FetchResult.success(data)
