"""Combined temperature and tide fetch."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict

from core.models import FetchResult
from providers.tides.client import DEFAULT_STATION, TEMPERATURE, TIDE, NoaaClient

logger = logging.getLogger(__name__)

SERIES = (TEMPERATURE, TIDE)


class TideDataFetcher:
    """
    Fetches both series for a station.

    The fetch succeeds only when every series comes back with a non-empty
    payload; one series is never returned without the other.
    """

    def __init__(self, client: NoaaClient, station_id: str = DEFAULT_STATION):
        self.client = client
        self.station_id = station_id

    def _fetch_one(self, kind: str) -> FetchResult:
        try:
            return self.client.fetch_series(kind, self.station_id)
        except Exception as e:
            return FetchResult.failure(f"unexpected error: {e}")

    def fetch(self) -> FetchResult:
        """
        Fetch temperature and tide data in parallel.

        Returns:
            FetchResult whose payload maps series name to its response
        """
        with ThreadPoolExecutor(max_workers=len(SERIES)) as pool:
            results: Dict[str, FetchResult] = dict(
                zip(SERIES, pool.map(self._fetch_one, SERIES))
            )

        failed = []
        for kind, result in results.items():
            if not result.ok:
                logger.warning(f"Failed to fetch {kind} data: {result.error}")
                failed.append(kind)
            elif not result.payload:
                logger.warning(f"Empty {kind} payload for station {self.station_id}")
                failed.append(kind)

        if failed:
            return FetchResult.failure(f"failed series: {', '.join(failed)}")

        return FetchResult.success(
            {kind: result.payload for kind, result in results.items()}
        )
