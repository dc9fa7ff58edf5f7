# NOAA tide and water temperature data
from providers.tides.client import NoaaClient
from providers.tides.controller import RefreshController
from providers.tides.fetcher import TideDataFetcher

__all__ = ["NoaaClient", "RefreshController", "TideDataFetcher"]
