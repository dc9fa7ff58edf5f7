"""Cache refresh policy for the tide reading."""

import logging
from datetime import timedelta
from typing import Optional

from core.cache_store import CacheStore
from core.clock import Clock, SystemClock
from core.models import TideReading
from providers.tides.fetcher import TideDataFetcher

logger = logging.getLogger(__name__)

DEFAULT_RECENCY = timedelta(minutes=5)
BACKOFF_WINDOW = timedelta(hours=1)


class RefreshController:
    """
    Decides when the cached tide reading is refreshed.

    A stale entry triggers a fetch. On success the entry is replaced and kept
    fresh for ``recency``. On failure the previous payload is kept as-is and
    its expiry pushed out by ``BACKOFF_WINDOW``, so an outage neither empties
    the cache nor retries on every tick.
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: TideDataFetcher,
        clock: Optional[Clock] = None,
        recency: timedelta = DEFAULT_RECENCY,
    ):
        """
        Initialize the controller.

        Args:
            store: Cache holding the single tide reading
            fetcher: Source of fresh readings
            clock: Time source (defaults to UTC wall clock)
            recency: How long a successful reading stays fresh
        """
        self.store = store
        self.fetcher = fetcher
        self.clock = clock or SystemClock()
        self.recency = recency

    def refresh(self, force: bool = False) -> Optional[TideReading]:
        """
        Refresh the cache if the stored reading is stale.

        Never raises; failures are logged.

        Args:
            force: Fetch even if the stored reading is still fresh

        Returns:
            The reading now in the cache, or None if the cache could not be read
        """
        try:
            return self._refresh(force)
        except Exception as e:
            logger.error(f"Error refreshing tide cache: {e}")
            return None

    def _refresh(self, force: bool) -> TideReading:
        now = self.clock.now()

        entry = self.store.get()
        if entry is None:
            logger.debug("No cached tide data, starting from empty entry")
            entry = TideReading.sentinel(now)

        if not force and not entry.is_stale(now):
            logger.debug(f"Cache valid until {entry.expires_at.isoformat()}")
            return entry

        result = self.fetcher.fetch()
        if result.ok:
            updated = TideReading(
                temperature=result.payload["temperature"],
                tide=result.payload["tide"],
                retrieved_at=now,
                expires_at=now + self.recency,
            )
            logger.info(f"Fetched tide data, fresh until {updated.expires_at.isoformat()}")
        else:
            updated = entry.with_expiry(now + BACKOFF_WINDOW)
            logger.warning(
                f"Tide fetch failed ({result.error}), keeping cached data "
                f"until {updated.expires_at.isoformat()}"
            )

        try:
            self.store.put(updated)
        except OSError as e:
            logger.error(f"Failed to write tide cache: {e}")

        return updated
