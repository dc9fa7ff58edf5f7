#!/usr/bin/env python3
"""
Tides Updater

Keeps a cached copy of NOAA water temperature and tide predictions fresh
for a single station.

Usage:
    python run.py              # Refresh once if the cache is stale
    python run.py --force      # Refresh once regardless of cache age
    python run.py --loop       # Refresh on a fixed interval
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config import Config
from core.cache_store import CacheStore, JsonFileCacheStore
from core.clock import Clock, SystemClock
from core.models import TideReading
from core.scheduler import IntervalScheduler, Scheduler
from providers.tides.client import NoaaClient
from providers.tides.controller import RefreshController
from providers.tides.fetcher import TideDataFetcher


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class TideUpdaterService:
    """Wires the refresh controller to its store, fetcher and trigger."""

    def __init__(
        self,
        config: Config,
        store: Optional[CacheStore] = None,
        scheduler: Optional[Scheduler] = None,
        clock: Optional[Clock] = None,
        fetcher: Optional[TideDataFetcher] = None,
    ):
        self.config = config
        settings = config.tides
        self.clock = clock or SystemClock()
        self.store = store or JsonFileCacheStore(config.cache_path)
        self.scheduler = scheduler or IntervalScheduler()
        self.interval = settings["interval"].total_seconds()

        if fetcher is None:
            client = NoaaClient(api_url=settings["api_url"], clock=self.clock)
            fetcher = TideDataFetcher(client, station_id=settings["station"])

        self.controller = RefreshController(
            store=self.store,
            fetcher=fetcher,
            clock=self.clock,
            recency=settings["recency"],
        )

    def run_once(self, force: bool = False) -> Optional[TideReading]:
        """Run a single refresh cycle."""
        return self.controller.refresh(force=force)

    def activate(self) -> bool:
        """
        Schedule periodic refreshes unless already scheduled.

        Returns:
            True if the trigger was started by this call
        """
        if self.scheduler.is_running():
            logging.debug("Tide refresh already scheduled")
            return False

        self.scheduler.start(self.interval, self.controller.refresh)
        return True

    def deactivate(self) -> None:
        """Unschedule periodic refreshes. The cache is left in place."""
        if self.scheduler.is_running():
            self.scheduler.stop()


def describe(entry: Optional[TideReading], clock: Clock) -> str:
    """One-line summary of the cache state."""
    if entry is None:
        return "Tide cache unavailable"
    if not entry.is_valid():
        return f"No tide data yet (next attempt after {entry.expires_at.isoformat()})"

    state = "stale" if entry.is_stale(clock.now()) else "fresh"
    return (
        f"Tide data retrieved {entry.retrieved_at.isoformat()}, "
        f"{state} until {entry.expires_at.isoformat()}"
    )


def positive_int(value: str) -> int:
    """argparse type for a strictly positive integer."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NOAA tide data cache updater")

    parser.add_argument("--loop", action="store_true", help="Run continuously")
    parser.add_argument(
        "--interval",
        type=positive_int,
        default=None,
        help="Update interval in seconds (overrides TIDES_INTERVAL)",
    )
    parser.add_argument(
        "--force", action="store_true", help="Refresh even if the cache is fresh"
    )
    parser.add_argument("--env", type=str, default=None, help="Path to .env file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def main():
    args = build_parser().parse_args()
    setup_logging(args.verbose)

    config = Config(env_path=args.env)
    if not config.is_provider_enabled("tides"):
        print("Tides updater disabled (TIDES_ENABLED=false)")
        sys.exit(0)

    scheduler = IntervalScheduler()
    service = TideUpdaterService(config, scheduler=scheduler)
    if args.interval:
        service.interval = args.interval

    if args.loop:
        if args.force:
            service.run_once(force=True)
        service.activate()
        try:
            scheduler.wait()
        except KeyboardInterrupt:
            logging.info("Stopping")
        finally:
            service.deactivate()
    else:
        entry = service.run_once(force=args.force)
        print(describe(entry, service.clock))


if __name__ == "__main__":
    main()
