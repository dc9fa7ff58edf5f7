# Core utilities for tides-updater
from .cache_store import CacheStore, InMemoryCacheStore, JsonFileCacheStore
from .clock import Clock, SystemClock
from .models import FetchResult, TideReading
from .scheduler import IntervalScheduler, Scheduler

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "JsonFileCacheStore",
    "Clock",
    "SystemClock",
    "FetchResult",
    "TideReading",
    "IntervalScheduler",
    "Scheduler",
]
