"""Data types shared by the tide fetcher, controller and cache stores."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

# Age given to the placeholder reading so the first refresh always fetches
SENTINEL_AGE = timedelta(seconds=10)


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, reading naive values as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class FetchResult:
    """Outcome of an upstream fetch: a payload on success, a reason on failure."""

    ok: bool
    payload: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, payload: Any) -> "FetchResult":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, error: str) -> "FetchResult":
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class TideReading:
    """
    Combined temperature and tide payloads as held in the cache.

    A reading that has never been filled from upstream carries ``None`` for
    both payloads and timestamps in the past.
    """

    temperature: Optional[Dict[str, Any]]
    tide: Optional[Dict[str, Any]]
    retrieved_at: datetime
    expires_at: datetime

    @classmethod
    def sentinel(cls, now: datetime) -> "TideReading":
        """Empty reading that is already expired at ``now``."""
        past = now - SENTINEL_AGE
        return cls(temperature=None, tide=None, retrieved_at=past, expires_at=past)

    def is_valid(self) -> bool:
        """Both series present and non-empty."""
        return bool(self.temperature) and bool(self.tide)

    def is_stale(self, now: datetime) -> bool:
        return self.expires_at < now

    def with_expiry(self, expires_at: datetime) -> "TideReading":
        """Copy of this reading with only the expiry moved."""
        return replace(self, expires_at=expires_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "tide": self.tide,
            "retrieved_at": self.retrieved_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TideReading":
        """
        Build a reading from its stored form.

        Entries written without an expiry fall back to their retrieval time.

        Raises:
            ValueError: If neither timestamp is present or parseable
        """
        retrieved_at = data.get("retrieved_at")
        expires_at = data.get("expires_at") or retrieved_at
        if not expires_at:
            raise ValueError("Cached entry has no timestamps")
        if not retrieved_at:
            retrieved_at = expires_at

        return cls(
            temperature=data.get("temperature"),
            tide=data.get("tide"),
            retrieved_at=_parse_timestamp(retrieved_at),
            expires_at=_parse_timestamp(expires_at),
        )
