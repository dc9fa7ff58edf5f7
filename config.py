"""Configuration handling for tides-updater."""

import os
import re
import logging
from datetime import timedelta
from pathlib import Path
from typing import Dict, Optional, Any
from dotenv import load_dotenv

from providers.tides.client import DEFAULT_API_URL, DEFAULT_STATION

logger = logging.getLogger(__name__)

DEFAULT_RECENCY = "5 minutes"
DEFAULT_INTERVAL = "10 minutes"

_DURATION_RE = re.compile(r"^\+?\s*(\d+(?:\.\d+)?)\s*([a-z]*)$")

_UNIT_SECONDS = {
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a human duration such as "5 minutes", "1 hour" or "+2 days".

    A bare number is read as seconds.

    Args:
        value: Duration string

    Returns:
        Parsed duration

    Raises:
        ValueError: If the string is not a positive duration
    """
    match = _DURATION_RE.match(value.strip().lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    if unit not in _UNIT_SECONDS:
        raise ValueError(f"Unknown duration unit in {value!r}")

    duration = timedelta(seconds=float(amount) * _UNIT_SECONDS[unit])
    if duration <= timedelta(0):
        raise ValueError(f"Duration must be positive: {value!r}")
    return duration


def _duration_from_env(name: str, default: str) -> timedelta:
    raw = os.getenv(name, default)
    try:
        return parse_duration(raw)
    except ValueError as e:
        logger.warning(f"{name}: {e}, using {default}")
        return parse_duration(default)


class Config:
    """Configuration manager for tides-updater."""

    def __init__(self, env_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            env_path: Path to .env file
        """
        self._load_env(env_path)

        # Global settings
        self.data_dir = os.getenv("DATA_DIR", str(Path(__file__).parent / "data"))

        self.tides = {
            "enabled": os.getenv("TIDES_ENABLED", "true").lower() == "true",
            "station": os.getenv("TIDES_STATION", DEFAULT_STATION),
            "api_url": os.getenv("TIDES_API_URL", DEFAULT_API_URL),
            "cache_file": os.getenv("TIDES_CACHE_FILE", "tides_cache.json"),
            "recency": _duration_from_env("TIDES_RECENCY", DEFAULT_RECENCY),
            "interval": _duration_from_env("TIDES_INTERVAL", DEFAULT_INTERVAL),
        }

    def _load_env(self, env_path: Optional[str] = None) -> None:
        """Load environment variables from .env file."""
        if env_path:
            load_dotenv(env_path)
            return

        search_paths = [
            Path.cwd() / ".env",
            Path(__file__).parent / ".env",
        ]

        for path in search_paths:
            if path.exists():
                load_dotenv(path)
                logger.debug(f"Loaded .env from {path}")
                return

    def get_provider_config(self, provider_name: str) -> Dict[str, Any]:
        """Get configuration for a specific provider."""
        if provider_name == "tides":
            return self.tides
        return {}

    def is_provider_enabled(self, provider_name: str) -> bool:
        """Check if a provider is enabled."""
        config = self.get_provider_config(provider_name)
        return config.get("enabled", False)

    @property
    def cache_path(self) -> Path:
        """Full path of the tide cache file."""
        return Path(self.data_dir) / self.tides["cache_file"]
