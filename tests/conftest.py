"""Shared fixtures for tides-updater tests."""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.clock import Clock


class ManualClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock fixed at 2026-01-18 12:00 UTC."""
    return ManualClock(datetime(2026, 1, 18, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def temperature_payload():
    """Water temperature response from the datagetter endpoint."""
    return {
        "metadata": {
            "id": "8452660",
            "name": "Newport",
            "lat": "41.5043",
            "lon": "-71.3261",
        },
        "data": [{"t": "2026-01-18 11:54", "v": "38.3", "f": "0,0,0"}],
    }


@pytest.fixture
def tide_payload():
    """Hi/lo tide predictions response from the datagetter endpoint."""
    return {
        "predictions": [
            {"t": "2026-01-17 03:12", "v": "3.912", "type": "H"},
            {"t": "2026-01-17 09:40", "v": "0.101", "type": "L"},
            {"t": "2026-01-17 15:31", "v": "3.520", "type": "H"},
            {"t": "2026-01-17 21:58", "v": "-0.204", "type": "L"},
        ]
    }
