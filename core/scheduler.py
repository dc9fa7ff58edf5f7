"""Periodic trigger that invokes the refresh routine."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Fires a callback on a fixed cadence until stopped."""

    @abstractmethod
    def start(self, interval: float, callback: Callable[[], object]) -> None:
        """
        Begin invoking ``callback`` every ``interval`` seconds.

        Args:
            interval: Seconds between invocations
            callback: Zero-argument callable
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop invoking the callback."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        pass


class IntervalScheduler(Scheduler):
    """
    Runs the callback on a daemon thread: once immediately, then every
    ``interval`` seconds. Exceptions raised by the callback are logged and the
    loop keeps going.
    """

    def __init__(self, name: str = "tides-refresh"):
        self.name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self, interval: float, callback: Callable[[], object]) -> None:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        if self.is_running():
            raise RuntimeError(f"Scheduler {self.name} is already running")

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(interval, callback, self._stop_event),
            name=self.name,
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Scheduled {self.name} every {interval:.0f}s")

    def _run(
        self,
        interval: float,
        callback: Callable[[], object],
        stop_event: threading.Event,
    ) -> None:
        while not stop_event.is_set():
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in {self.name}: {e}")

            stop_event.wait(interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info(f"Unscheduled {self.name}")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the scheduler is stopped.

        Returns:
            True if stopped, False if the timeout elapsed first
        """
        return self._stop_event.wait(timeout)
