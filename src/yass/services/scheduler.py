"""
Auto Save Scheduler for YASS

This module provides the recurring timer that periodically persists the active
save record on a background thread.
"""

import logging
import threading
from typing import Callable, Optional

from yass.models.save_settings import interval_to_milliseconds


class AutoSaveScheduler:
    """
    Recurring auto save timer.

    The callback runs on a daemon worker thread once per interval. Stopping is
    synchronous: when stop() returns, no tick is running and none will run.
    """

    def __init__(self, callback: Callable[[], object], interval_minutes: int = 10):
        """
        Initialize the scheduler.

        Args:
            callback: Function called on every tick
            interval_minutes: Interval preset in minutes
        """
        self.logger = logging.getLogger("YASS")
        self.callback = callback
        self.interval_ms = interval_to_milliseconds(interval_minutes)

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._worker: Optional[threading.Thread] = None
        self.tick_count = 0

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    def start(self) -> bool:
        """
        Start the timer. Starting a running timer does nothing.

        Returns:
            bool: True if the timer is running after the call
        """
        with self._lock:
            if self.is_running:
                return True

            self._stop_event = threading.Event()
            self._worker = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="AutoSave",
                daemon=True
            )
            self._worker.start()

        self.logger.info(f"Auto save started, every {self.interval_ms // 60000} minutes")
        return True

    def stop(self) -> None:
        """
        Stop the timer and wait for an in-flight tick to finish.

        Stopping a stopped timer does nothing.
        """
        with self._lock:
            worker = self._worker
            if worker is None:
                return
            self._stop_event.set()
            self._worker = None

        if worker is not threading.current_thread():
            worker.join()

        self.logger.info("Auto save stopped")

    def set_enabled(self, enabled: bool) -> None:
        """
        Enable or disable the timer.

        Args:
            enabled: True to start ticking, False to stop
        """
        if enabled:
            self.start()
        else:
            self.stop()

    def set_interval(self, interval_minutes: int) -> None:
        """
        Change the interval, restarting the timer if it is running.

        Args:
            interval_minutes: Interval preset in minutes
        """
        interval_ms = interval_to_milliseconds(interval_minutes)
        if interval_ms == self.interval_ms:
            return

        self.interval_ms = interval_ms
        if self.is_running:
            self.stop()
            self.start()

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval_seconds):
            self._tick(stop_event)

    def _tick(self, stop_event: threading.Event) -> None:
        if stop_event.is_set():
            return

        self.tick_count += 1
        try:
            self.callback()
        except Exception as e:
            self.logger.error(f"Auto save tick failed: {e}")
