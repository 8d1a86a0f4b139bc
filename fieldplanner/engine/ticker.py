"""Cancellable fixed-period tick used to refresh the current-time line."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CurrentTimeTicker:
    """
    Call a function every `interval` seconds on a daemon thread until stopped.

    start() and stop() are idempotent; stop() wakes the worker immediately
    instead of waiting out the period.
    """

    def __init__(self, callback: Callable[[], None], interval: float = 60.0, name: str = "current-time-ticker"):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.callback = callback
        self.interval = interval
        self.name = name
        self._stop: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        # Fresh event per run so a worker that outlived a join timeout still sees its own stop
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, args=(self._stop,), name=self.name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        if self._stop is not None:
            self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval):
            try:
                self.callback()
            except Exception:
                # A failing redraw must not kill the ticker
                logger.exception("Current-time tick failed")

    def __enter__(self) -> "CurrentTimeTicker":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
