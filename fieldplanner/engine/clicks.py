"""Single vs double click disambiguation for job activations."""

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")

DOUBLE_CLICK_THRESHOLD_MS = 300.0


class ClickDispatcher(Generic[T]):
    """
    Route activations of the same item to single- or double-click callbacks.

    An activation is held pending until either a second activation of the
    same item arrives within the threshold (one double click, no single
    click) or the threshold elapses (single click). Expiry is detected on
    the next activation, by calling poll(), or, with auto_resolve, by a
    timer armed for each pending activation. flush() resolves a pending
    activation immediately.

    Each dispatcher owns its own state, so several calendar views never
    interfere with each other.
    """

    def __init__(
        self,
        on_click: Optional[Callable[[T], None]] = None,
        on_double_click: Optional[Callable[[T], None]] = None,
        threshold_ms: float = DOUBLE_CLICK_THRESHOLD_MS,
        clock: Callable[[], float] = time.monotonic,
        key: Callable[[T], Hashable] = lambda item: getattr(item, "id", item),
        auto_resolve: bool = False,
    ):
        """
        Args:
            on_click: Called with the item on a single click
            on_double_click: Called with the item on a double click
            threshold_ms: Maximum gap between activations of a double click
            clock: Seconds source (monotonic by default)
            key: Identity of the activated control
            auto_resolve: Fire pending single clicks from a timer thread
        """
        self.on_click = on_click
        self.on_double_click = on_double_click
        self.threshold = threshold_ms / 1000.0
        self.clock = clock
        self.key = key
        self.auto_resolve = auto_resolve
        self._lock = threading.Lock()
        self._pending: Optional[T] = None
        self._pending_at: float = 0.0
        self._generation = 0
        self._timer: Optional[threading.Timer] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def _take_pending(self) -> Optional[T]:
        # Caller holds the lock
        item, self._pending = self._pending, None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return item

    def _fire_single(self, item: Optional[T]) -> None:
        if item is not None and self.on_click is not None:
            self.on_click(item)

    def activate(self, item: T, at: float | None = None) -> None:
        """Register one activation (click) of item."""
        now = self.clock() if at is None else at
        resolved: Optional[T] = None
        double = False

        with self._lock:
            if self._pending is not None:
                same = self.key(self._pending) == self.key(item)
                if same and now - self._pending_at < self.threshold:
                    self._take_pending()
                    double = True
                else:
                    resolved = self._take_pending()

            if not double:
                self._pending = item
                self._pending_at = now
                self._generation += 1
                if self.auto_resolve:
                    self._timer = threading.Timer(self.threshold, self._expire, args=(self._generation,))
                    self._timer.daemon = True
                    self._timer.start()

        self._fire_single(resolved)
        if double and self.on_double_click is not None:
            self.on_double_click(item)

    def _expire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                return
            item, self._pending = self._pending, None
            self._timer = None
        self._fire_single(item)

    def poll(self, at: float | None = None) -> bool:
        """Fire the pending single click if its window has closed. Returns True if fired."""
        now = self.clock() if at is None else at
        with self._lock:
            if self._pending is None or now - self._pending_at < self.threshold:
                return False
            item = self._take_pending()
        self._fire_single(item)
        return True

    def flush(self) -> None:
        """Resolve any pending activation as a single click."""
        with self._lock:
            item = self._take_pending()
        self._fire_single(item)

    def cancel(self) -> None:
        """Drop any pending activation without firing it."""
        with self._lock:
            self._take_pending()
