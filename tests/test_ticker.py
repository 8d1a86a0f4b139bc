"""Tests for the current-time ticker."""

import threading
import time

import pytest

from fieldplanner.engine.ticker import CurrentTimeTicker


def test_ticker_fires_and_stops():
    """Test that the callback runs periodically and stops after stop()."""
    fired = threading.Event()
    calls = []

    def tick():
        calls.append(time.monotonic())
        fired.set()

    ticker = CurrentTimeTicker(tick, interval=0.01)
    ticker.start()
    assert fired.wait(2.0)
    ticker.stop()

    assert not ticker.running
    count = len(calls)
    time.sleep(0.05)
    assert len(calls) == count


def test_stop_does_not_wait_full_interval():
    """Test that stop() wakes the worker instead of waiting out the period."""
    ticker = CurrentTimeTicker(lambda: None, interval=60.0)
    ticker.start()
    assert ticker.running

    started = time.monotonic()
    ticker.stop()
    assert time.monotonic() - started < 1.0
    assert not ticker.running


def test_start_and_stop_are_idempotent():
    """Test that repeated start() and stop() calls are harmless."""
    ticker = CurrentTimeTicker(lambda: None, interval=60.0)
    ticker.stop()
    ticker.start()
    first_thread = ticker._thread
    ticker.start()
    assert ticker._thread is first_thread
    ticker.stop()
    ticker.stop()
    assert not ticker.running


def test_restart_after_join_timeout_leaves_one_worker():
    """Test that a worker still busy when stop() gives up exits after a restart."""
    entered = threading.Event()
    release = threading.Event()

    def tick():
        entered.set()
        release.wait(5.0)

    ticker = CurrentTimeTicker(tick, interval=0.01)
    ticker.start()
    old_thread = ticker._thread
    assert entered.wait(2.0)

    ticker.stop(timeout=0.01)
    assert old_thread.is_alive()

    ticker.start()
    new_thread = ticker._thread
    assert new_thread is not old_thread
    release.set()

    old_thread.join(2.0)
    assert not old_thread.is_alive()
    assert new_thread.is_alive()

    ticker.stop()
    assert not new_thread.is_alive()


def test_failing_callback_keeps_ticking():
    """Test that an exception in the callback does not kill the ticker."""
    fired = threading.Event()
    calls = []

    def tick():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("redraw failed")
        fired.set()

    with CurrentTimeTicker(tick, interval=0.01) as ticker:
        assert fired.wait(2.0)
        assert ticker.running
    assert not ticker.running


@pytest.mark.parametrize("interval", [0, -1])
def test_interval_must_be_positive(interval):
    """Test that a non-positive interval is rejected."""
    with pytest.raises(ValueError):
        CurrentTimeTicker(lambda: None, interval=interval)
