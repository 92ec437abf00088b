"""
Rest timer tests.

Ticks are shortened to 10 ms so full countdowns finish quickly; cancel tests
use a long tick so no tick can fire before the assertion.
"""

import threading

import pytest

from iron_five.core.events import TimerCancelled, TimerComplete, TimerTick
from iron_five.core.rest_timer import RestTimer, TimerState, countdown

FAST_TICK = 0.01
SLOW_TICK = 10.0


class _Recorder:
    """Thread-safe listener that keeps every event."""

    def __init__(self):
        self._lock = threading.Lock()
        self.events = []

    def __call__(self, event):
        with self._lock:
            self.events.append(event)

    def of_type(self, kind):
        with self._lock:
            return [e for e in self.events if isinstance(e, kind)]


class TestCountdown:

    def test_remaining_sequence(self):
        assert list(countdown(3)) == [2, 1, 0]

    def test_zero_duration_completes_after_one_tick(self):
        assert list(countdown(0)) == [0]


class TestRestTimer:

    def test_idle_initially(self):
        timer = RestTimer()
        assert timer.state is TimerState.IDLE
        assert timer.remaining == 0

    def test_full_countdown_events(self):
        rec = _Recorder()
        timer = RestTimer(rec, tick_seconds=FAST_TICK)
        timer.start(5)
        assert timer.wait(timeout=5)

        # 4, 3, 2, 1 ticks (last three are cues), then one completion
        assert rec.events == [
            TimerTick(remaining=4, is_cue=False),
            TimerTick(remaining=3, is_cue=True),
            TimerTick(remaining=2, is_cue=True),
            TimerTick(remaining=1, is_cue=True),
            TimerComplete(),
        ]
        assert timer.state is TimerState.IDLE

    def test_running_state(self):
        timer = RestTimer(tick_seconds=SLOW_TICK)
        timer.start(90)
        assert timer.state is TimerState.RUNNING
        assert timer.remaining == 90
        timer.cancel()

    def test_cancel_stops_countdown(self):
        rec = _Recorder()
        timer = RestTimer(rec, tick_seconds=SLOW_TICK)
        timer.start(90)
        timer.cancel()

        assert timer.state is TimerState.IDLE
        assert timer.wait(timeout=1)
        assert rec.events == [TimerCancelled(remaining=90)]

    def test_cancel_is_idempotent(self):
        rec = _Recorder()
        timer = RestTimer(rec, tick_seconds=SLOW_TICK)
        timer.cancel()
        timer.start(90)
        timer.cancel()
        timer.cancel()
        assert len(rec.of_type(TimerCancelled)) == 1

    def test_restart_preempts_previous_countdown(self):
        rec = _Recorder()
        timer = RestTimer(rec, tick_seconds=FAST_TICK)
        timer.start(500)
        timer.start(3)
        assert timer.wait(timeout=5)

        # only the second countdown may complete
        assert len(rec.of_type(TimerComplete)) == 1
        assert rec.events[-1] == TimerComplete()
        assert rec.of_type(TimerCancelled) == []

    def test_restart_many_times_single_completion(self):
        rec = _Recorder()
        timer = RestTimer(rec, tick_seconds=FAST_TICK)
        for _ in range(10):
            timer.start(2)
        assert timer.wait(timeout=5)
        assert len(rec.of_type(TimerComplete)) == 1

    def test_can_restart_after_completion(self):
        rec = _Recorder()
        timer = RestTimer(rec, tick_seconds=FAST_TICK)
        timer.start(1)
        assert timer.wait(timeout=5)
        timer.start(1)
        assert timer.wait(timeout=5)
        assert rec.events == [TimerComplete(), TimerComplete()]

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError):
            RestTimer().start(-1)
