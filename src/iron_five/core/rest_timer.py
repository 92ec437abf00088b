"""
Rest countdown between sets.

  Idle ──start──▶ Running ──reaches 0──▶ Idle   (TimerComplete)
                     │
                     └──cancel / start──▶ Idle / new Running

Each countdown runs on its own daemon thread and sleeps on a private
threading.Event, so cancel() wakes it immediately.  Starting a new countdown
bumps a generation counter under the lock; a thread only emits while its
generation is current, so a preempted countdown can never tick or complete
again.  The lock is re-entrant so a listener may restart the timer from
inside a callback.
"""

import threading
from enum import Enum
from typing import Iterator

from .config import CUE_SECONDS, DEFAULT_REST_SECONDS, TICK_SECONDS
from .events import Listener, TimerCancelled, TimerComplete, TimerTick, null_listener


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


def countdown(duration_seconds: int) -> Iterator[int]:
    """Remaining seconds after each tick: duration−1, …, 1, 0."""
    yield from range(max(duration_seconds, 1) - 1, -1, -1)


class RestTimer:
    """Single-instance cancellable rest countdown."""

    def __init__(self, listener: Listener = null_listener, tick_seconds: float = TICK_SECONDS):
        self._listener = listener
        self._tick_seconds = tick_seconds
        self._lock = threading.RLock()
        self._generation = 0
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._remaining = 0

    @property
    def state(self) -> TimerState:
        with self._lock:
            return TimerState.RUNNING if self._stop is not None else TimerState.IDLE

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining if self._stop is not None else 0

    def start(self, duration_seconds: int = DEFAULT_REST_SECONDS) -> None:
        """
        Start a countdown, preempting any countdown already running.

        Args:
            duration_seconds: Rest length; 90 s by default
        """
        if duration_seconds < 0:
            raise ValueError("duration_seconds must be non-negative")

        with self._lock:
            if self._stop is not None:
                self._stop.set()
            self._generation += 1
            stop = threading.Event()
            self._stop = stop
            self._remaining = duration_seconds
            thread = threading.Thread(
                target=self._run,
                args=(self._generation, stop, duration_seconds),
                name="rest-timer",
                daemon=True,
            )
            self._thread = thread
        thread.start()

    def cancel(self) -> None:
        """Stop the running countdown ("skip").  No-op when idle."""
        with self._lock:
            if self._stop is None:
                return
            self._stop.set()
            self._stop = None
            self._generation += 1
            self._listener(TimerCancelled(remaining=self._remaining))

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until the current countdown thread exits.

        Returns:
            True if the timer is idle afterwards
        """
        with self._lock:
            thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return self.state is TimerState.IDLE

    def _run(self, generation: int, stop: threading.Event, duration_seconds: int) -> None:
        for remaining in countdown(duration_seconds):
            if stop.wait(self._tick_seconds):
                return
            with self._lock:
                if generation != self._generation:
                    return
                self._remaining = remaining
                if remaining == 0:
                    self._stop = None
                    self._listener(TimerComplete())
                    return
                self._listener(TimerTick(remaining=remaining, is_cue=remaining in CUE_SECONDS))
