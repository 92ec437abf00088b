"""
Typed events emitted by the session driver and rest timer, plus the
telemetry boundary.

A platform layer subscribes with a listener callable and maps events to
whatever feedback it renders (haptics, sound, console output).  The core
never knows how an event is presented.
"""

from dataclasses import dataclass
from typing import Callable, Protocol, Union

from .models import PrescribedSet, SetCategory


@dataclass(frozen=True)
class SetCompleted:
    category: SetCategory
    index: int
    prescribed: PrescribedSet


@dataclass(frozen=True)
class TimerTick:
    remaining: int
    is_cue: bool = False  # last seconds of the countdown


@dataclass(frozen=True)
class TimerComplete:
    pass


@dataclass(frozen=True)
class TimerCancelled:
    remaining: int


FeedbackEvent = Union[SetCompleted, TimerTick, TimerComplete, TimerCancelled]
Listener = Callable[[FeedbackEvent], None]


def null_listener(event: FeedbackEvent) -> None:
    """Listener that ignores every event."""


class TelemetrySource(Protocol):
    """Live readings shown next to the workout; never used in calculations."""

    def heart_rate(self) -> float: ...

    def active_energy(self) -> float: ...


@dataclass
class StaticTelemetry:
    """Fixed readings, for consoles without a device attached."""

    bpm: float = 0.0
    kcal: float = 0.0

    def heart_rate(self) -> float:
        return self.bpm

    def active_energy(self) -> float:
        return self.kcal
