"""
Session driver.

Holds the prescription for one workout, lets the caller check sets off,
starts the rest timer after every completed set and, at the end, hands the
AMRAP outcome to the progression engine.  Persistence stays with the
caller: finish() returns the new profile and session record without saving
either.
"""

from typing import Iterable, Mapping

from .config import CYCLE_INCREMENTS, DEFAULT_REST_SECONDS, ROUNDING_INCREMENT
from .events import Listener, SetCompleted, TelemetrySource, null_listener
from .models import (
    AccessoryExercise,
    Lift,
    LifterProfile,
    PrescribedSet,
    SetCategory,
    WorkoutSession,
)
from .prescriber import generate_prescription
from .progression import amrap_outcome, finalize_session
from .rest_timer import RestTimer


class WorkoutRun:
    """One in-progress session for a single main lift."""

    def __init__(
        self,
        lift: Lift,
        profile: LifterProfile,
        accessories: Iterable[AccessoryExercise] = (),
        listener: Listener = null_listener,
        rest_seconds: int = DEFAULT_REST_SECONDS,
        timer: RestTimer | None = None,
        telemetry: TelemetrySource | None = None,
        increment: float = ROUNDING_INCREMENT,
    ):
        self.lift = lift
        self.profile = profile
        self.prescription = generate_prescription(lift, profile, accessories, increment)
        self.rest_seconds = rest_seconds
        self.telemetry = telemetry
        self._listener = listener
        self.timer = timer if timer is not None else RestTimer(listener)

    def get_set(self, category: SetCategory, index: int) -> PrescribedSet:
        return self.prescription.block(category)[index]

    def log_reps(self, category: SetCategory, index: int, reps: int) -> PrescribedSet:
        """Record reps on a set without changing its completion state."""
        if reps < 0:
            raise ValueError("reps must be non-negative")
        s = self.get_set(category, index)
        s.actual_reps = reps
        return s

    def complete_set(
        self,
        category: SetCategory,
        index: int,
        actual_reps: int | None = None,
    ) -> PrescribedSet:
        """
        Toggle a set's completion.

        Checking a set off records ``actual_reps`` (or the label's target
        when no reps were logged), emits SetCompleted and starts the rest
        timer.  Checking an already completed set un-completes it and
        leaves the timer alone.
        """
        s = self.get_set(category, index)
        if s.is_completed:
            s.is_completed = False
            return s

        if actual_reps is not None:
            if actual_reps < 0:
                raise ValueError("actual_reps must be non-negative")
            s.actual_reps = actual_reps
        elif s.actual_reps == 0:
            s.actual_reps = s.target_reps
        s.is_completed = True

        self._listener(SetCompleted(category=category, index=index, prescribed=s))
        self.timer.start(self.rest_seconds)
        return s

    def skip_rest(self) -> None:
        self.timer.cancel()

    @property
    def amrap(self) -> tuple[int, float]:
        return amrap_outcome(self.prescription)

    @property
    def progress(self) -> tuple[int, int]:
        """(completed sets, total sets)."""
        sets = list(self.prescription.all_sets())
        return sum(1 for s in sets if s.is_completed), len(sets)

    def finish(
        self,
        date: str | None = None,
        increments: Mapping[str, float] = CYCLE_INCREMENTS,
    ) -> tuple[LifterProfile, WorkoutSession]:
        """Stop any rest countdown and finalize the session."""
        self.timer.cancel()
        reps, weight = self.amrap
        return finalize_session(self.lift, self.profile, reps, weight, date, increments)
