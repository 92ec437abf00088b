"""
Program progression for 5/3/1.

State machine over (cycle, week):

  any lift but OHP      → no change
  OHP, week 1..3        → week + 1
  OHP, week 4 (deload)  → week 1, cycle + 1, 1RMs + cycle increments

The rotation is Squat → Bench → Deadlift → OHP, so the week advances once,
after the last lift of the week.  Cycle increments default to +10 for
squat/deadlift and +5 for bench/OHP (config.CYCLE_INCREMENTS).
"""

from dataclasses import replace
from typing import Iterable, Mapping

from .config import CYCLE_INCREMENTS, DELOAD_WEEK
from .models import Lift, LifterProfile, Prescription, WorkoutSession

ROTATION: tuple[Lift, ...] = (Lift.SQUAT, Lift.BENCH, Lift.DEADLIFT, Lift.OHP)
LAST_LIFT_OF_WEEK: Lift = ROTATION[-1]


def next_lift(sessions: Iterable[WorkoutSession]) -> Lift:
    """
    Return the lift to train next.

    Follows the rotation from the most recent session (by date); SQUAT when
    there is no history.  Pass sessions in insertion order
    (``list_sessions(newest_first=False)``): among equal dates the later
    entry is the most recent.
    """
    latest: WorkoutSession | None = None
    for s in sessions:
        if latest is None or s.date >= latest.date:
            latest = s
    if latest is None:
        return ROTATION[0]
    idx = ROTATION.index(latest.main_lift)
    return ROTATION[(idx + 1) % len(ROTATION)]


def amrap_outcome(prescription: Prescription) -> tuple[int, float]:
    """
    Return (reps, weight) of the completed AMRAP set.

    (0, 0.0) when the week has no AMRAP set or it was not checked off.
    """
    amrap = prescription.amrap_set
    if amrap is None or not amrap.is_completed:
        return 0, 0.0
    return amrap.actual_reps, amrap.weight


def advance_profile(
    profile: LifterProfile,
    lift: Lift,
    increments: Mapping[str, float] = CYCLE_INCREMENTS,
) -> LifterProfile:
    """
    Return the profile after finishing a session of ``lift``.

    The input profile is left untouched.
    """
    if lift != LAST_LIFT_OF_WEEK:
        return replace(profile)

    if profile.current_week < DELOAD_WEEK:
        return replace(profile, current_week=profile.current_week + 1)

    return replace(
        profile,
        current_week=1,
        current_cycle=profile.current_cycle + 1,
        squat_1rm=profile.squat_1rm + increments.get("squat", 0.0),
        bench_1rm=profile.bench_1rm + increments.get("bench", 0.0),
        deadlift_1rm=profile.deadlift_1rm + increments.get("deadlift", 0.0),
        ohp_1rm=profile.ohp_1rm + increments.get("ohp", 0.0),
    )


def finalize_session(
    lift: Lift,
    profile: LifterProfile,
    amrap_reps: int,
    amrap_weight: float,
    date: str | None = None,
    increments: Mapping[str, float] = CYCLE_INCREMENTS,
) -> tuple[LifterProfile, WorkoutSession]:
    """
    Close out a session.

    Args:
        lift: Main lift trained
        profile: Program state the session was prescribed from
        amrap_reps: Reps logged on the AMRAP set (0 if none)
        amrap_weight: Load of the AMRAP set (0 if none)
        date: ISO timestamp for the record (default: now)
        increments: Per-lift 1RM increase applied when a cycle completes

    Returns:
        (updated profile, session record for the store).  The record carries
        the pre-update week and cycle.
    """
    if amrap_reps <= 0:
        amrap_reps, amrap_weight = 0, 0.0

    fields = dict(
        main_lift=lift,
        week=profile.current_week,
        cycle=profile.current_cycle,
        is_completed=True,
        amrap_reps=int(amrap_reps),
        amrap_weight=float(amrap_weight),
    )
    if date is not None:
        fields["date"] = date
    session = WorkoutSession(**fields)

    return advance_profile(profile, lift, increments), session
