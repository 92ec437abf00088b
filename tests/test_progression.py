"""
Tests for the week/cycle state machine and lift rotation.

Rotation: Squat → Bench → Deadlift → OHP.  Only the OHP session advances
the week; finishing the deload OHP session starts a new cycle and raises
every 1RM (+10 squat/deadlift, +5 bench/OHP).
"""

from dataclasses import asdict

import pytest

from iron_five.core.models import Lift, LifterProfile, Template, WorkoutSession
from iron_five.core.prescriber import generate_prescription
from iron_five.core.progression import (
    ROTATION,
    advance_profile,
    amrap_outcome,
    finalize_session,
    next_lift,
)


def _profile(week: int = 1, cycle: int = 1) -> LifterProfile:
    return LifterProfile(
        squat_1rm=300,
        bench_1rm=200,
        deadlift_1rm=400,
        ohp_1rm=135,
        training_max_percentage=0.90,
        current_cycle=cycle,
        current_week=week,
        selected_template=Template.BBB,
    )


def _session(lift: Lift, date: str) -> WorkoutSession:
    return WorkoutSession(main_lift=lift, week=1, cycle=1, date=date)


# ===========================================================================
# State machine
# ===========================================================================

class TestAdvanceProfile:

    @pytest.mark.parametrize("lift", [Lift.SQUAT, Lift.BENCH, Lift.DEADLIFT])
    def test_non_final_lift_keeps_state(self, lift):
        for week in (1, 2, 3, 4):
            before = _profile(week)
            after = advance_profile(before, lift)
            assert asdict(after) == asdict(before)

    @pytest.mark.parametrize("week", [1, 2, 3])
    def test_ohp_advances_week(self, week):
        after = advance_profile(_profile(week), Lift.OHP)
        assert after.current_week == week + 1
        assert after.current_cycle == 1
        assert after.squat_1rm == 300

    def test_ohp_deload_starts_new_cycle(self):
        after = advance_profile(_profile(week=4, cycle=1), Lift.OHP)
        assert after.current_week == 1
        assert after.current_cycle == 2
        # +10 lower body, +5 upper body
        assert after.squat_1rm == 310
        assert after.bench_1rm == 205
        assert after.deadlift_1rm == 410
        assert after.ohp_1rm == 140
        assert after.training_max_percentage == 0.90
        assert after.selected_template is Template.BBB

    def test_custom_increments(self):
        after = advance_profile(
            _profile(week=4), Lift.OHP, {"squat": 5, "bench": 2.5, "deadlift": 5, "ohp": 2.5}
        )
        assert (after.squat_1rm, after.bench_1rm, after.deadlift_1rm, after.ohp_1rm) == (
            305, 202.5, 405, 137.5,
        )

    def test_input_profile_untouched(self):
        before = _profile(week=4)
        snapshot = asdict(before)
        after = advance_profile(before, Lift.OHP)
        assert asdict(before) == snapshot
        assert after is not before

    def test_full_cycle(self):
        profile = _profile()
        for _ in range(4):
            for lift in ROTATION:
                profile = advance_profile(profile, lift)
        # 4 weeks × 4 lifts → cycle 2, week 1
        assert (profile.current_cycle, profile.current_week) == (2, 1)
        assert profile.squat_1rm == 310


# ===========================================================================
# Finalize
# ===========================================================================

class TestFinalizeSession:

    def test_record_carries_pre_update_position(self):
        new_profile, session = finalize_session(
            Lift.OHP, _profile(week=4, cycle=3), 0, 0.0, date="2026-03-02T18:00:00"
        )
        assert (session.week, session.cycle) == (4, 3)
        assert (new_profile.current_week, new_profile.current_cycle) == (1, 4)
        assert session.main_lift is Lift.OHP
        assert session.is_completed
        assert session.date == "2026-03-02T18:00:00"

    def test_amrap_recorded(self):
        _, session = finalize_session(Lift.SQUAT, _profile(), 8, 230.0)
        assert session.amrap_reps == 8
        assert session.amrap_weight == 230.0
        # 230 × (1 + 0.0333 × 8) = 291.272 → 291.3
        assert session.estimated_one_rep_max == pytest.approx(291.3)

    def test_zero_reps_clears_weight(self):
        _, session = finalize_session(Lift.SQUAT, _profile(), 0, 230.0)
        assert session.amrap_reps == 0
        assert session.amrap_weight == 0.0
        assert session.estimated_one_rep_max == 0.0

    def test_squat_session_leaves_profile(self):
        before = _profile(week=2)
        after, _ = finalize_session(Lift.SQUAT, before, 5, 245.0)
        assert asdict(after) == asdict(before)

    def test_sessions_get_unique_ids(self):
        _, a = finalize_session(Lift.SQUAT, _profile(), 5, 230.0)
        _, b = finalize_session(Lift.SQUAT, _profile(), 5, 230.0)
        assert a.session_id != b.session_id

    def test_invalid_date_rejected(self):
        with pytest.raises(ValueError):
            finalize_session(Lift.SQUAT, _profile(), 5, 230.0, date="yesterday")


class TestAmrapOutcome:

    def test_unchecked_amrap_counts_as_zero(self):
        p = generate_prescription(Lift.SQUAT, _profile())
        p.amrap_set.actual_reps = 7
        assert amrap_outcome(p) == (0, 0.0)

    def test_checked_amrap(self):
        p = generate_prescription(Lift.SQUAT, _profile())
        p.amrap_set.actual_reps = 7
        p.amrap_set.is_completed = True
        # TM 270 × .85 = 229.5 → 230
        assert amrap_outcome(p) == (7, 230.0)

    def test_deload_has_no_outcome(self):
        p = generate_prescription(Lift.SQUAT, _profile(week=4))
        for s in p.main:
            s.is_completed = True
            s.actual_reps = 5
        assert amrap_outcome(p) == (0, 0.0)


# ===========================================================================
# Rotation
# ===========================================================================

class TestNextLift:

    def test_no_history_starts_with_squat(self):
        assert next_lift([]) is Lift.SQUAT

    def test_follows_rotation(self):
        assert next_lift([_session(Lift.SQUAT, "2026-01-05T18:00:00")]) is Lift.BENCH
        assert next_lift([_session(Lift.BENCH, "2026-01-06T18:00:00")]) is Lift.DEADLIFT
        assert next_lift([_session(Lift.OHP, "2026-01-08T18:00:00")]) is Lift.SQUAT

    def test_uses_latest_by_date(self):
        sessions = [
            _session(Lift.DEADLIFT, "2026-01-07T18:00:00"),
            _session(Lift.SQUAT, "2026-01-05T18:00:00"),
            _session(Lift.BENCH, "2026-01-06T18:00:00"),
        ]
        assert next_lift(sessions) is Lift.OHP

    def test_same_timestamp_later_entry_wins(self):
        # insertion order: squat then bench, both logged at the same instant
        sessions = [
            _session(Lift.SQUAT, "2026-01-05"),
            _session(Lift.BENCH, "2026-01-05"),
        ]
        assert next_lift(sessions) is Lift.DEADLIFT
