"""
Tests for JSON serialization, settings text parsing and the file store.
"""

import json

import pytest

from iron_five.core.models import AccessoryExercise, Lift, LifterProfile, Template, WorkoutSession
from iron_five.io.program_store import ProgramStore, get_default_data_dir
from iron_five.io.serializers import (
    ValidationError,
    dict_to_lifter_profile,
    dict_to_workout_session,
    json_line_to_session,
    lifter_profile_to_dict,
    parse_one_rep_max,
    parse_training_max,
    session_to_json_line,
)


def _session(lift: Lift, date: str, reps: int = 0, weight: float = 0.0) -> WorkoutSession:
    return WorkoutSession(
        main_lift=lift, week=1, cycle=1, date=date, amrap_reps=reps, amrap_weight=weight
    )


# ===========================================================================
# Text parsing
# ===========================================================================

class TestParseSettingsText:

    def test_one_rep_max(self):
        assert parse_one_rep_max("315") == 315.0
        assert parse_one_rep_max(" 227.5 ") == 227.5

    @pytest.mark.parametrize("text", ["", "abc", "-20", "nan", "inf", None])
    def test_one_rep_max_falls_back_to_zero(self, text):
        assert parse_one_rep_max(text) == 0.0

    def test_training_max_is_fraction(self):
        assert parse_training_max("85") == pytest.approx(0.85)
        assert parse_training_max("85%") == pytest.approx(0.85)
        assert parse_training_max("100") == pytest.approx(1.0)

    @pytest.mark.parametrize("text", ["", "ninety", "0", "150", "-5", None])
    def test_training_max_falls_back_to_ninety(self, text):
        assert parse_training_max(text) == pytest.approx(0.90)


# ===========================================================================
# Serializers
# ===========================================================================

class TestProfileSerialization:

    def test_template_stored_as_code(self):
        profile = LifterProfile(squat_1rm=300, selected_template=Template.SSL, current_week=3)
        data = lifter_profile_to_dict(profile)
        assert data["selected_template"] == 2
        assert dict_to_lifter_profile(data) == profile

    def test_unknown_template_decodes_to_fsl(self):
        profile = dict_to_lifter_profile({"squat_1rm": 300, "selected_template": 17})
        assert profile.selected_template is Template.FSL

    def test_invalid_profile(self):
        with pytest.raises(ValidationError):
            dict_to_lifter_profile({"current_week": 6})
        with pytest.raises(ValidationError):
            dict_to_lifter_profile({"squat_1rm": "heavy"})


class TestSessionSerialization:

    def test_json_line(self):
        session = _session(Lift.DEADLIFT, "2026-01-07T18:00:00", reps=7, weight=315.0)
        line = session_to_json_line(session)
        assert "\n" not in line
        data = json.loads(line)
        assert data["main_lift"] == 2
        assert data["id"] == session.session_id
        assert json_line_to_session(line) == session

    def test_unknown_lift_decodes_to_squat(self):
        session = dict_to_workout_session(
            {"id": "x", "date": "2026-01-07", "main_lift": 9, "week": 1, "cycle": 1}
        )
        assert session.main_lift is Lift.SQUAT
        assert session.amrap_reps == 0

    def test_invalid_json(self):
        with pytest.raises(ValidationError):
            json_line_to_session("{not json")
        with pytest.raises(ValidationError):
            json_line_to_session("[1, 2]")

    def test_invalid_fields(self):
        base = {"id": "x", "date": "2026-01-07", "main_lift": 0, "week": 1, "cycle": 1}
        with pytest.raises(ValidationError):
            dict_to_workout_session({**base, "date": "last tuesday"})
        with pytest.raises(ValidationError):
            dict_to_workout_session({**base, "amrap_reps": -2})
        with pytest.raises(ValidationError):
            dict_to_workout_session({k: v for k, v in base.items() if k != "week"})


# ===========================================================================
# Store
# ===========================================================================

@pytest.fixture
def store(tmp_path):
    s = ProgramStore(tmp_path / "data")
    s.init()
    return s


class TestProgramStoreProfile:

    def test_missing_profile(self, tmp_path):
        store = ProgramStore(tmp_path / "empty")
        assert not store.exists()
        assert store.load_profile() is None

    def test_save_and_load(self, store):
        profile = LifterProfile(squat_1rm=300, bench_1rm=200, current_cycle=3, current_week=2)
        assert store.save_profile(profile)
        assert store.exists()
        assert store.load_profile() == profile

    def test_corrupt_profile_loads_as_none(self, store):
        store.profile_path.write_text("{broken")
        assert store.load_profile() is None

    def test_write_failure_warns(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = ProgramStore(blocker)
        with pytest.warns(UserWarning, match="could not save profile"):
            assert store.save_profile(LifterProfile()) is False
        with pytest.warns(UserWarning, match="could not save session"):
            assert store.insert_session(_session(Lift.SQUAT, "2026-01-05")) is False


class TestProgramStoreSessions:

    def test_empty_history(self, tmp_path):
        assert ProgramStore(tmp_path).list_sessions() == []
        assert ProgramStore(tmp_path).get_latest_session() is None

    def test_insert_and_list_ordering(self, store):
        a = _session(Lift.SQUAT, "2026-01-05T18:00:00")
        b = _session(Lift.BENCH, "2026-01-06T18:00:00")
        c = _session(Lift.DEADLIFT, "2026-01-07T18:00:00")
        for s in (b, c, a):
            assert store.insert_session(s)

        assert store.list_sessions() == [c, b, a]
        assert store.list_sessions(newest_first=False) == [a, b, c]
        assert store.get_latest_session() == c

    def test_same_timestamp_keeps_insertion_order(self, store):
        a = _session(Lift.SQUAT, "2026-01-05")
        b = _session(Lift.BENCH, "2026-01-05")
        store.insert_session(a)
        store.insert_session(b)

        # the record written later is the more recent one
        assert store.list_sessions() == [b, a]
        assert store.list_sessions(newest_first=False) == [a, b]
        assert store.get_latest_session() == b

    def test_delete(self, store):
        a = _session(Lift.SQUAT, "2026-01-05T18:00:00")
        b = _session(Lift.BENCH, "2026-01-06T18:00:00")
        store.insert_session(a)
        store.insert_session(b)

        assert store.delete_session(a.session_id)
        assert store.list_sessions() == [b]
        assert not store.delete_session("no-such-id")

    def test_corrupt_line_reports_line_number(self, store):
        store.insert_session(_session(Lift.SQUAT, "2026-01-05T18:00:00"))
        with open(store.sessions_path, "a") as f:
            f.write("{oops\n")
        with pytest.raises(ValidationError, match="line 2"):
            store.list_sessions()

    def test_blank_lines_skipped(self, store):
        store.insert_session(_session(Lift.SQUAT, "2026-01-05T18:00:00"))
        with open(store.sessions_path, "a") as f:
            f.write("\n\n")
        assert len(store.list_sessions()) == 1


class TestProgramStoreAccessories:

    def test_crud(self, store):
        dips = AccessoryExercise("Dips", target_sets=3, target_reps=10, related_lift=Lift.BENCH)
        lunges = AccessoryExercise("Lunges", target_sets=3, target_reps=8, related_lift=Lift.SQUAT)
        assert store.add_accessory(dips)
        assert store.add_accessory(lunges)

        assert store.list_accessories() == [dips, lunges]
        assert store.list_accessories(Lift.BENCH) == [dips]
        assert store.list_accessories(Lift.OHP) == []

        dips.target_reps = 15
        assert store.update_accessory(dips)
        assert store.list_accessories(Lift.BENCH)[0].target_reps == 15

        assert store.delete_accessory(lunges.accessory_id)
        assert store.list_accessories() == [dips]
        assert not store.delete_accessory(lunges.accessory_id)

    def test_update_unknown_accessory(self, store):
        ghost = AccessoryExercise("Ghost", target_sets=1, target_reps=1, related_lift=Lift.OHP)
        assert not store.update_accessory(ghost)

    def test_corrupt_file_raises(self, store):
        store.accessories_path.write_text('{"name": "Dips"}')
        with pytest.raises(ValidationError):
            store.list_accessories()


class TestDefaultDataDir:

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IRON_FIVE_HOME", str(tmp_path / "custom"))
        assert get_default_data_dir() == tmp_path / "custom"

    def test_home_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("IRON_FIVE_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_default_data_dir() == tmp_path / ".iron-five"
