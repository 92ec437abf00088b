"""
JSON serialization for program data models.

Handles conversion between dataclasses and JSON-compatible dicts, plus the
forgiving parsers used for text typed into the settings screen.
Lifts and templates are stored as their integer codes.
"""

import json
from datetime import datetime
from typing import Any

from ..core.config import DEFAULT_TM_PERCENT_TEXT
from ..core.models import AccessoryExercise, Lift, LifterProfile, Template, WorkoutSession


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_timestamp(value: Any) -> str:
    """
    Validate an ISO date or datetime string.

    Raises:
        ValidationError: If the value is not ISO formatted
    """
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r}")
    try:
        datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}. Expected ISO format") from e
    return value


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a non-negative number.

    Raises:
        ValidationError: If value is negative or not numeric
    """
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


# ---------------------------------------------------------------------------
# Text input parsing
# ---------------------------------------------------------------------------


def parse_one_rep_max(text: str | None) -> float:
    """
    Parse a one-rep max typed by the user.

    Unparseable or negative input yields 0 rather than an error.
    """
    try:
        value = float(str(text).strip())
    except (TypeError, ValueError):
        return 0.0
    if value != value or value < 0 or value == float("inf"):  # NaN / negative / inf
        return 0.0
    return value


def parse_training_max(text: str | None) -> float:
    """
    Parse a training-max percentage typed as a whole percent ("85").

    Returns the fraction (0.85).  Unparseable or out-of-range input falls back
    to 90%.
    """
    try:
        percent = float(str(text).strip().rstrip("%"))
    except (TypeError, ValueError):
        percent = DEFAULT_TM_PERCENT_TEXT
    if not 0 < percent <= 100:
        percent = DEFAULT_TM_PERCENT_TEXT
    return percent / 100


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def lifter_profile_to_dict(profile: LifterProfile) -> dict[str, Any]:
    return {
        "squat_1rm": profile.squat_1rm,
        "bench_1rm": profile.bench_1rm,
        "deadlift_1rm": profile.deadlift_1rm,
        "ohp_1rm": profile.ohp_1rm,
        "training_max_percentage": profile.training_max_percentage,
        "current_cycle": profile.current_cycle,
        "current_week": profile.current_week,
        "selected_template": int(profile.selected_template),
    }


def dict_to_lifter_profile(data: dict[str, Any]) -> LifterProfile:
    """
    Convert dict to LifterProfile.

    An unknown template code decodes to FSL.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return LifterProfile(
            squat_1rm=float(data.get("squat_1rm", 0.0)),
            bench_1rm=float(data.get("bench_1rm", 0.0)),
            deadlift_1rm=float(data.get("deadlift_1rm", 0.0)),
            ohp_1rm=float(data.get("ohp_1rm", 0.0)),
            training_max_percentage=float(data.get("training_max_percentage", 0.90)),
            current_cycle=int(data.get("current_cycle", 1)),
            current_week=int(data.get("current_week", 1)),
            selected_template=Template.from_code(data.get("selected_template", 0)),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid profile: {e}") from e


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def workout_session_to_dict(session: WorkoutSession) -> dict[str, Any]:
    return {
        "id": session.session_id,
        "date": session.date,
        "main_lift": int(session.main_lift),
        "week": session.week,
        "cycle": session.cycle,
        "is_completed": session.is_completed,
        "amrap_reps": session.amrap_reps,
        "amrap_weight": session.amrap_weight,
    }


def dict_to_workout_session(data: dict[str, Any]) -> WorkoutSession:
    """
    Convert dict to WorkoutSession.

    An unknown lift code decodes to squat.

    Raises:
        ValidationError: If data is invalid
    """
    validate_timestamp(data.get("date"))
    validate_non_negative(data.get("amrap_reps", 0), "amrap_reps")
    validate_non_negative(data.get("amrap_weight", 0), "amrap_weight")

    try:
        return WorkoutSession(
            session_id=str(data["id"]),
            date=data["date"],
            main_lift=Lift.from_code(data.get("main_lift", 0)),
            week=int(data["week"]),
            cycle=int(data["cycle"]),
            is_completed=bool(data.get("is_completed", True)),
            amrap_reps=int(data.get("amrap_reps", 0)),
            amrap_weight=float(data.get("amrap_weight", 0.0)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid session record: {e}") from e


def session_to_json_line(session: WorkoutSession) -> str:
    """Serialize a session to a single JSON line (no trailing newline)."""
    return json.dumps(workout_session_to_dict(session), separators=(",", ":"))


def json_line_to_session(line: str) -> WorkoutSession:
    """
    Deserialize a JSON line to a WorkoutSession.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object, got {type(data).__name__}")
    return dict_to_workout_session(data)


# ---------------------------------------------------------------------------
# Accessories
# ---------------------------------------------------------------------------


def accessory_to_dict(accessory: AccessoryExercise) -> dict[str, Any]:
    return {
        "id": accessory.accessory_id,
        "name": accessory.name,
        "target_sets": accessory.target_sets,
        "target_reps": accessory.target_reps,
        "related_lift": int(accessory.related_lift),
    }


def dict_to_accessory(data: dict[str, Any]) -> AccessoryExercise:
    """
    Convert dict to AccessoryExercise.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return AccessoryExercise(
            accessory_id=str(data["id"]),
            name=str(data["name"]),
            target_sets=int(data["target_sets"]),
            target_reps=int(data["target_reps"]),
            related_lift=Lift.from_code(data.get("related_lift", 0)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid accessory record: {e}") from e
