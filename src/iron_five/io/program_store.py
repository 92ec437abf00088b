"""
File-backed storage for the lifter profile, session history and accessories.

Layout of the data directory (default ~/.iron-five):

    profile.json       single LifterProfile
    sessions.jsonl     one WorkoutSession per line, append-only
    accessories.json   list of AccessoryExercise records

Writes are fire-and-forget from the engine's point of view: an OSError while
saving or deleting is reported with warnings.warn and otherwise ignored, so
the in-memory state stays authoritative.  Corrupt session lines raise
ValidationError on read.
"""

import json
import os
import warnings
from pathlib import Path

from ..core.models import AccessoryExercise, Lift, LifterProfile, WorkoutSession
from .serializers import (
    ValidationError,
    accessory_to_dict,
    dict_to_accessory,
    dict_to_lifter_profile,
    json_line_to_session,
    lifter_profile_to_dict,
    session_to_json_line,
)


class ProgramStore:
    """
    Manages the profile, session and accessory files in one directory.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding profile.json, sessions.jsonl and
                accessories.json
        """
        self.data_dir = Path(data_dir)
        self.profile_path = self.data_dir / "profile.json"
        self.sessions_path = self.data_dir / "sessions.jsonl"
        self.accessories_path = self.data_dir / "accessories.json"

    def exists(self) -> bool:
        """Check if a profile has been created."""
        return self.profile_path.exists()

    def init(self) -> None:
        """Create the data directory and an empty history file if needed."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.sessions_path.exists():
            self.sessions_path.touch()

    # ── Profile ─────────────────────────────────────────────────────────────

    def load_profile(self) -> LifterProfile | None:
        """
        Load the lifter profile.

        Returns:
            LifterProfile if the file exists and is valid, None otherwise
        """
        if not self.profile_path.exists():
            return None
        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
            return dict_to_lifter_profile(data)
        except (OSError, json.JSONDecodeError, ValidationError, AttributeError):
            return None

    def save_profile(self, profile: LifterProfile) -> bool:
        """
        Save the lifter profile.

        Returns:
            True if written; False if the write failed (a warning is issued)
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self._write_json(self.profile_path, lifter_profile_to_dict(profile))
        except OSError as e:
            warnings.warn(f"iron-five: could not save profile ({e})", stacklevel=2)
            return False
        return True

    # ── Sessions ────────────────────────────────────────────────────────────

    def insert_session(self, session: WorkoutSession) -> bool:
        """
        Append a finalized session to the history file.

        Returns:
            True if written; False if the write failed (a warning is issued)
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.sessions_path, "a") as f:
                f.write(session_to_json_line(session) + "\n")
        except OSError as e:
            warnings.warn(f"iron-five: could not save session ({e})", stacklevel=2)
            return False
        return True

    def list_sessions(self, newest_first: bool = True) -> list[WorkoutSession]:
        """
        Load all sessions ordered by date.

        Sessions sharing a timestamp keep insertion order, so the one written
        later counts as the more recent.

        Returns:
            Sessions, newest first by default; [] if there is no history

        Raises:
            ValidationError: If a line in the history file is invalid
        """
        if not self.sessions_path.exists():
            return []

        keyed: list[tuple[str, int, WorkoutSession]] = []
        with open(self.sessions_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    session = json_line_to_session(line)
                except ValidationError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.sessions_path}: {e}"
                    ) from e
                keyed.append((session.date, line_num, session))

        keyed.sort(key=lambda k: (k[0], k[1]), reverse=newest_first)
        return [s for _, _, s in keyed]

    def get_latest_session(self) -> WorkoutSession | None:
        sessions = self.list_sessions(newest_first=True)
        return sessions[0] if sessions else None

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session by id.

        Returns:
            True if a session was removed; False if no session had that id or
            the rewrite failed (a warning is issued)
        """
        sessions = self.list_sessions(newest_first=False)
        kept = [s for s in sessions if s.session_id != session_id]
        if len(kept) == len(sessions):
            return False
        try:
            self._write_lines(self.sessions_path, [session_to_json_line(s) for s in kept])
        except OSError as e:
            warnings.warn(f"iron-five: could not delete session ({e})", stacklevel=2)
            return False
        return True

    # ── Accessories ─────────────────────────────────────────────────────────

    def list_accessories(self, lift: Lift | None = None) -> list[AccessoryExercise]:
        """
        Load accessories, optionally only those tied to one lift.

        Raises:
            ValidationError: If the accessories file is invalid
        """
        if not self.accessories_path.exists():
            return []
        try:
            with open(self.accessories_path, "r") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.accessories_path}: {e}") from e
        if not isinstance(raw, list):
            raise ValidationError(f"Expected a list in {self.accessories_path}")

        accessories = [dict_to_accessory(d) for d in raw]
        if lift is not None:
            accessories = [a for a in accessories if a.related_lift == lift]
        return accessories

    def add_accessory(self, accessory: AccessoryExercise) -> bool:
        accessories = self.list_accessories()
        accessories.append(accessory)
        return self._save_accessories(accessories)

    def update_accessory(self, accessory: AccessoryExercise) -> bool:
        """Replace the accessory with the same id; False if it is not stored."""
        accessories = self.list_accessories()
        for i, existing in enumerate(accessories):
            if existing.accessory_id == accessory.accessory_id:
                accessories[i] = accessory
                return self._save_accessories(accessories)
        return False

    def delete_accessory(self, accessory_id: str) -> bool:
        accessories = self.list_accessories()
        kept = [a for a in accessories if a.accessory_id != accessory_id]
        if len(kept) == len(accessories):
            return False
        return self._save_accessories(kept)

    def _save_accessories(self, accessories: list[AccessoryExercise]) -> bool:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self._write_json(self.accessories_path, [accessory_to_dict(a) for a in accessories])
        except OSError as e:
            warnings.warn(f"iron-five: could not save accessories ({e})", stacklevel=2)
            return False
        return True

    # ── File helpers ────────────────────────────────────────────────────────

    @staticmethod
    def _write_json(path: Path, data: object) -> None:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def _write_lines(path: Path, lines: list[str]) -> None:
        with open(path, "w") as f:
            for line in lines:
                f.write(line + "\n")


def get_default_data_dir() -> Path:
    """
    Return the default data directory.

    IRON_FIVE_HOME overrides the default ~/.iron-five.
    """
    override = os.environ.get("IRON_FIVE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".iron-five"


def get_default_store() -> ProgramStore:
    return ProgramStore(get_default_data_dir())
