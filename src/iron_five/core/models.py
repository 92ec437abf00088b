"""
Data models for iron-five.

Lifts and templates are tagged variants with a stable integer code used in
persisted records.  Unknown codes decode to a documented default instead of
failing, so a corrupted or future record never blocks loading.
"""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Iterator

from .config import DEFAULT_TM_PERCENTAGE, EPLEY_COEFFICIENT, WEEKS_PER_CYCLE
from .plates import round_to_increment


class Lift(IntEnum):
    """Main lift; the integer value is the persisted code."""

    SQUAT = 0
    BENCH = 1
    DEADLIFT = 2
    OHP = 3

    @property
    def display_name(self) -> str:
        return _LIFT_NAMES[self]

    @property
    def key(self) -> str:
        """Lowercase identifier used in config files and the CLI."""
        return self.name.lower()

    @classmethod
    def from_code(cls, code: object) -> "Lift":
        """
        Decode a stored lift code.

        Accepts the integer code or the lowercase key ("bench").  Anything
        else decodes to SQUAT.
        """
        if isinstance(code, str):
            key = code.strip().lower()
            for lift in cls:
                if lift.key == key:
                    return lift
            if key.lstrip("-").isdigit():
                code = int(key)
            else:
                return cls.SQUAT
        try:
            return cls(code)
        except (ValueError, TypeError):
            return cls.SQUAT


_LIFT_NAMES: dict[Lift, str] = {
    Lift.SQUAT: "Squat",
    Lift.BENCH: "Bench Press",
    Lift.DEADLIFT: "Deadlift",
    Lift.OHP: "Overhead Press",
}


class Template(IntEnum):
    """Supplemental-volume template; the integer value is the persisted code."""

    FSL = 0
    BBB = 1
    SSL = 2
    BBS = 3
    WIDOWMAKER = 4

    @property
    def display_name(self) -> str:
        return _TEMPLATE_NAMES[self]

    @classmethod
    def from_code(cls, code: object) -> "Template":
        """Decode a stored template code or name; unknown values decode to FSL."""
        if isinstance(code, str):
            key = code.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.lstrip("-").isdigit():
                code = int(key)
            else:
                return cls.FSL
        try:
            return cls(code)
        except (ValueError, TypeError):
            return cls.FSL


_TEMPLATE_NAMES: dict[Template, str] = {
    Template.FSL: "First Set Last",
    Template.BBB: "Boring But Big",
    Template.SSL: "Second Set Last",
    Template.BBS: "Boring But Strong",
    Template.WIDOWMAKER: "Widowmaker",
}


class SetCategory(str, Enum):
    WARMUP = "warmup"
    MAIN = "main"
    SUPPLEMENTAL = "supplemental"
    ACCESSORY = "accessory"


@dataclass
class LifterProfile:
    """
    The lifter's program state.

    One-rep maxes are tracked per lift.  The training max applied to every
    lift is ``one_rep_max × training_max_percentage``.

    Treated as an owned value: progression returns a new profile instead of
    mutating the one it was given.
    """

    squat_1rm: float = 0.0
    bench_1rm: float = 0.0
    deadlift_1rm: float = 0.0
    ohp_1rm: float = 0.0
    training_max_percentage: float = DEFAULT_TM_PERCENTAGE
    current_cycle: int = 1
    current_week: int = 1
    selected_template: Template = Template.FSL

    def __post_init__(self) -> None:
        """Validate profile data."""
        for lift in Lift:
            if self.one_rep_max(lift) < 0:
                raise ValueError(f"{lift.key}_1rm must be non-negative")
        if not 0 < self.training_max_percentage <= 1:
            raise ValueError(
                f"training_max_percentage must be in (0, 1], got {self.training_max_percentage}"
            )
        if self.current_cycle < 1:
            raise ValueError("current_cycle must be at least 1")
        if not 1 <= self.current_week <= WEEKS_PER_CYCLE:
            raise ValueError(
                f"current_week must be between 1 and {WEEKS_PER_CYCLE}, got {self.current_week}"
            )
        self.selected_template = Template.from_code(self.selected_template)

    def one_rep_max(self, lift: Lift) -> float:
        return getattr(self, f"{lift.key}_1rm")

    def training_max(self, lift: Lift) -> float:
        return self.one_rep_max(lift) * self.training_max_percentage


@dataclass
class AccessoryExercise:
    """User-defined assistance work attached to one main lift."""

    name: str
    target_sets: int
    target_reps: int
    related_lift: Lift
    accessory_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Accessory name must be non-empty")
        if self.target_sets < 1:
            raise ValueError("target_sets must be at least 1")
        if self.target_reps < 1:
            raise ValueError("target_reps must be at least 1")
        self.related_lift = Lift.from_code(self.related_lift)


@dataclass
class PrescribedSet:
    """
    A single prescribed set for the current session.

    ``reps`` is a label rather than a number: "5+" marks an AMRAP set and
    accessory sets carry the exercise name, e.g. "10 (Dips)".
    """

    weight: float
    reps: str
    category: SetCategory
    actual_reps: int = 0
    is_completed: bool = False

    @property
    def is_amrap(self) -> bool:
        return self.reps.endswith("+")

    @property
    def target_reps(self) -> int:
        """Leading integer of the rep label (0 if there is none)."""
        m = re.match(r"\s*(\d+)", self.reps)
        return int(m.group(1)) if m else 0


@dataclass
class Prescription:
    """Ordered set blocks for one session."""

    lift: Lift
    week: int
    training_max: float
    warmup: list[PrescribedSet] = field(default_factory=list)
    main: list[PrescribedSet] = field(default_factory=list)
    supplemental: list[PrescribedSet] = field(default_factory=list)
    accessory_sets: list[PrescribedSet] = field(default_factory=list)

    def block(self, category: SetCategory) -> list[PrescribedSet]:
        return {
            SetCategory.WARMUP: self.warmup,
            SetCategory.MAIN: self.main,
            SetCategory.SUPPLEMENTAL: self.supplemental,
            SetCategory.ACCESSORY: self.accessory_sets,
        }[category]

    def all_sets(self) -> Iterator[PrescribedSet]:
        """Iterate every set: warmup → main → supplemental → accessory."""
        for category in SetCategory:
            yield from self.block(category)

    @property
    def amrap_set(self) -> PrescribedSet | None:
        """The last AMRAP set of the main block, if the week has one."""
        for s in reversed(self.main):
            if s.is_amrap:
                return s
        return None


def estimated_one_rep_max(weight: float, reps: int) -> float:
    """
    Epley estimate: weight × (1 + 0.0333 × reps), to one decimal.

    Half-way values round away from zero.  Returns 0 when no reps were logged.
    """
    if reps <= 0:
        return 0.0
    return round_to_increment(weight * (1 + EPLEY_COEFFICIENT * reps), 0.1)


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="microseconds")


@dataclass(frozen=True)
class WorkoutSession:
    """
    A finalized session record.

    Immutable once created; history is append-only and deletion is a store
    operation.
    """

    main_lift: Lift
    week: int
    cycle: int
    date: str = field(default_factory=_now_iso)  # ISO datetime
    is_completed: bool = True
    amrap_reps: int = 0
    amrap_weight: float = 0.0
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        """Validate session data."""
        try:
            datetime.fromisoformat(self.date)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid session date: {self.date!r}") from e
        if self.amrap_reps < 0:
            raise ValueError("amrap_reps must be non-negative")
        if self.amrap_weight < 0:
            raise ValueError("amrap_weight must be non-negative")
        object.__setattr__(self, "main_lift", Lift.from_code(self.main_lift))

    @property
    def estimated_one_rep_max(self) -> float:
        return estimated_one_rep_max(self.amrap_weight, self.amrap_reps)

    @property
    def day(self) -> str:
        """Date part (YYYY-MM-DD) of the session timestamp."""
        return self.date[:10]
