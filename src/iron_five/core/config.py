"""
Configuration constants for the 5/3/1 program engine.

All adjustable parameters are centralized here for easy tuning.
Equipment, rest and progression values can be overridden per user through
program.yaml (see core/engine/config_loader.py).
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# TRAINING MAX
# =============================================================================

DEFAULT_TM_PERCENTAGE: Final[float] = 0.90  # Training max as fraction of 1RM
DEFAULT_TM_PERCENT_TEXT: Final[float] = 90.0  # Settings fallback when TM text is unparseable

# =============================================================================
# WEEK STRUCTURE
# =============================================================================

WEEKS_PER_CYCLE: Final[int] = 4
DELOAD_WEEK: Final[int] = 4


@dataclass(frozen=True)
class SetScheme:
    """One prescribed set expressed relative to the training max."""

    percentage: float  # Fraction of training max
    reps: str          # Rep label; trailing "+" marks an AMRAP set


WARMUP_SCHEME: Final[tuple[SetScheme, ...]] = (
    SetScheme(0.40, "5"),
    SetScheme(0.50, "5"),
    SetScheme(0.60, "3"),
)

MAIN_SCHEMES: Final[dict[int, tuple[SetScheme, ...]]] = {
    1: (  # 5s week
        SetScheme(0.65, "5"),
        SetScheme(0.75, "5"),
        SetScheme(0.85, "5+"),
    ),
    2: (  # 3s week
        SetScheme(0.70, "3"),
        SetScheme(0.80, "3"),
        SetScheme(0.90, "3+"),
    ),
    3: (  # 5/3/1 week
        SetScheme(0.75, "5"),
        SetScheme(0.85, "3"),
        SetScheme(0.95, "1+"),
    ),
    4: (  # Deload
        SetScheme(0.40, "5"),
        SetScheme(0.50, "5"),
        SetScheme(0.60, "5"),
    ),
}

# Used for any week outside 1..4; unreachable while the profile invariant holds
FALLBACK_SCHEME: Final[tuple[SetScheme, ...]] = (SetScheme(0.65, "5"),)

WEEK_LABELS: Final[dict[int, str]] = {
    1: "5s",
    2: "3s",
    3: "5/3/1",
    4: "Deload",
}

# =============================================================================
# SUPPLEMENTAL TEMPLATES
# =============================================================================

BBB_PERCENTAGE: Final[float] = 0.50  # Boring But Big works off a fixed 50% TM


@dataclass(frozen=True)
class SupplementalShape:
    """Set/rep shape of a supplemental template."""

    sets: int
    reps: int
    baseline: str  # "fsl" | "ssl" | "bbb"


# Keyed by template name (see models.Template)
SUPPLEMENTAL_SHAPES: Final[dict[str, SupplementalShape]] = {
    "FSL": SupplementalShape(sets=5, reps=5, baseline="fsl"),
    "BBB": SupplementalShape(sets=5, reps=10, baseline="bbb"),
    "SSL": SupplementalShape(sets=5, reps=5, baseline="ssl"),
    "BBS": SupplementalShape(sets=10, reps=5, baseline="fsl"),
    "WIDOWMAKER": SupplementalShape(sets=1, reps=20, baseline="fsl"),
}

# =============================================================================
# PROGRESSION
# =============================================================================

# 1RM increase applied at the end of each cycle (lower body +10, upper body +5)
CYCLE_INCREMENTS: Final[dict[str, float]] = {
    "squat": 10.0,
    "bench": 5.0,
    "deadlift": 10.0,
    "ohp": 5.0,
}

EPLEY_COEFFICIENT: Final[float] = 0.0333

# =============================================================================
# EQUIPMENT
# =============================================================================

BAR_WEIGHT: Final[float] = 45.0
PLATE_SIZES: Final[tuple[float, ...]] = (45.0, 25.0, 10.0, 5.0, 2.5)  # descending
ROUNDING_INCREMENT: Final[float] = 5.0  # Smallest jump with a pair of 2.5 plates

# =============================================================================
# REST TIMER
# =============================================================================

DEFAULT_REST_SECONDS: Final[int] = 90
TICK_SECONDS: Final[float] = 1.0
CUE_SECONDS: Final[frozenset[int]] = frozenset({3, 2, 1})  # Haptic cue points
