"""
Session prescription for the 5/3/1 program.

Maps (lift, profile, accessories) to the ordered set blocks of one session:

  warmup        40/50/60% TM × 5/5/3, every week
  main          week table (5s, 3s, 5/3/1, deload)
  supplemental  template shape; none on deload
  accessory     user accessories for this lift, zero-weight placeholders

Every loaded weight is rounded with round_to_increment before it is attached
to a set.  The function is total: a week outside 1..4 yields the single
fallback main set rather than an error.
"""

from typing import Iterable

from .config import (
    BBB_PERCENTAGE,
    DELOAD_WEEK,
    FALLBACK_SCHEME,
    MAIN_SCHEMES,
    ROUNDING_INCREMENT,
    SUPPLEMENTAL_SHAPES,
    WARMUP_SCHEME,
    WEEK_LABELS,
    SetScheme,
)
from .models import (
    AccessoryExercise,
    Lift,
    LifterProfile,
    PrescribedSet,
    Prescription,
    SetCategory,
    Template,
)
from .plates import round_to_increment


def main_set_scheme(week: int) -> tuple[SetScheme, ...]:
    """Main-set percentages and rep labels for a week (fallback outside 1..4)."""
    return MAIN_SCHEMES.get(week, FALLBACK_SCHEME)


def week_label(week: int) -> str:
    return WEEK_LABELS.get(week, f"Week {week}")


def supplemental_percentages(week: int) -> tuple[float, float]:
    """
    Return the (FSL, SSL) baseline percentages for a week.

    FSL is the first main-set percentage; SSL the second, falling back to
    FSL when the week has no second working set worth repeating (deload or
    the fallback week).
    """
    scheme = main_set_scheme(week)
    fsl = scheme[0].percentage
    if week == DELOAD_WEEK or len(scheme) < 2:
        return fsl, fsl
    return fsl, scheme[1].percentage


def _loaded_sets(
    training_max: float,
    scheme: Iterable[SetScheme],
    category: SetCategory,
    increment: float,
) -> list[PrescribedSet]:
    return [
        PrescribedSet(
            weight=round_to_increment(training_max * s.percentage, increment),
            reps=s.reps,
            category=category,
        )
        for s in scheme
    ]


def supplemental_sets(
    template: Template,
    week: int,
    training_max: float,
    increment: float = ROUNDING_INCREMENT,
) -> list[PrescribedSet]:
    """
    Build the supplemental block for a template.

    FSL 5×5 @ FSL%, BBB 5×10 @ 50% TM, SSL 5×5 @ SSL%, BBS 10×5 @ FSL%,
    Widowmaker 1×20 @ FSL%.  Deload week returns an empty list.
    """
    if week == DELOAD_WEEK:
        return []

    shape = SUPPLEMENTAL_SHAPES[template.name]
    fsl_pct, ssl_pct = supplemental_percentages(week)
    pct = {"fsl": fsl_pct, "ssl": ssl_pct, "bbb": BBB_PERCENTAGE}[shape.baseline]
    weight = round_to_increment(training_max * pct, increment)

    return [
        PrescribedSet(weight=weight, reps=str(shape.reps), category=SetCategory.SUPPLEMENTAL)
        for _ in range(shape.sets)
    ]


def accessory_sets(lift: Lift, accessories: Iterable[AccessoryExercise]) -> list[PrescribedSet]:
    """Zero-weight placeholder sets for every accessory tied to this lift."""
    sets: list[PrescribedSet] = []
    for accessory in accessories:
        if accessory.related_lift != lift:
            continue
        for _ in range(accessory.target_sets):
            sets.append(
                PrescribedSet(
                    weight=0.0,
                    reps=f"{accessory.target_reps} ({accessory.name})",
                    category=SetCategory.ACCESSORY,
                )
            )
    return sets


def generate_prescription(
    lift: Lift,
    profile: LifterProfile,
    accessories: Iterable[AccessoryExercise] = (),
    increment: float = ROUNDING_INCREMENT,
) -> Prescription:
    """
    Generate the full prescription for one session.

    Args:
        lift: Main lift of the session
        profile: Current program state (1RMs, TM %, week, template)
        accessories: All user accessories; filtered by related lift here
        increment: Weight rounding step

    Returns:
        Prescription with warmup, main, supplemental and accessory blocks
    """
    week = profile.current_week
    tm = profile.training_max(lift)

    return Prescription(
        lift=lift,
        week=week,
        training_max=tm,
        warmup=_loaded_sets(tm, WARMUP_SCHEME, SetCategory.WARMUP, increment),
        main=_loaded_sets(tm, main_set_scheme(week), SetCategory.MAIN, increment),
        supplemental=supplemental_sets(profile.selected_template, week, tm, increment),
        accessory_sets=accessory_sets(lift, accessories),
    )
